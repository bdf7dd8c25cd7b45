from __future__ import annotations

from collections.abc import Sequence

BOARD_CELLS = 9

# Earliest move_count at which a line can be complete (three stones for the
# first player, two for the second).
MIN_MOVES_FOR_OUTCOME = 5

WIN_LINES: tuple[tuple[int, int, int], ...] = (
    (0, 1, 2), (3, 4, 5), (6, 7, 8),  # rows
    (0, 3, 6), (1, 4, 7), (2, 5, 8),  # columns
    (0, 4, 8), (2, 4, 6),  # diagonals
)

Cells = Sequence[str | None]


def empty_board() -> list[str | None]:
    return [None] * BOARD_CELLS


def is_valid_position(position: int) -> bool:
    return 0 <= position < BOARD_CELLS


def is_cell_empty(board: Cells, position: int) -> bool:
    return board[position] is None


def occupied_count(board: Cells) -> int:
    return sum(1 for cell in board if cell is not None)


def is_full(board: Cells) -> bool:
    return all(cell is not None for cell in board)


def has_won(board: Cells, player: str) -> bool:
    """True if `player` holds all three cells of any win line."""

    return winning_line(board, player) is not None


def winning_line(board: Cells, player: str) -> tuple[int, int, int] | None:
    for line in WIN_LINES:
        if all(board[i] == player for i in line):
            return line
    return None


def render(board: Cells, *, marks: dict[str, str] | None = None) -> str:
    """Text grid for logs, e.g. ``X|O|.`` per row."""

    marks = marks or {}
    rows = []
    for start in range(0, BOARD_CELLS, 3):
        row = board[start : start + 3]
        rows.append("|".join("." if c is None else marks.get(c, c[:1]) for c in row))
    return "\n".join(rows)
