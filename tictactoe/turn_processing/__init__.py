"""Turn/action processing helpers.

This package centralizes who may act and in what order the checks run, so every
rejected action fails the same way regardless of the entry point.
"""
