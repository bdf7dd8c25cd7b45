import logging
import os

from fastapi import FastAPI

from tictactoe.api.routes import router
from tictactoe.lock import get_lock_ttl_ms

__version__ = "0.1.0"

# Configure logging
logging.basicConfig(
    level=os.environ.get("TICTACTOE_LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="tictactoe", version=__version__)
app.include_router(router)


@app.on_event("startup")
async def _startup() -> None:
    logger.info("tictactoe %s starting (lock ttl %sms)", __version__, get_lock_ttl_ms())


@app.get("/info")
async def info() -> dict[str, str]:
    return {"name": "tictactoe", "version": __version__}
