# fusion_replay/app.py
import argparse
import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Optional, Set

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .api.deps import get_shared
from .api.routes import router
from .core import config as C
from .core.logging_setup import get_logger, setup_logging
from .core.state import SharedState

setup_logging()
log = get_logger(__name__)

_tick_tasks: Set[asyncio.Task] = set()


def _on_tick_done(task: asyncio.Task):
    _tick_tasks.discard(task)
    if not task.cancelled() and task.exception() is not None:
        log.error("[tick] playback tick failed", exc_info=task.exception())


async def playback_loop(shared: SharedState, period_s: float = C.TICK_MS / 1000.0):
    """
    Fixed-period timer. Each tick is fired without waiting for the previous
    one, so a tick that lands on an unfinished assembly is dropped by the session.
    """
    while True:
        await asyncio.sleep(period_s)
        if not shared.session.cursor.playing:
            continue
        task = asyncio.create_task(shared.session.tick())
        _tick_tasks.add(task)
        task.add_done_callback(_on_tick_done)


@asynccontextmanager
async def lifespan(app: FastAPI):
    shared = get_shared()
    timer: Optional[asyncio.Task] = None
    if C.AUTOTICK:
        timer = asyncio.create_task(playback_loop(shared))
    try:
        yield
    finally:
        if timer is not None:
            timer.cancel()
        shared.session.close()


app = FastAPI(title="Fusion Replay", version=__version__, lifespan=lifespan)

# CORS for the browser renderer (allow all origins; credentials False to keep wildcard)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(router)


def main(argv=None):
    ap = argparse.ArgumentParser(description="Serve multi-sensor recordings for playback")
    ap.add_argument("--host", default="127.0.0.1")
    ap.add_argument("--port", type=int, default=8000)
    ap.add_argument("--log-level", default=None, help="DEBUG/INFO/WARNING/ERROR (default: $LOG_LEVEL or INFO)")
    args = ap.parse_args(argv)

    if args.log_level:
        logging.getLogger().setLevel(args.log_level.upper())

    uvicorn.run(app, host=args.host, port=args.port, log_config=None)


if __name__ == "__main__":
    main()
