"""FastAPI app, CORS, background broadcast loops, and route registration."""
import asyncio
import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Callable, Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse

logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)s: %(name)s: %(message)s",
)

from moodpoll.api.state import AppState
from moodpoll.config import BROADCAST_INTERVAL_SEC, FRONTEND_DIR, KEEPALIVE_INTERVAL_SEC

# Import routes after state to avoid circular imports
from moodpoll.api.routes import events, poll, songs

__all__ = ["app", "create_app", "AppState"]

logger = logging.getLogger(__name__)


async def _repeat(interval: float, action: Callable[[], object], name: str) -> None:
    """Background loop: run `action` every `interval` seconds until cancelled."""
    while True:
        await asyncio.sleep(interval)
        try:
            action()
        except Exception as e:
            logger.warning("%s: %s", name, e)


@asynccontextmanager
async def lifespan(app: FastAPI):
    state: AppState = app.state.poll
    tasks = [
        asyncio.create_task(
            _repeat(app.state.broadcast_interval, state.channels.tick, "Periodic broadcast")
        ),
        asyncio.create_task(
            _repeat(app.state.keepalive_interval, state.channels.keep_alive, "Keep-alive")
        ),
    ]
    app.state.background_tasks = tasks
    logger.info(
        "Broadcast loops started (update every %.1fs, keep-alive every %.1fs); %d songs loaded",
        app.state.broadcast_interval,
        app.state.keepalive_interval,
        len(state.catalog),
    )

    yield

    for task in tasks:
        task.cancel()
    await asyncio.gather(*tasks, return_exceptions=True)
    logger.info("Broadcast loops stopped")


async def _invalid_request(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Bad JSON or a non-object body
    logger.warning("Rejected %s %s: %s", request.method, request.url.path, exc.errors())
    return JSONResponse(status_code=400, content={"detail": "Malformed request body"})


async def _unhandled_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


def _frontend_file(frontend_dir: Path, path: str) -> Optional[Path]:
    """Requested asset if it exists inside frontend_dir, else index.html, else None."""
    root = frontend_dir.resolve()
    if path:
        candidate = (root / path).resolve()
        if candidate.is_relative_to(root) and candidate.is_file():
            return candidate
    index = root / "index.html"
    return index if index.is_file() else None


def create_app(
    state: Optional[AppState] = None,
    frontend_dir: Path = FRONTEND_DIR,
    broadcast_interval: float = BROADCAST_INTERVAL_SEC,
    keepalive_interval: float = KEEPALIVE_INTERVAL_SEC,
) -> FastAPI:
    """Build an app around its own state; tests pass a fresh AppState each time."""
    application = FastAPI(
        title="Moodpoll API",
        description="Live mood/pace polling and playlist ranking",
        lifespan=lifespan,
    )
    application.state.poll = state if state is not None else AppState.from_file()
    application.state.broadcast_interval = broadcast_interval
    application.state.keepalive_interval = keepalive_interval
    application.state.background_tasks = []

    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    application.add_exception_handler(RequestValidationError, _invalid_request)
    application.add_exception_handler(Exception, _unhandled_error)

    application.include_router(poll.router, tags=["poll"])
    application.include_router(songs.router, tags=["songs"])
    application.include_router(events.router, tags=["events"])

    # Registered last: any other GET is a static asset or the single-page UI
    @application.get("/{path:path}", include_in_schema=False)
    async def frontend(path: str):
        file = _frontend_file(frontend_dir, path)
        if file is None:
            raise HTTPException(status_code=404, detail="Not found")
        return FileResponse(file)

    return application


app = create_app()
