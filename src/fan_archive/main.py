"""Main entry point for the Fan Archive application."""

from __future__ import annotations

import logging
import time
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from pathlib import Path

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles

from fan_archive import __version__
from fan_archive.api.v1 import api_router
from fan_archive.core.errors import NotFoundError, register_exception_handlers
from fan_archive.core.settings import settings
from fan_archive.db.session import create_tables
from fan_archive.services.keepalive import KeepAliveWorker

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    logger.info(
        "Starting %s %s (environment=%s, database=%s)",
        settings.app_name,
        __version__,
        settings.environment,
        "configured" if settings.database_url else "missing",
    )
    if settings.auto_create_tables:
        create_tables()
        logger.info("Database tables ensured")

    worker: KeepAliveWorker | None = None
    if settings.keepalive_enabled:
        worker = KeepAliveWorker()
        await worker.start()
    else:
        logger.info("Keep-alive ping disabled")
    app.state.keepalive_worker = worker

    yield

    if worker is not None:
        await worker.stop()
    logger.info("Shutdown complete")


async def log_api_requests(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    """Log `METHOD /api/path STATUS in Nms` for API calls."""
    start = time.perf_counter()
    response = await call_next(request)
    path = request.url.path
    if path.startswith("/api"):
        duration_ms = (time.perf_counter() - start) * 1000
        logger.info(
            "%s %s %s in %.0fms", request.method, path, response.status_code, duration_ms
        )
    return response


def _mount_frontend(app: FastAPI, static_dir: Path) -> None:
    """Serve the built single-page frontend, falling back to index.html."""
    root = static_dir.resolve()
    index_file = root / "index.html"

    @app.get("/{full_path:path}", include_in_schema=False)
    async def serve_frontend(full_path: str) -> FileResponse:
        if full_path == "api" or full_path.startswith("api/"):
            raise NotFoundError("Not found")
        candidate = (root / full_path).resolve()
        if full_path and candidate.is_file() and candidate.is_relative_to(root):
            return FileResponse(candidate)
        if not index_file.is_file():
            raise NotFoundError("Not found")
        return FileResponse(index_file)


def create_app(static_dir: str | Path | None = None) -> FastAPI:
    """Build the FastAPI application with middleware, routers and static mounts."""
    app = FastAPI(
        title="Fan Archive API",
        description="Community archive for fan art, fan fiction and comics",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )
    app.add_middleware(GZipMiddleware)
    app.middleware("http")(log_api_requests)

    register_exception_handlers(app)
    app.include_router(api_router)

    @app.get("/health", tags=["system"])
    async def health_check() -> dict[str, str]:
        """Health check endpoint to verify the service is running."""
        return {"status": "ok", "timestamp": datetime.now(UTC).isoformat()}

    upload_dir = Path(settings.upload_dir)
    upload_dir.mkdir(parents=True, exist_ok=True)
    app.mount("/uploads", StaticFiles(directory=upload_dir), name="uploads")

    frontend_dir = Path(static_dir if static_dir is not None else settings.static_dir)
    if frontend_dir.is_dir():
        _mount_frontend(app, frontend_dir)
    else:
        logger.info("No frontend build at %s; serving the API only", frontend_dir)

    return app


app = create_app()


def run() -> None:
    """Console entry point: serve the application with uvicorn."""
    import uvicorn

    uvicorn.run(
        "fan_archive.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
