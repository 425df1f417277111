# =========================
# schemafs/main.py
# =========================
from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.concurrency import run_in_threadpool

from schemafs.core.errors import (
    CapabilityUnavailable, ConfigurationError, InvalidArguments, NotInitialized,
    RejectedStatement, SchemaFSError, UnknownTool,
)
from schemafs.deps import settings, tree_service
from schemafs.docs import create_app
from schemafs.routers import health, resources, tools

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)

# Quiet noisy third-party loggers
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("urllib3").setLevel(logging.WARNING)

logger = logging.getLogger(__name__)

STATUS_BY_ERROR = (
    (RejectedStatement, 400),
    (InvalidArguments, 400),
    (CapabilityUnavailable, 400),
    (UnknownTool, 404),
    (ConfigurationError, 500),
    (NotInitialized, 500),
)


def _warm_tree() -> None:
    try:
        tree = tree_service().get_or_build()
        logger.info("Schema ready: %d tables, root=%s", len(tree.tables), tree.root is not None)
    except Exception:
        logger.exception("Failed to initialize schema on startup")


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings().SCHEMA_BUILD_ON_STARTUP:
        await run_in_threadpool(_warm_tree)
    yield


def install_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(SchemaFSError)
    async def schemafs_error(request: Request, exc: SchemaFSError):
        status = 500
        for cls, code in STATUS_BY_ERROR:
            if isinstance(exc, cls):
                status = code
                break
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=status, content={"detail": str(exc), "error": type(exc).__name__})


def build_app(with_lifespan: bool = True) -> FastAPI:
    app = create_app(settings(), lifespan=lifespan if with_lifespan else None)

    # CORS (dev-open; tighten for prod)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    install_error_handlers(app)
    app.include_router(health.router)
    app.include_router(tools.router)
    app.include_router(resources.router)
    return app


app = build_app()


def run() -> None:
    import uvicorn

    s = settings()
    uvicorn.run("schemafs.main:app", host=s.HOST, port=s.PORT)


if __name__ == "__main__":
    run()
