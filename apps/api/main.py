import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from apps.api.routers import health, posts
from core.config import Settings, settings as default_settings
from core.context import AppContext
from core.db import Base
from core.db_wait import wait_for_db
from core.errors import PersistenceError, StorageError
from core.logging import setup_logging
from core import models  # noqa: F401  registers tables on Base.metadata

logger = logging.getLogger("main")


def create_app(settings: Settings | None = None, context: AppContext | None = None) -> FastAPI:
    settings = settings or default_settings
    ctx = context or AppContext.from_settings(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        ctx.file_store.ensure_root()
        wait_for_db(ctx.engine, retries=settings.db_wait_retries, sleep_s=settings.db_wait_sleep_s)
        if settings.db_create_tables:
            Base.metadata.create_all(ctx.engine)
        app.state.context = ctx
        logger.info("Startup complete (env=%s, uploads=%s)", settings.app_env, ctx.file_store.root)
        try:
            yield
        finally:
            ctx.close()
            logger.info("Shutdown complete.")

    app = FastAPI(title=settings.app_name, lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(StorageError)
    async def storage_error_handler(request: Request, exc: StorageError):
        logger.error("%s %s failed: %s", request.method, request.url.path, exc, exc_info=exc)
        return JSONResponse({"detail": str(exc), "code": exc.code}, status_code=500)

    @app.exception_handler(PersistenceError)
    async def persistence_error_handler(request: Request, exc: PersistenceError):
        logger.error("%s %s failed: %s", request.method, request.url.path, exc, exc_info=exc)
        status = 503 if exc.unavailable else 500
        return JSONResponse({"detail": str(exc), "code": exc.code}, status_code=status)

    app.include_router(health.router, tags=["health"])
    app.include_router(posts.router, prefix="/posts", tags=["posts"])

    # directory is created in lifespan
    app.mount(
        ctx.file_store.url_prefix,
        StaticFiles(directory=ctx.file_store.root, check_dir=False),
        name="uploads",
    )

    return app


setup_logging(default_settings.log_level)
app = create_app()
