"""
Todos API — application entry point.
"""

from __future__ import annotations

import asyncio
import logging
import sys
from concurrent.futures import ThreadPoolExecutor

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.ext.asyncio import AsyncEngine

from api.errors import register_error_handlers
from api.middleware import register_middleware
from api.routes import router as todos_router
from auth.jwt import TokenService
from auth.password import PasswordHasher
from auth.routes import router as auth_router
from config.settings import DEFAULT_JWT_SECRET, Settings, config
from database.models import Base
from database.session import build_engine, build_session_factory

logging.basicConfig(
    level=logging.DEBUG if config.debug else logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(name)s — %(message)s",
    stream=sys.stdout,
)
for _noisy in ("sqlalchemy.engine", "asyncio", "uvicorn.access"):
    logging.getLogger(_noisy).setLevel(logging.WARNING)
logger = logging.getLogger(__name__)


def install_worker_pool(workers: int) -> ThreadPoolExecutor:
    """Bound the running loop's default executor, which hashing uses via to_thread."""
    pool = ThreadPoolExecutor(max_workers=workers, thread_name_prefix="todos-worker")
    asyncio.get_running_loop().set_default_executor(pool)
    return pool


def create_app(settings: Settings | None = None, engine: AsyncEngine | None = None) -> FastAPI:
    settings = settings or config
    if engine is None:
        engine = build_engine(settings)

    app = FastAPI(
        title="Todos API",
        version="1.0.0",
        description="Per-user todo lists behind JWT authentication.",
    )

    if settings.jwt_secret == DEFAULT_JWT_SECRET:
        logger.warning("JWT_SECRET not set; using the built-in development secret.")

    # Read once; every request shares these.
    app.state.session_factory = build_session_factory(engine)
    app.state.token_service = TokenService(
        settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        expiry_minutes=settings.jwt_expiry_minutes,
    )
    app.state.password_hasher = PasswordHasher(
        time_cost=settings.argon2_time_cost,
        memory_cost=settings.argon2_memory_cost,
        parallelism=settings.argon2_parallelism,
    )

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_middleware(app, slow_request_ms=settings.slow_request_ms)
    register_error_handlers(app)

    # Routes
    app.include_router(auth_router, prefix="/api/v1/auth")
    app.include_router(todos_router, prefix="/api/v1")

    @app.on_event("startup")
    async def on_startup():
        install_worker_pool(settings.worker_threads)

        if settings.auto_create_tables:
            async with engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
            logger.info("Database tables ensured.")

        logger.info("Application ready to accept requests.")

    @app.on_event("shutdown")
    async def on_shutdown():
        await engine.dispose()

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=config.host,
        port=config.port,
        reload=config.debug,
        log_level="debug" if config.debug else "info",
    )
