"""FastAPI application factory"""

import logging
import time
from contextlib import asynccontextmanager
import sentry_sdk
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from sqlmodel import SQLModel

from src.api.error import register_error_handlers
from src.api.routes import auth, customers, health, payment_requests, payments, plots, subscriptions
from src.depends import engine
import src.domain  # noqa: F401  registers table metadata

logger = logging.getLogger(__name__)


def create_app(config) -> FastAPI:
    logging.basicConfig(
        level=getattr(logging, str(config.LOG_LEVEL).upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if config.ENABLE_SENTRY and config.DSN_SENTRY:
        sentry_sdk.init(
            dsn=config.DSN_SENTRY,
            environment=config.SENTRY_ENVIRONMENT,
            traces_sample_rate=0.1,
        )
        logger.info(f"Sentry enabled ({config.SENTRY_ENVIRONMENT})")

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if config.AUTO_CREATE_TABLES:
            async with engine.begin() as conn:
                await conn.run_sync(SQLModel.metadata.create_all)
            logger.info("Database tables ensured")
        yield
        await engine.dispose()

    app = FastAPI(title=config.SERVICE_NAME, lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=config.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    if config.ENABLE_LOGGING_MIDDLEWARE:
        @app.middleware("http")
        async def log_requests(request: Request, call_next):
            started = time.perf_counter()
            response = await call_next(request)
            elapsed_ms = (time.perf_counter() - started) * 1000
            logger.info(f"{request.method} {request.url.path} {response.status_code} {elapsed_ms:.1f}ms")
            return response

    register_error_handlers(app)

    for router in (
        health.router,
        auth.admin_router,
        auth.router,
        customers.router,
        payments.router,
        payment_requests.router,
        payment_requests.admin_router,
        subscriptions.router,
        plots.router,
    ):
        app.include_router(router, prefix=config.API_PREFIX)

    return app
