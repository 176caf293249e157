import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlmodel import SQLModel

import src.domain  # noqa: F401  registers tables on SQLModel.metadata
from src.api.error import register_exception_handlers
from src.api.middleware import RequestLoggingMiddleware
from src.api.routes import clients, invoices, line_items, users
from src.api.sentry import init_sentry

logger = logging.getLogger(__name__)


def create_app(config) -> FastAPI:
    """Build the FastAPI application from an ApplicationConfig"""
    logging.basicConfig(
        level=getattr(logging, str(config.LOG_LEVEL).upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    init_sentry(config)

    @asynccontextmanager
    async def lifespan(_: FastAPI):
        logger.info("Starting invoicing service")
        if config.AUTO_CREATE_TABLES:
            from src.depends import engine

            async with engine.begin() as conn:
                await conn.run_sync(SQLModel.metadata.create_all)
        yield
        logger.info("Shutting down invoicing service")

    app = FastAPI(
        title="Invoicing Service",
        version="1.0.0",
        description="Invoices, clients and line items for freelancers and small companies",
        lifespan=lifespan,
    )

    if config.ENABLE_LOGGING_MIDDLEWARE:
        app.add_middleware(RequestLoggingMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS or ["*"],
        allow_credentials=config.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    for router in (users.router, clients.router, invoices.router, line_items.router):
        app.include_router(router, prefix=config.API_PREFIX)

    @app.get("/health", tags=["Health"])
    async def health():
        return {"status": "ok"}

    return app
