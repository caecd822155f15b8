"""Ledger API — FastAPI entry point.

Serves the chat bridge and any other client: records transactions,
builds reports and exposes the cached market rates. The lifespan owns
the process-wide RateProvider and the background loops.
"""

import structlog
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from apps.api.background import start_background_tasks, stop_background_tasks
from apps.api.core.auth import get_app_settings
from apps.api.core.config import settings
from apps.api.core.errors import register_error_handlers
from apps.api.core.logging import request_context_middleware, setup_logging

from apps.api.domains.chat.router import router as chat_router
from apps.api.domains.market.router import router as market_router
from apps.api.domains.reports.router import router as reports_router
from apps.api.domains.transactions.router import router as transactions_router
from apps.api.routers import health
from packages.market_rates import RateProvider

logger = structlog.get_logger()

APP_VERSION = settings.APP_VERSION if settings else "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan — startup/shutdown hooks."""
    config = get_app_settings()
    setup_logging(log_level=config.log_level, json_output=config.json_logs)
    logger.info("app_starting", version=config.APP_VERSION, environment=config.ENVIRONMENT)

    app.state.rate_provider = RateProvider(timeout=config.RATE_SOURCE_TIMEOUT_SECONDS)
    tasks = start_background_tasks(app.state.rate_provider, config)
    yield
    await stop_background_tasks(tasks)
    logger.info("app_stopping")


app = FastAPI(
    title="Ledger API",
    description="Chat-driven bookkeeping: transactions, reports and market rates.",
    version=APP_VERSION,
    lifespan=lifespan,
)

register_error_handlers(app)

app.middleware("http")(request_context_middleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins if settings else ["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(transactions_router, prefix="/api/v1")
app.include_router(reports_router, prefix="/api/v1")
app.include_router(market_router, prefix="/api/v1")
app.include_router(chat_router, prefix="/api/v1")
app.include_router(health.router, prefix="/api/v1")
