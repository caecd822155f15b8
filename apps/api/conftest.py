"""Shared fixtures for API tests: an in-memory transaction store and a wired app."""

from dataclasses import replace
from datetime import datetime, timezone

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from apps.api.core.auth import get_app_settings
from apps.api.core.config import Settings
from apps.api.core.errors import PersistenceError, register_error_handlers
from apps.api.core.logging import request_context_middleware
from apps.api.deps import get_repository
from apps.api.domains.chat.router import router as chat_router
from apps.api.domains.market.router import router as market_router
from apps.api.domains.reports.router import router as reports_router
from apps.api.domains.transactions.router import router as transactions_router
from packages.market_rates import RateProvider, RateSnapshot

TEST_RATES = RateSnapshot(
    usd_vnd=25_000,
    gold_usd=2_000,
    silver_usd=30,
    vn_sjc=8_000_000,
    vn_silver=1_000_000,
    btc_vnd=2_000_000_000,
    fetched_at=datetime(2026, 10, 19, 0, 0, tzinfo=timezone.utc),
)


class InMemoryRepository:
    """Stand-in for TransactionRepository; ``fail_when`` makes creates fail."""

    def __init__(self):
        self.rows = []
        self.fail_when = None
        self.fail_reads = False

    def create(self, tx, now=None):
        if self.fail_when and self.fail_when(tx):
            raise PersistenceError("Could not save transaction")
        stored = replace(
            tx,
            id=len(self.rows) + 1,
            created_at=tx.created_at or now or datetime.now(timezone.utc),
        )
        self.rows.append(stored)
        return stored

    def fetch_by_user_and_period_start(self, user_id, start):
        if self.fail_reads:
            raise PersistenceError("Could not load transactions")
        return [r for r in self.rows if r.user_id == user_id and r.created_at >= start]

    def list_distinct_user_ids(self):
        if self.fail_reads:
            raise PersistenceError("Could not load users")
        return list(dict.fromkeys(r.user_id for r in self.rows))


def make_settings(**overrides) -> Settings:
    values = {
        "SUPABASE_URL": "https://test.supabase.co",
        "SUPABASE_SERVICE_KEY": "test-service-key",
        "API_KEY": "",
    }
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def repository():
    return InMemoryRepository()


@pytest.fixture
def rate_provider():
    return RateProvider(fallback=TEST_RATES)


@pytest.fixture
def api_settings():
    return make_settings()


@pytest.fixture
def api_app(repository, rate_provider, api_settings):
    app = FastAPI()
    register_error_handlers(app)
    app.middleware("http")(request_context_middleware)
    for router in (transactions_router, reports_router, market_router, chat_router):
        app.include_router(router, prefix="/api/v1")
    app.state.rate_provider = rate_provider
    app.dependency_overrides[get_repository] = lambda: repository
    app.dependency_overrides[get_app_settings] = lambda: api_settings
    return app


@pytest.fixture
def client(api_app):
    c = TestClient(api_app, raise_server_exceptions=False)
    yield c
    api_app.dependency_overrides.clear()
