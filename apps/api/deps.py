"""Shared FastAPI dependencies.

The rate provider is created once in the app lifespan and kept on
``app.state``; the transaction repository wraps a service-role Supabase
client.
"""
from zoneinfo import ZoneInfo

from fastapi import Depends, Request
from supabase import Client

from apps.api.core.auth import get_app_settings, get_service_client
from apps.api.core.config import Settings
from apps.api.domains.transactions.repository import TransactionRepository
from packages.market_rates import RateProvider


def get_rate_provider(request: Request) -> RateProvider:
    """The process-wide RateProvider owned by the running app."""
    return request.app.state.rate_provider


def get_repository(
    client: Client = Depends(get_service_client),
    settings: Settings = Depends(get_app_settings),
) -> TransactionRepository:
    return TransactionRepository(client, table=settings.TRANSACTIONS_TABLE)


def get_local_timezone(settings: Settings = Depends(get_app_settings)) -> ZoneInfo:
    """Zone whose midnight starts report periods."""
    return ZoneInfo(settings.TIMEZONE)
