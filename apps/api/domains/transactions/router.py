"""Transactions router — record transactions and list known users."""

from fastapi import APIRouter, Depends

from apps.api.core.auth import require_api_key
from apps.api.deps import get_rate_provider, get_repository
from apps.api.domains.transactions.repository import TransactionRepository
from apps.api.domains.transactions.schemas import CreateResponse, TransactionCreate, TransactionOut
from apps.api.domains.transactions.service import record_transaction
from packages.market_rates import RateProvider

router = APIRouter(tags=["transactions"], dependencies=[Depends(require_api_key)])


@router.post("/transactions", response_model=CreateResponse)
def create_transaction(
    payload: TransactionCreate,
    repository: TransactionRepository = Depends(get_repository),
    provider: RateProvider = Depends(get_rate_provider),
):
    """Store a transaction, converting foreign units at the current rates.

    An expense without a category is filed under "khác".
    """
    stored = record_transaction(
        repository,
        provider.current(),
        payload.user_id,
        payload.type,
        payload.amount,
        note=payload.note,
        currency=payload.currency,
        category=payload.category,
    )
    return CreateResponse(
        transaction=TransactionOut(
            id=stored.id,
            user_id=stored.user_id,
            type=stored.type,
            amount=stored.amount,
            original_amount=stored.original_amount,
            note=stored.note,
            category=stored.category,
            currency=stored.currency,
        )
    )


@router.get("/users", response_model=list[str])
def list_users(repository: TransactionRepository = Depends(get_repository)):
    """Distinct ids of every user with at least one transaction."""
    return repository.list_distinct_user_ids()
