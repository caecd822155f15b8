"""Transaction service — conversion to VND and persistence.

Foreign-unit amounts are converted once, at the snapshot current when the
transaction is recorded; ``original_amount`` keeps the quantity so reports
can re-price savings later.
"""

import structlog

from apps.api.domains.transactions.repository import TransactionRepository
from packages.ledger_parser.categories import Category
from packages.ledger_parser.models import ParsedTransaction, TransactionKind
from packages.market_rates.snapshot import RateSnapshot
from packages.reporting.models import StoredTransaction

logger = structlog.get_logger()


def build_stored_transaction(
    user_id: str,
    kind: str,
    amount: float,
    rates: RateSnapshot,
    note: str = "",
    currency: str = "VND",
    category: str = "",
) -> StoredTransaction:
    """Convert ``amount`` of ``currency`` to VND and fill storage defaults."""
    kind = getattr(kind, "value", kind)
    currency = getattr(currency, "value", currency) or "VND"
    category = getattr(category, "value", category)
    if not category and kind == TransactionKind.EXPENSE.value:
        category = Category.OTHER.value

    return StoredTransaction(
        user_id=user_id,
        type=kind,
        amount=rates.to_local(amount, currency),
        original_amount=amount,
        note=note,
        category=category,
        currency=currency,
    )


def record_transaction(
    repository: TransactionRepository,
    rates: RateSnapshot,
    user_id: str,
    kind: str,
    amount: float,
    note: str = "",
    currency: str = "VND",
    category: str = "",
) -> StoredTransaction:
    """Convert and store one transaction. Raises PersistenceError on storage failure."""
    tx = build_stored_transaction(
        user_id, kind, amount, rates, note=note, currency=currency, category=category
    )
    stored = repository.create(tx)
    logger.info(
        "transaction_saved",
        user_id=user_id,
        type=tx.type,
        currency=tx.currency,
        amount_vnd=tx.amount,
    )
    return stored


def record_parsed(
    repository: TransactionRepository,
    rates: RateSnapshot,
    user_id: str,
    parsed: ParsedTransaction,
) -> StoredTransaction:
    return record_transaction(
        repository,
        rates,
        user_id,
        parsed.kind,
        parsed.amount,
        note=parsed.note,
        currency=parsed.currency,
        category=parsed.category,
    )
