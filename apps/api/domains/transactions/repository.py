"""Transaction store backed by a Supabase (PostgREST) table.

Table layout:
    id SERIAL, user_id TEXT, type TEXT, amount FLOAT (VND), note TEXT,
    category TEXT, created_at TIMESTAMPTZ, currency TEXT,
    original_amount FLOAT

Rows are written once and never updated. Every storage failure surfaces
as PersistenceError.
"""

from datetime import datetime, timezone
from typing import Optional

import structlog
from supabase import Client

from apps.api.core.errors import PersistenceError
from packages.reporting.models import StoredTransaction

logger = structlog.get_logger()

DEFAULT_TABLE = "transactions"
COLUMNS = "id,user_id,type,amount,note,category,created_at,currency,original_amount"


class TransactionRepository:
    """Create and query stored transactions."""

    def __init__(self, client: Client, table: str = DEFAULT_TABLE):
        self.client = client
        self.table = table

    def create(self, tx: StoredTransaction, now: Optional[datetime] = None) -> StoredTransaction:
        """Insert one transaction; ``created_at`` defaults to now (UTC)."""
        created_at = tx.created_at or now or datetime.now(timezone.utc)
        row = {
            "user_id": tx.user_id,
            "type": tx.type,
            "amount": tx.amount,
            "note": tx.note,
            "category": tx.category,
            "currency": tx.currency,
            "original_amount": tx.original_amount,
            "created_at": created_at.isoformat(),
        }
        try:
            result = self.client.table(self.table).insert(row).execute()
        except Exception as e:
            logger.error("transaction_insert_failed", user_id=tx.user_id, error=str(e))
            raise PersistenceError("Could not save transaction") from e

        if result.data:
            return StoredTransaction.from_row(result.data[0])
        return StoredTransaction.from_row({**row, "created_at": created_at})

    def fetch_by_user_and_period_start(self, user_id: str, start: datetime) -> list[StoredTransaction]:
        """All transactions of ``user_id`` created at or after ``start``, oldest first."""
        try:
            result = (
                self.client.table(self.table)
                .select(COLUMNS)
                .eq("user_id", user_id)
                .gte("created_at", start.isoformat())
                .order("created_at")
                .execute()
            )
        except Exception as e:
            logger.error("transaction_query_failed", user_id=user_id, error=str(e))
            raise PersistenceError("Could not load transactions") from e
        return [StoredTransaction.from_row(row) for row in result.data or []]

    def list_distinct_user_ids(self) -> list[str]:
        """Every user id that has at least one transaction, first-seen order."""
        try:
            result = self.client.table(self.table).select("user_id").execute()
        except Exception as e:
            logger.error("user_query_failed", error=str(e))
            raise PersistenceError("Could not load users") from e

        seen: dict[str, None] = {}
        for row in result.data or []:
            user_id = row.get("user_id")
            if user_id is not None:
                seen.setdefault(str(user_id), None)
        return list(seen)
