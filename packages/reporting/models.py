from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict, Optional

from packages.ledger_parser.models import LOCAL_CURRENCY


@dataclass(frozen=True)
class StoredTransaction:
    """A persisted transaction as read back from storage.

    ``amount`` is already in VND (converted at creation time);
    ``original_amount`` is the quantity in ``currency``.
    """

    user_id: str
    type: str
    amount: float
    note: str = ""
    category: str = ""
    currency: str = LOCAL_CURRENCY.value
    original_amount: float = 0.0
    created_at: Optional[datetime] = None
    id: Optional[int] = None

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "StoredTransaction":
        """Build from a database row, tolerating NULL text columns."""
        created_at = row.get("created_at")
        if isinstance(created_at, str):
            created_at = datetime.fromisoformat(created_at.replace("Z", "+00:00"))
        return cls(
            id=row.get("id"),
            user_id=str(row.get("user_id", "")),
            type=row.get("type", ""),
            amount=float(row.get("amount") or 0.0),
            note=row.get("note") or "",
            category=row.get("category") or "",
            currency=row.get("currency") or LOCAL_CURRENCY.value,
            original_amount=float(row.get("original_amount") or 0.0),
            created_at=created_at,
        )


@dataclass
class AssetDetail:
    quantity: float = 0.0
    current_vnd: float = 0.0
    rate: float = 0.0


@dataclass
class PeriodReport:
    period: str
    start_date: date
    total_income: float = 0.0
    total_expense: float = 0.0
    total_savings_vnd: float = 0.0
    balance: float = 0.0
    expense_by_category: Dict[str, float] = field(default_factory=dict)
    assets: Dict[str, AssetDetail] = field(default_factory=dict)
    total_assets_vnd: float = 0.0
