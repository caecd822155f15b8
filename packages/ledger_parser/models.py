"""Structures produced by the chat transaction parser."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class TransactionKind(str, Enum):
    """Transaction kinds, valued as they are stored."""

    INCOME = "thu"
    EXPENSE = "chi"
    SAVING = "tiet_kiem"


class Currency(str, Enum):
    """Units a transaction can be denominated in. VND is the local currency."""

    VND = "VND"
    USD = "USD"
    BTC = "BTC"
    GOLD = "GOLD"


LOCAL_CURRENCY = Currency.VND


class RejectionReason(str, Enum):
    """Why a matched clause did not become a transaction."""

    INVALID_AMOUNT = "invalid_amount"
    NON_POSITIVE_AMOUNT = "non_positive_amount"
    SAVING_WITH_NOTE = "saving_with_note"
    MISSING_NOTE = "missing_note"
    FOREIGN_CURRENCY = "foreign_currency"


@dataclass(frozen=True)
class ParsedTransaction:
    """One transaction understood from a chat message."""

    kind: TransactionKind
    amount: float
    note: str = ""
    currency: Currency = LOCAL_CURRENCY
    category: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the payload shape used by the transactions API."""
        return {
            "type": self.kind.value,
            "amount": self.amount,
            "note": self.note,
            "currency": self.currency.value,
            "category": self.category,
        }


@dataclass(frozen=True)
class ParseOutcome:
    """Result of a single pattern match: a transaction or a rejection."""

    clause: str
    transaction: Optional[ParsedTransaction] = None
    reason: Optional[RejectionReason] = None

    @property
    def accepted(self) -> bool:
        return self.transaction is not None
