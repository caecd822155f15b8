"""
Ledger Parser

Chat message parsing and expense categorization.
"""

__version__ = "1.0.0"

from .categorizer import ExpenseCategorizer, categorize_expense
from .categories import Category, DEFAULT_CATEGORY_KEYWORDS
from .models import (
    LOCAL_CURRENCY,
    Currency,
    ParsedTransaction,
    ParseOutcome,
    RejectionReason,
    TransactionKind,
)
from .parser import TransactionParser, parse_transaction_text

__all__ = [
    "Category",
    "Currency",
    "DEFAULT_CATEGORY_KEYWORDS",
    "ExpenseCategorizer",
    "LOCAL_CURRENCY",
    "ParseOutcome",
    "ParsedTransaction",
    "RejectionReason",
    "TransactionKind",
    "TransactionParser",
    "categorize_expense",
    "parse_transaction_text",
]
