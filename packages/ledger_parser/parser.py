"""
Chat transaction parser - free text to income/expense/saving records.

Supports several clauses per message, separated by commas or newlines:

    "chi 50k ăn trưa, + 200k bán đồ cũ"  -> expense, then income
    "chi 30k cafe\\ntk 100 usd"           -> expense, then USD saving

Clauses that break a rule (no note on an expense, a note on a saving,
foreign currency on income/expense, amount <= 0) are dropped without
failing the rest of the message.
"""

import logging
import re
from typing import List, Optional

from .categorizer import ExpenseCategorizer
from .models import (
    LOCAL_CURRENCY,
    Currency,
    ParsedTransaction,
    ParseOutcome,
    RejectionReason,
    TransactionKind,
)

logger = logging.getLogger(__name__)


class TransactionParser:
    """Single-pass regex scanner for chat bookkeeping messages."""

    # Groups: keyword | sign, amount (+k/m), unit, note up to , or newline.
    # Gaps use [^\S\n] so a clause never runs onto the next line.
    PATTERN = re.compile(
        r"(?:(thu|chi|tk|tiết\s?kiệm|tiet\s?kiem)|([+\-]))"
        r"[^\S\n]*(-?[0-9.,]+[km]?)"
        r"[^\S\n]*(usd|\$|btc|bitcoin|chỉ\s?vàng)?"
        r"[^\S\n]*([^,\n]*)",
        re.IGNORECASE,
    )

    SAVING_KEYWORD = re.compile(r"^(?:tk|tiết\s?kiệm|tiet\s?kiem)$", re.IGNORECASE)

    MULTIPLIERS = {"k": 1_000, "m": 1_000_000}

    def __init__(self, categorizer: Optional[ExpenseCategorizer] = None):
        self.categorizer = categorizer or ExpenseCategorizer()

    def scan(self, text: str) -> List[ParseOutcome]:
        """Match every clause in ``text``, keeping rejections and their reason."""
        if not text:
            return []
        return [self._evaluate(match) for match in self.PATTERN.finditer(text)]

    def parse(self, text: str) -> List[ParsedTransaction]:
        """Return accepted transactions in the order they appear."""
        outcomes = self.scan(text)
        for outcome in outcomes:
            if not outcome.accepted:
                logger.debug(
                    "Dropped clause %r: %s", outcome.clause, outcome.reason.value
                )
        return [o.transaction for o in outcomes if o.accepted]

    def _evaluate(self, match: re.Match) -> ParseOutcome:
        keyword, sign, amount_raw, unit, note_raw = match.groups()
        clause = match.group(0).strip()

        kind = self._resolve_kind(keyword, sign)

        amount = self.parse_amount(amount_raw)
        if amount is None:
            return ParseOutcome(clause, reason=RejectionReason.INVALID_AMOUNT)
        if amount <= 0:
            return ParseOutcome(clause, reason=RejectionReason.NON_POSITIVE_AMOUNT)

        currency = self._resolve_currency(unit)
        note = (note_raw or "").strip()

        if kind is TransactionKind.SAVING:
            if note:
                return ParseOutcome(clause, reason=RejectionReason.SAVING_WITH_NOTE)
        else:
            if not note:
                return ParseOutcome(clause, reason=RejectionReason.MISSING_NOTE)
            if currency is not LOCAL_CURRENCY:
                return ParseOutcome(clause, reason=RejectionReason.FOREIGN_CURRENCY)

        category = ""
        if kind is TransactionKind.EXPENSE:
            category = self.categorizer.categorize(note)

        return ParseOutcome(
            clause,
            transaction=ParsedTransaction(
                kind=kind,
                amount=amount,
                note=note,
                currency=currency,
                category=category,
            ),
        )

    def _resolve_kind(self, keyword: Optional[str], sign: Optional[str]) -> TransactionKind:
        if keyword:
            word = keyword.lower()
            if word == "chi":
                return TransactionKind.EXPENSE
            if word == "thu":
                return TransactionKind.INCOME
            if self.SAVING_KEYWORD.match(word):
                return TransactionKind.SAVING
        if sign == "+":
            return TransactionKind.INCOME
        return TransactionKind.EXPENSE

    @classmethod
    def parse_amount(cls, raw: Optional[str]) -> Optional[float]:
        """
        Parse ``50k``, ``1,5m``, ``1.5m`` or ``50000`` into a scaled number.

        Comma is read as the decimal separator. Returns None when the
        literal is not a number; sign is kept so callers can reject
        negatives after scaling.
        """
        if not raw:
            return None

        cleaned = raw.strip().lower()
        multiplier = 1
        if cleaned and cleaned[-1] in cls.MULTIPLIERS:
            multiplier = cls.MULTIPLIERS[cleaned[-1]]
            cleaned = cleaned[:-1]

        cleaned = cleaned.replace(",", ".")
        try:
            value = float(cleaned)
        except ValueError:
            return None
        return value * multiplier

    @staticmethod
    def _resolve_currency(unit: Optional[str]) -> Currency:
        u = (unit or "").lower()
        if u in ("usd", "$"):
            return Currency.USD
        if u in ("btc", "bitcoin"):
            return Currency.BTC
        if "vàng" in u:
            return Currency.GOLD
        return LOCAL_CURRENCY


_default_parser = TransactionParser()


def parse_transaction_text(text: str) -> List[ParsedTransaction]:
    """Convenience function: parse a chat message with the default parser."""
    return _default_parser.parse(text)
