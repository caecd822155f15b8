import re
import unicodedata
from typing import Dict, List, Optional, Pattern, Tuple

from .categories import DEFAULT_CATEGORY_KEYWORDS, Category

# A keyword only counts when its neighbours are not letters. Digits,
# punctuation, whitespace and the string edges are all acceptable.
_NOT_LETTER_BEFORE = r"(?<![^\W\d_])"
_NOT_LETTER_AFTER = r"(?![^\W\d_])"


def _normalize(text: str) -> str:
    return unicodedata.normalize("NFC", text).lower()


class ExpenseCategorizer:
    """Whole-word keyword matcher for expense notes."""

    def __init__(self, keywords: Optional[Dict[str, List[str]]] = None):
        table = keywords if keywords is not None else DEFAULT_CATEGORY_KEYWORDS
        self.fallback = Category.OTHER.value
        # (category, compiled patterns) in declaration order
        self.rules: List[Tuple[str, List[Pattern[str]]]] = [
            (category, [self._compile(k) for k in words])
            for category, words in table.items()
        ]

    @staticmethod
    def _compile(keyword: str) -> Pattern[str]:
        return re.compile(
            _NOT_LETTER_BEFORE + re.escape(_normalize(keyword)) + _NOT_LETTER_AFTER,
            re.IGNORECASE,
        )

    def predict(self, note: str) -> Optional[str]:
        """
        Return the first category whose keyword appears as a whole word.

        Returns None when nothing matches, so callers can tell a real
        match apart from the catch-all bucket.
        """
        if not note:
            return None

        text = _normalize(note)
        for category, patterns in self.rules:
            for pattern in patterns:
                if pattern.search(text):
                    return category
        return None

    def categorize(self, note: str) -> str:
        """Category label for a note, ``khác`` when no keyword matches."""
        if not note:
            return self.fallback
        return self.predict(note) or self.fallback


_default_categorizer = ExpenseCategorizer()


def categorize_expense(note: str) -> str:
    """Categorize an expense note with the default keyword table."""
    return _default_categorizer.categorize(note)
