"""Expense category constants for chat-entered transactions.

Categories are plain Vietnamese labels because they are stored as-is in the
``transactions.category`` column and echoed back in chat reports.
"""

from enum import Enum


class Category(str, Enum):
    """Expense categories assigned by keyword matching."""

    FOOD = "ăn uống"
    LIVING = "sinh hoạt"
    LEISURE = "hưởng thụ"
    OTHER = "khác"


# Declaration order is the match priority: the first category with a
# matching keyword wins.
DEFAULT_CATEGORY_KEYWORDS: dict[str, list[str]] = {
    Category.FOOD.value: [
        "ăn",
        "ăn sáng",
        "ăn trưa",
        "ăn tối",
        "cafe",
        "cà phê",
        "trà đá",
        "chè",
        "nhậu",
        "bia",
        "đồ ăn",
        "đồ uống",
        "quán",
        "phở",
        "bún",
        "cơm",
        "trà sữa",
    ],
    Category.LIVING.value: [
        "sửa xe",
        "đổ xăng",
        "xăng",
        "tiền điện",
        "điện",
        "nước",
        "điện thoại",
        "học phí",
        "internet",
        "wifi",
        "gas",
        "rác",
        "phí",
        "bảo hiểm",
    ],
    Category.LEISURE.value: [
        "spa",
        "du lịch",
        "massage",
        "cắt tóc",
        "làm tóc",
        "xem phim",
        "phim",
        "karaoke",
        "trò chơi",
        "game",
        "makeup",
    ],
}
