"""Tests for chat message handling."""

import unicodedata
from unittest.mock import MagicMock
from zoneinfo import ZoneInfo

import pytest

from apps.api.domains.chat import service as chat_service
from apps.api.domains.chat.service import handle_message
from apps.api.tasks import bulletin_tasks
from packages.reporting import (
    BULLETIN_FAILED_MESSAGE,
    BULLETIN_QUEUED_MESSAGE,
    HELP_MESSAGE,
    SAVE_FAILED_MESSAGE,
)

ICT = ZoneInfo("Asia/Ho_Chi_Minh")


@pytest.fixture
def reply(repository, rate_provider):
    def _reply(text, user_id="42"):
        return handle_message(user_id, text, repository, rate_provider.current(), ICT)

    return _reply


class TestTransactionsFromChat:
    def test_single_expense(self, reply, repository):
        assert reply("chi 50k ăn sáng") == ["✅ Đã lưu 1 giao dịch:\nchi 50000.00 VND"]
        row = repository.rows[0]
        assert row.user_id == "42"
        assert row.category == "ăn uống"
        assert row.amount == 50_000

    def test_multiple_clauses_in_order(self, reply, repository):
        replies = reply("chi 50k ăn trưa, + 200k bán đồ cũ")
        assert replies == ["✅ Đã lưu 2 giao dịch:\nchi 50000.00 VND\nthu 200000.00 VND"]
        assert [r.type for r in repository.rows] == ["chi", "thu"]

    def test_saving_in_usd_is_converted(self, reply, repository):
        assert reply("tk 100 usd") == ["✅ Đã lưu 1 giao dịch:\ntiet_kiem 100.00 USD"]
        assert repository.rows[0].amount == 2_500_000
        assert repository.rows[0].original_amount == 100

    @pytest.mark.parametrize("text", ["chi 50k", "chi 10 usd mua game", "xin chào", ""])
    def test_nothing_parsed_returns_help(self, reply, repository, text):
        assert reply(text) == [HELP_MESSAGE]
        assert repository.rows == []

    def test_failed_item_does_not_abort_batch(self, reply, repository):
        repository.fail_when = lambda tx: tx.note == "bia"
        replies = reply("chi 30k bia, chi 20k phở")
        assert replies == [SAVE_FAILED_MESSAGE, "✅ Đã lưu 1 giao dịch:\nchi 20000.00 VND"]
        assert len(repository.rows) == 1

    def test_every_item_failing(self, reply, repository):
        repository.fail_when = lambda tx: True
        assert reply("chi 30k bia, chi 20k phở") == [SAVE_FAILED_MESSAGE, SAVE_FAILED_MESSAGE]


class TestCommands:
    def test_report(self, reply):
        reply("chi 50k ăn sáng, tk 2 chỉ vàng")
        (text,) = reply("Báo cáo")
        assert text.startswith("📊 BÁO CÁO TÀI CHÍNH")
        assert "📉 Chi: 50,000 đ" in text
        assert "- 2 GOLD (Tỷ giá: 8,000,000) = 16,000,000 đ" in text

    def test_report_accepts_decomposed_text(self, reply):
        (text,) = reply(unicodedata.normalize("NFD", "báo cáo tuần"))
        assert text.startswith("📊 BÁO CÁO TÀI CHÍNH")

    def test_report_failure(self, reply, repository):
        repository.fail_reads = True
        assert reply("báo cáo") == ["❌ Lỗi lấy báo cáo tuần"]

    def test_gold_price(self, reply, repository):
        (text,) = reply("giá vàng hôm nay?")
        assert "🏆 VÀNG (GOLD)" in text
        assert repository.rows == []

    def test_silver_price(self, reply):
        (text,) = reply("GIÁ BẠC")
        assert "BẠC (SILVER)" in text

    def test_report_takes_precedence_over_parsing(self, reply, repository):
        reply("báo cáo chi 50k ăn sáng")
        assert repository.rows == []


class TestBulletinCommand:
    def test_queues_bulletin(self, reply, monkeypatch):
        queued = []
        monkeypatch.setattr(chat_service, "queue_bulletin", lambda: queued.append(True))
        assert reply("/test_noti") == [BULLETIN_QUEUED_MESSAGE]
        assert queued == [True]

    def test_queue_failure_is_reported(self, reply, monkeypatch):
        def broker_down():
            raise ConnectionError("redis unavailable")

        monkeypatch.setattr(chat_service, "queue_bulletin", broker_down)
        assert reply("/test_noti") == [BULLETIN_FAILED_MESSAGE]

    def test_only_exact_command(self, reply, monkeypatch):
        queued = []
        monkeypatch.setattr(chat_service, "queue_bulletin", lambda: queued.append(True))
        assert reply("please /test_noti") == [HELP_MESSAGE]
        assert queued == []

    def test_queue_bulletin_sends_task(self, monkeypatch):
        monkeypatch.setenv("SUPABASE_URL", "https://test.supabase.co")
        monkeypatch.setenv("SUPABASE_SERVICE_KEY", "test-service-key")
        task = MagicMock()
        monkeypatch.setattr(bulletin_tasks, "send_market_bulletin", task)

        chat_service.queue_bulletin()

        task.delay.assert_called_once_with()


class TestChatEndpoint:
    def test_post_message(self, client, repository):
        response = client.post("/api/v1/chat/messages", json={"user_id": "42", "text": "thu 10m lương t10"})
        assert response.status_code == 200
        assert response.json() == {"replies": ["✅ Đã lưu 1 giao dịch:\nthu 10000000.00 VND"]}
        assert repository.rows[0].note == "lương t10"

    def test_missing_text_returns_422(self, client):
        assert client.post("/api/v1/chat/messages", json={"user_id": "42"}).status_code == 422
