"""Tests for the reports domain."""

from datetime import datetime, timezone
from zoneinfo import ZoneInfo

import pytest

from apps.api.core.errors import PersistenceError
from apps.api.domains.reports.service import generate_report
from packages.reporting import ReportPeriod, StoredTransaction

ICT = ZoneInfo("Asia/Ho_Chi_Minh")


def stored(type_, amount, created_at, **kwargs):
    return StoredTransaction(
        user_id=kwargs.pop("user_id", "42"),
        type=type_,
        amount=amount,
        original_amount=kwargs.pop("original_amount", amount),
        created_at=created_at,
        **kwargs,
    )


class TestGenerateReport:
    # Wednesday 21 October 2026, 10:00 ICT
    NOW = datetime(2026, 10, 21, 10, 0, tzinfo=ICT)

    @pytest.fixture
    def seeded(self, repository):
        repository.rows.extend([
            # Previous month
            stored("thu", 9_000_000, datetime(2026, 9, 30, 12, 0, tzinfo=ICT), note="lương"),
            # This month, before this week
            stored("chi", 100_000, datetime(2026, 10, 5, 12, 0, tzinfo=ICT), note="phở", category="ăn uống"),
            # Sunday night, still last week
            stored("chi", 40_000, datetime(2026, 10, 18, 23, 30, tzinfo=ICT), note="bia", category="ăn uống"),
            # Monday 00:30 ICT is Sunday 17:30 UTC
            stored("chi", 60_000, datetime(2026, 10, 18, 17, 30, tzinfo=timezone.utc), note="xăng", category="sinh hoạt"),
            stored("tiet_kiem", 2_500_000, datetime(2026, 10, 20, 9, 0, tzinfo=ICT), currency="USD", original_amount=100),
            stored("thu", 500_000, datetime(2026, 10, 20, 9, 0, tzinfo=ICT), note="x", user_id="other"),
        ])
        return repository

    def test_week(self, seeded, rate_provider):
        report = generate_report(seeded, rate_provider.current(), "42", ReportPeriod.WEEK, ICT, now=self.NOW)
        assert report.start_date.isoformat() == "2026-10-19"
        assert report.total_expense == 60_000
        assert report.expense_by_category == {"sinh hoạt": 60_000}
        assert report.total_savings_vnd == 2_500_000
        assert report.balance == -2_560_000

    def test_month(self, seeded, rate_provider):
        report = generate_report(seeded, rate_provider.current(), "42", ReportPeriod.MONTH, ICT, now=self.NOW)
        assert report.start_date.isoformat() == "2026-10-01"
        assert report.total_income == 0
        assert report.total_expense == 200_000
        assert report.expense_by_category == {"ăn uống": 140_000, "sinh hoạt": 60_000}
        # Asset re-priced at 25,000 VND/USD
        assert report.assets["USD"].current_vnd == 2_500_000

    def test_persistence_error_propagates(self, repository, rate_provider):
        repository.fail_reads = True
        with pytest.raises(PersistenceError):
            generate_report(repository, rate_provider.current(), "42", ReportPeriod.WEEK, ICT, now=self.NOW)


class TestReportEndpoint:
    def test_report_shape(self, client, repository):
        repository.rows.append(
            stored("tiet_kiem", 2_000_000, datetime.now(timezone.utc), currency="USD", original_amount=80)
        )
        response = client.get("/api/v1/report", params={"user_id": "42", "period": "month"})
        assert response.status_code == 200
        body = response.json()
        assert body["period"] == "month"
        assert body["start_date"].endswith("-01")
        assert body["total_savings_vnd"] == 2_000_000
        assert body["assets"]["USD"] == {"quantity": 80, "rate": 25_000, "current_vnd": 2_000_000}
        assert body["total_assets_vnd"] == 2_000_000
        assert body["balance"] == -2_000_000

    def test_unknown_period_returns_422(self, client):
        response = client.get("/api/v1/report", params={"user_id": "42", "period": "year"})
        assert response.status_code == 422

    def test_missing_user_returns_422(self, client):
        response = client.get("/api/v1/report", params={"period": "week"})
        assert response.status_code == 422

    def test_storage_failure_returns_500(self, client, repository):
        repository.fail_reads = True
        response = client.get("/api/v1/report", params={"user_id": "42", "period": "week"})
        assert response.status_code == 500
        assert response.json()["status"] == 500
