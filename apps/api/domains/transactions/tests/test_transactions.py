"""Tests for the transactions domain: conversion, Supabase repository, router."""

from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest

from apps.api.core.errors import PersistenceError
from apps.api.domains.transactions.repository import TransactionRepository
from apps.api.domains.transactions.service import build_stored_transaction, record_transaction
from packages.market_rates import RateSnapshot
from packages.reporting import StoredTransaction

RATES = RateSnapshot(
    usd_vnd=25_000, gold_usd=2_000, silver_usd=30, vn_sjc=8_000_000,
    vn_silver=1_000_000, btc_vnd=2_000_000_000,
)


class TestConversion:
    @pytest.mark.parametrize(
        "currency, amount, expected",
        [
            ("USD", 100, 2_500_000),
            ("GOLD", 2, 16_000_000),
            ("BTC", 0.5, 1_000_000_000),
            ("VND", 50_000, 50_000),
        ],
    )
    def test_converts_to_vnd(self, currency, amount, expected):
        tx = build_stored_transaction("42", "tiet_kiem", amount, RATES, currency=currency)
        assert tx.amount == expected
        assert tx.original_amount == amount
        assert tx.currency == currency

    def test_empty_expense_category_defaults_to_other(self):
        tx = build_stored_transaction("42", "chi", 50_000, RATES, note="mua chăn")
        assert tx.category == "khác"

    def test_income_keeps_empty_category(self):
        tx = build_stored_transaction("42", "thu", 50_000, RATES, note="lương")
        assert tx.category == ""

    def test_accepts_enums(self):
        from packages.ledger_parser import Currency, TransactionKind

        tx = build_stored_transaction("42", TransactionKind.SAVING, 1, RATES, currency=Currency.GOLD)
        assert tx.type == "tiet_kiem"
        assert tx.currency == "GOLD"

    def test_record_transaction_stores(self, repository):
        stored = record_transaction(repository, RATES, "42", "tiet_kiem", 100, currency="USD")
        assert stored.id == 1
        assert repository.rows[0].amount == 2_500_000


class TestSupabaseRepository:
    @pytest.fixture
    def supabase(self):
        return MagicMock()

    def test_create_inserts_row(self, supabase):
        supabase.table.return_value.insert.return_value.execute.return_value = MagicMock(
            data=[{"id": 9, "user_id": "42", "type": "chi", "amount": 50000, "note": "phở",
                   "category": "ăn uống", "currency": "VND", "original_amount": 50000,
                   "created_at": "2026-10-19T01:00:00+00:00"}]
        )
        repo = TransactionRepository(supabase, table="transactions")
        tx = StoredTransaction(user_id="42", type="chi", amount=50000, note="phở",
                               category="ăn uống", original_amount=50000)
        now = datetime(2026, 10, 19, 1, 0, tzinfo=timezone.utc)

        stored = repo.create(tx, now=now)

        supabase.table.assert_called_with("transactions")
        row = supabase.table.return_value.insert.call_args[0][0]
        assert row["created_at"] == now.isoformat()
        assert row["category"] == "ăn uống"
        assert "id" not in row
        assert stored.id == 9

    def test_create_failure_raises_persistence_error(self, supabase):
        supabase.table.return_value.insert.return_value.execute.side_effect = RuntimeError("down")
        repo = TransactionRepository(supabase)
        with pytest.raises(PersistenceError):
            repo.create(StoredTransaction(user_id="42", type="thu", amount=1, note="x"))

    def test_fetch_filters_by_user_and_start(self, supabase):
        query = supabase.table.return_value.select.return_value
        query.eq.return_value.gte.return_value.order.return_value.execute.return_value = MagicMock(
            data=[{"id": 1, "user_id": "42", "type": "thu", "amount": 100, "note": None,
                   "category": None, "currency": None, "original_amount": 100,
                   "created_at": "2026-10-19T01:00:00Z"}]
        )
        repo = TransactionRepository(supabase)
        start = datetime(2026, 10, 19, tzinfo=timezone.utc)

        rows = repo.fetch_by_user_and_period_start("42", start)

        query.eq.assert_called_with("user_id", "42")
        query.eq.return_value.gte.assert_called_with("created_at", start.isoformat())
        assert rows[0].currency == "VND"
        assert rows[0].note == ""

    def test_distinct_user_ids(self, supabase):
        supabase.table.return_value.select.return_value.execute.return_value = MagicMock(
            data=[{"user_id": "1"}, {"user_id": "2"}, {"user_id": "1"}, {"user_id": None}]
        )
        assert TransactionRepository(supabase).list_distinct_user_ids() == ["1", "2"]

    def test_distinct_user_ids_failure(self, supabase):
        supabase.table.return_value.select.return_value.execute.side_effect = RuntimeError("down")
        with pytest.raises(PersistenceError):
            TransactionRepository(supabase).list_distinct_user_ids()


class TestTransactionsEndpoint:
    def test_create_returns_ok(self, client, repository):
        response = client.post(
            "/api/v1/transactions",
            json={"user_id": "42", "type": "tiet_kiem", "amount": 2, "currency": "GOLD"},
        )
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "ok"
        assert body["transaction"]["amount"] == 16_000_000
        assert body["transaction"]["original_amount"] == 2
        assert len(repository.rows) == 1

    def test_expense_without_category(self, client, repository):
        response = client.post(
            "/api/v1/transactions",
            json={"user_id": "42", "type": "chi", "amount": 55000, "note": "Ăn trưa cơm tấm"},
        )
        assert response.status_code == 200
        assert repository.rows[0].category == "khác"

    @pytest.mark.parametrize(
        "payload",
        [
            {"user_id": "42", "type": "chi", "amount": 0, "note": "x"},
            {"user_id": "42", "type": "chi", "amount": -5, "note": "x"},
            {"user_id": "42", "type": "refund", "amount": 5},
            {"user_id": "42", "type": "thu", "amount": 5, "currency": "EUR"},
            {"type": "thu", "amount": 5},
        ],
    )
    def test_invalid_payload_returns_422(self, client, payload):
        response = client.post("/api/v1/transactions", json=payload)
        assert response.status_code == 422
        assert response.json()["title"] == "Unprocessable Entity"

    def test_storage_failure_returns_500(self, client, repository):
        repository.fail_when = lambda tx: True
        response = client.post(
            "/api/v1/transactions", json={"user_id": "42", "type": "thu", "amount": 5, "note": "x"}
        )
        assert response.status_code == 500
        assert response.json()["detail"] == "Could not save transaction"

    def test_list_users(self, client):
        for user_id in ("1", "2", "1"):
            client.post(
                "/api/v1/transactions",
                json={"user_id": user_id, "type": "thu", "amount": 5, "note": "x"},
            )
        response = client.get("/api/v1/users")
        assert response.status_code == 200
        assert response.json() == ["1", "2"]

    def test_api_key_enforced(self, client, api_settings):
        api_settings.API_KEY = "s3cret"
        assert client.get("/api/v1/users").status_code == 401
        assert client.get("/api/v1/users", headers={"X-API-Key": "s3cret"}).status_code == 200
