"""Unit tests for member withdrawal requests."""

import pytest
from fastapi import HTTPException

from referralhub.modules.withdrawals.schemas import WithdrawalRequest
from referralhub.modules.withdrawals.service import WithdrawalService, quote_fees


@pytest.fixture
def payer(db, profile):
    row = next(r for r in db.rows("profiles") if r["id"] == profile["id"])
    row.update({"transaction_pin": "1234", "main_wallet_balance": 200})
    db.tables["withdrawal_addresses"] = [
        {"id": "addr-1", "user_id": "user-1", "address": "0x1234567890abcdef", "label": "Ledger",
         "is_verified": True, "created_at": "2024-06-01T00:00:00Z"},
        {"id": "addr-2", "user_id": "user-1", "address": "0xunverified", "label": "New",
         "is_verified": False, "created_at": "2024-06-02T00:00:00Z"},
        {"id": "addr-3", "user_id": "someone-else", "address": "0xother", "label": "Theirs",
         "is_verified": True, "created_at": "2024-06-03T00:00:00Z"},
    ]
    return dict(row)


def _request(amount, source_wallet="main", address_id="addr-1", pin="1234"):
    return WithdrawalRequest(amount=amount, source_wallet=source_wallet, address_id=address_id, transaction_pin=pin)


def _balance(db, field):
    return next(r for r in db.rows("profiles") if r["id"] == "user-1")[field]


class TestQuoteFees:
    def test_main_wallet(self):
        quote = quote_fees(100, "main")
        assert quote.transfer_fee == 0
        assert quote.withdrawal_fee == pytest.approx(15)
        assert quote.net_amount == pytest.approx(85)

    def test_fund_wallet_pays_transfer_fee_first(self):
        quote = quote_fees(100, "fund")
        assert quote.transfer_fee == pytest.approx(10)
        assert quote.withdrawal_fee == pytest.approx(13.5)
        assert quote.total_fees == pytest.approx(23.5)
        assert quote.net_amount == pytest.approx(76.5)

    def test_zero_amount(self):
        assert quote_fees(0, "fund").total_fees == 0


class TestRequestValidation:
    @pytest.mark.parametrize("pin,detail", [
        ("12", "Transaction PIN must be 4 digits"),
        ("12a4", "Transaction PIN must be 4 digits"),
        ("4321", "Invalid transaction PIN"),
    ])
    def test_pin(self, db, payer, pin, detail):
        with pytest.raises(HTTPException) as exc:
            WithdrawalService(db).request_withdrawal(payer, _request(50, pin=pin))
        assert exc.value.status_code == 400
        assert exc.value.detail == detail

    def test_pin_not_set(self, db, profile):
        with pytest.raises(HTTPException) as exc:
            WithdrawalService(db).request_withdrawal(profile, _request(50))
        assert exc.value.detail == "Transaction PIN not set. Please set it in Settings first."

    @pytest.mark.parametrize("amount,source,detail", [
        (0, "main", "Please enter a valid withdrawal amount"),
        (250, "main", "Insufficient balance in main wallet"),
        (100.5, "fund", "Insufficient balance in fund wallet"),
        (9.99, "main", "Minimum withdrawal amount is $10 USDT"),
    ])
    def test_amount_rules(self, db, payer, amount, source, detail):
        with pytest.raises(HTTPException) as exc:
            WithdrawalService(db).request_withdrawal(payer, _request(amount, source_wallet=source))
        assert exc.value.detail == detail
        assert db.rows("withdrawals") == []

    @pytest.mark.parametrize("address_id", ["addr-2", "addr-3", "missing"])
    def test_address_must_be_own_and_verified(self, db, payer, address_id):
        with pytest.raises(HTTPException) as exc:
            WithdrawalService(db).request_withdrawal(payer, _request(50, address_id=address_id))
        assert exc.value.status_code == 404
        assert _balance(db, "main_wallet_balance") == 200


class TestRequestWithdrawal:
    def test_fund_wallet_withdrawal(self, db, payer):
        result = WithdrawalService(db).request_withdrawal(payer, _request(100, source_wallet="fund"))

        withdrawal = db.rows("withdrawals")[0]
        assert withdrawal["status"] == "pending"
        assert withdrawal["withdrawal_address"] == "0x1234567890abcdef"
        assert withdrawal["address_label"] == "Ledger"
        assert withdrawal["fee"] == pytest.approx(23.5)
        assert withdrawal["net_amount"] == pytest.approx(76.5)
        assert _balance(db, "fund_wallet_balance") == 0
        assert _balance(db, "main_wallet_balance") == 200
        assert result.message == f"Withdrawal request submitted successfully! Reference: {withdrawal['id'][:8]}"

        ledger = db.rows("fund_wallet_transactions")[0]
        assert ledger["amount"] == -100
        assert ledger["balance_before"] == 100
        assert ledger["balance_after"] == 0
        assert ledger["reference_id"] == withdrawal["id"]
        assert ledger["description"] == "Withdrawal to Ledger (0x12345678...)"

    def test_concurrent_debit_is_rejected(self, db, payer):
        # another request already spent part of the balance this one was checked against
        next(r for r in db.rows("profiles") if r["id"] == "user-1")["main_wallet_balance"] = 60
        with pytest.raises(HTTPException) as exc:
            WithdrawalService(db).request_withdrawal(payer, _request(150))
        assert exc.value.status_code == 409
        assert _balance(db, "main_wallet_balance") == 60
        assert db.rows("withdrawals") == []

    def test_failed_insert_restores_balance(self, db, payer):
        db.failing_tables.add("withdrawals")
        with pytest.raises(HTTPException) as exc:
            WithdrawalService(db).request_withdrawal(payer, _request(50))
        assert exc.value.status_code == 500
        assert _balance(db, "main_wallet_balance") == 200

    def test_ledger_failure_keeps_the_request(self, db, payer):
        db.failing_tables.add("fund_wallet_transactions")
        result = WithdrawalService(db).request_withdrawal(payer, _request(50))
        assert result.success is True
        assert _balance(db, "main_wallet_balance") == 150


class TestWithdrawalRoutes:
    def test_overview(self, client, db, payer):
        db.tables["withdrawals"] = [
            {"id": f"w{i}", "user_id": "user-1", "amount": 10 + i, "status": "pending",
             "created_at": f"2024-06-{i + 1:02d}T00:00:00Z"}
            for i in range(12)
        ] + [{"id": "other", "user_id": "u2", "amount": 99, "status": "pending", "created_at": "2024-06-30T00:00:00Z"}]
        body = client.get("/api/v1/withdrawals").json()
        assert body["main_wallet_balance"] == 200
        assert body["has_transaction_pin"] is True
        assert [a["id"] for a in body["addresses"]] == ["addr-1"]
        assert len(body["history"]) == 10
        assert body["history"][0]["id"] == "w11"

    def test_quote(self, client, profile):
        body = client.get("/api/v1/withdrawals/quote", params={"amount": 40, "source_wallet": "fund"}).json()
        assert body["transfer_fee"] == pytest.approx(4)
        assert body["net_amount"] == pytest.approx(30.6)

    def test_submit(self, client, db, payer):
        response = client.post("/api/v1/withdrawals", json={
            "amount": 20, "source_wallet": "main", "address_id": "addr-1", "transaction_pin": "1234",
        })
        assert response.status_code == 200
        assert response.json()["quote"]["net_amount"] == pytest.approx(17)
        assert _balance(db, "main_wallet_balance") == 180

    def test_rejects_unknown_wallet(self, client, payer):
        response = client.post("/api/v1/withdrawals", json={
            "amount": 20, "source_wallet": "savings", "address_id": "addr-1", "transaction_pin": "1234",
        })
        assert response.status_code == 422
