from supabase import Client
from referralhub.core.reporting import to_csv
from referralhub.core.utils import date_range_start, day_key, start_of_month, utcnow
from referralhub.modules.transactions.models import CSV_HEADERS
from referralhub.modules.transactions.schemas import (
    Transaction, TransactionFilters, TransactionList, TransactionStats
)
from fastapi import HTTPException
from datetime import datetime, timezone
from zoneinfo import ZoneInfoNotFoundError
from typing import Any, Dict, List, Optional
import logging

logger = logging.getLogger(__name__)

P2P_HISTORY_LIMIT = 1000
_OLDEST = datetime.min.replace(tzinfo=timezone.utc)

WALLET_SOURCES = {"main": "main_wallet", "fund": "fund_wallet"}


def compute_stats(transactions: List[Transaction], now: datetime) -> TransactionStats:
    income = [t for t in transactions if t.category == "income"]
    expense = [t for t in transactions if t.category == "expense"]
    month_start = start_of_month(now)
    month_income = [t for t in income if t.date and t.date >= month_start]
    month_expense = [t for t in expense if t.date and t.date >= month_start]

    total_income = sum(t.amount for t in income)
    total_expense = abs(sum(t.amount for t in expense))
    return TransactionStats(
        total_income=total_income,
        total_expense=total_expense,
        net_balance=total_income - total_expense,
        transaction_count=len(transactions),
        this_month_income=sum(t.amount for t in month_income),
        this_month_expense=abs(sum(t.amount for t in month_expense)),
        largest_income=max([t.amount for t in income] + [0]),
        largest_expense=max([abs(t.amount) for t in expense] + [0]),
    )


def apply_filters(transactions: List[Transaction], filters: TransactionFilters, now: datetime) -> List[Transaction]:
    filtered = transactions
    if filters.wallet in WALLET_SOURCES:
        filtered = [t for t in filtered if t.source == WALLET_SOURCES[filters.wallet]]
    if filters.search:
        needle = filters.search.lower()
        filtered = [t for t in filtered if needle in t.description.lower() or needle in t.type.lower()]
    if filters.type and filters.type != "all":
        filtered = [t for t in filtered if t.type == filters.type]
    if filters.category and filters.category != "all":
        filtered = [t for t in filtered if t.category == filters.category]
    try:
        start = date_range_start(filters.date_range, now, filters.tz)
    except (ZoneInfoNotFoundError, ValueError):
        raise HTTPException(status_code=400, detail=f"Unknown timezone: {filters.tz}")
    if start is not None:
        filtered = [t for t in filtered if t.date and t.date >= start]
    return filtered


class TransactionService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def _select_user_rows(self, table: str, user_id: str, **eq) -> List[Dict[str, Any]]:
        query = self.supabase.table(table).select("*").eq("user_id", user_id)
        for column, value in eq.items():
            query = query.eq(column, value)
        return query.execute().data or []

    def load_ledger(self, user_id: str) -> List[Transaction]:
        """Merge every money movement of the user into one list, newest first"""
        ledger: List[Transaction] = []

        for bonus in self._select_user_rows("referral_bonuses", user_id):
            ledger.append(Transaction(
                id=bonus["id"],
                type=bonus.get("bonus_type") or "bonus",
                amount=float(bonus.get("amount") or 0),
                description=bonus.get("description") or "",
                date=bonus.get("created_at"),
                status=bonus.get("status") or "completed",
                category="income",
                source="main_wallet",
            ))

        for pool in self._select_user_rows("pool_progress", user_id, status="completed"):
            ledger.append(Transaction(
                id=pool["id"],
                type="pool_reward",
                amount=float(pool.get("reward_paid") or 0),
                description=f"Pool {pool.get('pool_number')} completion reward",
                date=pool.get("completed_at"),
                status="completed",
                category="income",
                source="main_wallet",
            ))

        for row in self._select_user_rows("fund_wallet_transactions", user_id):
            amount = float(row.get("amount") or 0)
            ledger.append(Transaction(
                id=row["id"],
                type=row.get("transaction_type") or "fund",
                amount=amount,
                description=row.get("description") or "",
                date=row.get("created_at"),
                status="completed",
                category="income" if amount > 0 else "expense",
                source="fund_wallet",
            ))

        for withdrawal in self._select_user_rows("withdrawals", user_id):
            ledger.append(Transaction(
                id=withdrawal["id"],
                type="withdrawal",
                amount=-float(withdrawal.get("amount") or 0),
                description=f"Withdrawal to {withdrawal.get('address_label') or withdrawal.get('withdrawal_address') or ''}".rstrip(),
                date=withdrawal.get("created_at"),
                status=withdrawal.get("status") or "pending",
                category="expense",
                source="main_wallet",
            ))

        transfers = self.supabase.rpc("get_user_transfer_history", {
            "user_id_param": user_id,
            "limit_param": P2P_HISTORY_LIMIT,
        }).execute()
        for transfer in transfers.data or []:
            is_sender = bool(transfer.get("is_sender"))
            default = (
                f"P2P transfer to {transfer.get('receiver_username')}" if is_sender
                else f"P2P transfer from {transfer.get('sender_username')}"
            )
            ledger.append(Transaction(
                id=transfer["id"],
                type="p2p_send" if is_sender else "p2p_receive",
                amount=-float(transfer.get("amount") or 0) if is_sender else float(transfer.get("net_amount") or 0),
                description=transfer.get("description") or default,
                date=transfer.get("created_at"),
                status=transfer.get("status") or "completed",
                category="transfer",
                source="fund_wallet",
            ))

        ledger.sort(key=lambda t: t.date or _OLDEST, reverse=True)
        return ledger

    def list_transactions(self, user_id: str, filters: TransactionFilters, now: Optional[datetime] = None) -> TransactionList:
        now = now or utcnow()
        try:
            ledger = self.load_ledger(user_id)
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Failed to load transactions for {user_id}: {e}")
            raise HTTPException(status_code=500, detail=f"Failed to load transactions: {str(e)}")
        return TransactionList(
            transactions=apply_filters(ledger, filters, now),
            stats=compute_stats(ledger, now),
        )

    def export_csv(self, user_id: str, filters: TransactionFilters, now: Optional[datetime] = None) -> str:
        listing = self.list_transactions(user_id, filters, now)
        rows = [
            [
                day_key(t.date) if t.date else "",
                t.type,
                t.description,
                f"{t.amount:.2f}",
                t.category,
                t.status,
                t.source,
            ]
            for t in listing.transactions
        ]
        return to_csv(CSV_HEADERS, rows)
