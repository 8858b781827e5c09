"""Summary derivation over stored transactions.

The fold functions are pure and work on anything exposing ``category``,
``credit_amount``, ``debit_amount``, ``date``, ``balance_after`` and the
bucket keys, so they apply equally to ORM rows and parsed rows.

Input sequences are expected in storage order (date, then insertion).
The daily balance is the ``balance_after`` of the latest-dated transaction
of the day; among same-date rows the later one in storage order wins.
"""

import logging
import math
from collections.abc import Iterable, Sequence
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from ledger.categorization.rules import SAVINGS_TRANSFER
from ledger.repositories.transaction import TransactionRepository
from ledger.schemas.summary import (
    BucketTotals,
    CategorySummary,
    CategoryTotal,
    DailyDetail,
    DaySummary,
    MonthSummary,
)
from ledger.schemas.transaction import TransactionResponse

logger = logging.getLogger(__name__)

MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)


def _money(value: float) -> float:
    return round(value, 2)


def _totals(income: float, outcome: float, savings_in: float, savings_out: float, count: int) -> BucketTotals:
    return BucketTotals(
        income=_money(income),
        outcome=_money(outcome),
        savings=_money(income - outcome),
        savings_in=_money(savings_in),
        savings_out=_money(savings_out),
        savings_movement=_money(savings_in - savings_out),
        transaction_count=count,
    )


def fold_transactions(transactions: Iterable[Any]) -> BucketTotals:
    """Fold one bucket of transactions into its totals."""
    income = outcome = savings_in = savings_out = 0.0
    count = 0
    for txn in transactions:
        count += 1
        if txn.category == SAVINGS_TRANSFER:
            savings_in += txn.credit_amount or 0.0
            savings_out += txn.debit_amount or 0.0
        else:
            income += txn.credit_amount or 0.0
            outcome += txn.debit_amount or 0.0
    return _totals(income, outcome, savings_in, savings_out, count)


def combine_totals(parts: Iterable[BucketTotals]) -> BucketTotals:
    """Sum narrower bucket totals into a wider one (balance is not summable)."""
    income = outcome = savings_in = savings_out = 0.0
    count = 0
    for part in parts:
        income += part.income
        outcome += part.outcome
        savings_in += part.savings_in
        savings_out += part.savings_out
        count += part.transaction_count
    return _totals(income, outcome, savings_in, savings_out, count)


def closing_balance(transactions: Sequence[Any]) -> float:
    """Balance after the latest-dated transaction; 0 for an empty bucket."""
    last = None
    for txn in transactions:
        if last is None or txn.date >= last.date:
            last = txn
    return last.balance_after if last is not None else 0.0


def group_by_key(transactions: Iterable[Any], key: str) -> dict[str, list[Any]]:
    """Group by a bucket key attribute, keys sorted ascending, order kept."""
    groups: dict[str, list[Any]] = {}
    for txn in transactions:
        groups.setdefault(getattr(txn, key), []).append(txn)
    return {k: groups[k] for k in sorted(groups)}


def month_label(month_key: str) -> str:
    year, month = month_key.split("-")
    return f"{MONTH_NAMES[int(month) - 1]} {year}"


def day_label(day_key: str) -> str:
    _, month, day = day_key.split("-")
    return f"{MONTH_NAMES[int(month) - 1][:3]} {int(day)}"


def summarize_days(transactions: Iterable[Any]) -> list[DaySummary]:
    summaries = []
    for key, group in group_by_key(transactions, "day_key").items():
        totals = fold_transactions(group)
        summaries.append(
            DaySummary(
                day_key=key,
                day=day_label(key),
                balance=closing_balance(group),
                **totals.model_dump(),
            )
        )
    return summaries


def summarize_months(transactions: Iterable[Any]) -> list[MonthSummary]:
    return [
        MonthSummary(month_key=key, month=month_label(key), **fold_transactions(group).model_dump())
        for key, group in group_by_key(transactions, "month_key").items()
    ]


def percentage(part: float, whole: float) -> int:
    """Integer share, halves rounded up."""
    if whole <= 0:
        return 0
    return int(math.floor(part / whole * 100 + 0.5))


class SummaryService:
    """Serve yearly, monthly, daily and per-category views."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.transaction_repo = TransactionRepository(db)

    async def yearly(self) -> list[MonthSummary]:
        """One row per stored month, oldest first."""
        transactions = await self.transaction_repo.list_in_storage_order()
        return summarize_months(transactions)

    async def monthly(self, year: int, month: int) -> list[DaySummary]:
        month_key = f"{year:04d}-{month:02d}"
        transactions = await self.transaction_repo.list_in_storage_order(month_key=month_key)
        return summarize_days(transactions)

    async def daily(self, year: int, month: int, day: int) -> DailyDetail:
        day_key = f"{year:04d}-{month:02d}-{day:02d}"
        transactions = await self.transaction_repo.list_in_storage_order(day_key=day_key)
        totals = fold_transactions(transactions)
        return DailyDetail(
            day_key=day_key,
            balance=closing_balance(transactions),
            transactions=[TransactionResponse.model_validate(t) for t in reversed(transactions)],
            **totals.model_dump(),
        )

    async def categories(self, year: int, month: int) -> CategorySummary:
        """Debit totals per category for one month, largest first."""
        month_key = f"{year:04d}-{month:02d}"
        rows = await self.transaction_repo.get_debit_totals_by_category(month_key)
        total_expenses = sum(total for _, total, _ in rows)
        categories = [
            CategoryTotal(
                category=category,
                total=_money(total),
                count=count,
                percentage=percentage(total, total_expenses),
            )
            for category, total, count in rows
        ]
        categories.sort(key=lambda c: c.total, reverse=True)
        return CategorySummary(
            month_key=month_key,
            total_expenses=_money(total_expenses),
            categories=categories,
        )
