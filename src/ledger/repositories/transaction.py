"""Transaction repository with filtering, bulk delete and summary queries."""
from datetime import date

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ledger.categorization.rules import UNCATEGORIZED
from ledger.models.transaction import Transaction
from ledger.repositories.base import BaseRepository

# Storage order: booking date, then insertion order.
INSERTION_ORDER = (Transaction.date, Transaction.imported_at, Transaction.row_index)

SORTABLE_FIELDS = {
    "date": Transaction.date,
    "amount": Transaction.amount,
    "booking_text": Transaction.booking_text,
    "category": Transaction.category,
    "balance_after": Transaction.balance_after,
}


class TransactionRepository(BaseRepository[Transaction]):
    """Repository for Transaction model with filtering and bucket queries."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, Transaction)

    async def get_by_external_reference(self, reference: str) -> Transaction | None:
        """Find the stored transaction carrying a bank reference."""
        result = await self.db.execute(
            select(Transaction).where(Transaction.external_reference == reference)
        )
        return result.scalars().first()

    async def list_transactions(
        self,
        *,
        type: str | None = None,
        month_key: str | None = None,
        start_date: date | None = None,
        end_date: date | None = None,
        search: str | None = None,
        sort_by: str = "date",
        descending: bool = True,
        skip: int = 0,
        limit: int = 50,
    ) -> tuple[list[Transaction], int]:
        """Filtered, sorted page of transactions plus the total match count.

        ``month_key`` takes precedence over the date range.
        """
        query = select(Transaction)

        if type in ("debit", "credit"):
            query = query.where(Transaction.type == type)

        if month_key:
            query = query.where(Transaction.month_key == month_key)
        else:
            if start_date:
                query = query.where(Transaction.date >= start_date)
            if end_date:
                query = query.where(Transaction.date <= end_date)

        if search:
            query = query.where(Transaction.booking_text.ilike(f"%{search}%"))

        count_query = select(func.count()).select_from(query.subquery())
        total = (await self.db.execute(count_query)).scalar() or 0

        column = SORTABLE_FIELDS.get(sort_by, Transaction.date)
        query = query.order_by(column.desc() if descending else column.asc())
        query = query.offset(skip).limit(limit)

        result = await self.db.execute(query)
        return list(result.scalars().all()), total

    async def list_in_storage_order(
        self,
        *,
        year_key: str | None = None,
        month_key: str | None = None,
        day_key: str | None = None,
    ) -> list[Transaction]:
        """Transactions of a bucket (or all) ordered by date, then insertion."""
        query = select(Transaction)
        if year_key:
            query = query.where(Transaction.year_key == year_key)
        if month_key:
            query = query.where(Transaction.month_key == month_key)
        if day_key:
            query = query.where(Transaction.day_key == day_key)
        result = await self.db.execute(query.order_by(*INSERTION_ORDER))
        return list(result.scalars().all())

    async def list_auto_categorized(self) -> list[Transaction]:
        """Transactions whose category was never set by hand."""
        result = await self.db.execute(
            select(Transaction)
            .where(Transaction.category_manual == False)  # noqa: E712
            .order_by(*INSERTION_ORDER)
        )
        return list(result.scalars().all())

    async def get_debit_totals_by_category(self, month_key: str) -> list[tuple[str, float, int]]:
        """(category, total debit, count) for the debits of one month."""
        result = await self.db.execute(
            select(
                Transaction.category,
                func.sum(Transaction.debit_amount).label("total"),
                func.count(Transaction.id).label("count"),
            )
            .where(Transaction.month_key == month_key, Transaction.type == "debit")
            .group_by(Transaction.category)
        )
        return [
            (row.category or UNCATEGORIZED, float(row.total or 0), int(row.count or 0))
            for row in result
        ]

    async def delete_by_batch(self, batch_id: str) -> int:
        """Delete every transaction of an import batch."""
        result = await self.db.execute(
            delete(Transaction).where(Transaction.import_batch_id == batch_id)
        )
        await self.db.commit()
        return int(result.rowcount or 0)

    async def delete_all(self, year_key: str | None = None) -> int:
        """Delete all transactions, or only those of one year."""
        stmt = delete(Transaction)
        if year_key:
            stmt = stmt.where(Transaction.year_key == year_key)
        result = await self.db.execute(stmt)
        await self.db.commit()
        return int(result.rowcount or 0)
