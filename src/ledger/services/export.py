"""CSV export in the bank's own layout plus a trailing Category column.

The output re-imports cleanly: same delimiter, BOM, date and number
conventions as the ZKB export. Numbers carry no thousands separator and a
zero amount is written as an empty cell.
"""

import csv
import io
import logging
from collections.abc import Iterable
from datetime import date
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from ledger.categorization.rules import UNCATEGORIZED
from ledger.core.exceptions import NothingToExportError
from ledger.parsers.locale import format_locale_date, format_locale_number
from ledger.parsers.zkb_csv import BOM, COLUMNS, DELIMITER
from ledger.repositories.transaction import TransactionRepository

logger = logging.getLogger(__name__)

EXPORT_COLUMNS: tuple[str, ...] = COLUMNS + ("Category",)


def export_row(txn: Any) -> list[str]:
    return [
        format_locale_date(txn.date),
        txn.booking_text or "",
        txn.currency or "CHF",
        txn.amount_details or "",
        txn.external_reference or "",
        txn.reference_number or "",
        format_locale_number(txn.debit_amount),
        format_locale_number(txn.credit_amount),
        format_locale_date(txn.value_date) if txn.value_date else "",
        format_locale_number(txn.balance_after),
        txn.payment_purpose or "",
        txn.details or "",
        txn.category or UNCATEGORIZED,
    ]


def render_export(transactions: Iterable[Any]) -> str:
    """Render transactions as BOM-prefixed, ``;``-delimited CSV text."""
    buf = io.StringIO()
    writer = csv.writer(buf, delimiter=DELIMITER, lineterminator="\n")
    writer.writerow(EXPORT_COLUMNS)
    for txn in transactions:
        writer.writerow(export_row(txn))
    return BOM + buf.getvalue()


def export_filename(year: str | None, today: date | None = None) -> str:
    today = today or date.today()
    suffix = f"_{year}" if year else ""
    return f"transactions_export{suffix}_{today.isoformat()}.csv"


class ExportService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.transaction_repo = TransactionRepository(db)

    async def export(self, year: str | None = None) -> tuple[str, str]:
        """Export all transactions (or one year), oldest first.

        Returns:
            Tuple of (filename, CSV content)

        Raises:
            NothingToExportError: If there is nothing to export
        """
        transactions = await self.transaction_repo.list_in_storage_order(year_key=year)
        if not transactions:
            raise NothingToExportError("API_010", {"year": year})

        logger.info("Exporting transactions", extra={"count": len(transactions), "year": year})
        return export_filename(year), render_export(transactions)
