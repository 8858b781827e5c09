"""Parser for ZKB account statement CSV exports.

Header (exact keys expected, ``;``-delimited, optional UTF-8 BOM):
Date; Booking text; Curr; Amount details; ZKB reference; Reference number;
Debit CHF; Credit CHF; Value date; Balance CHF; Payment purpose; Details

Rows without a parseable ``Date`` (blank lines, preamble, footer totals)
are dropped silently.
"""

from __future__ import annotations

import csv
import io
import logging
from collections.abc import Iterable, Iterator, Mapping

from ledger.categorization.rules import Categorizer, default_categorizer
from ledger.parsers.locale import parse_locale_date, parse_locale_number
from ledger.schemas.internal import ParsedTransaction

logger = logging.getLogger(__name__)

BOM = "\ufeff"
DELIMITER = ";"

# Width of the stored currency column; longer Curr cells are cut.
MAX_CURRENCY_LENGTH = 16

COL_DATE = "Date"
COL_BOOKING_TEXT = "Booking text"
COL_CURRENCY = "Curr"
COL_AMOUNT_DETAILS = "Amount details"
COL_REFERENCE = "ZKB reference"
COL_REFERENCE_NUMBER = "Reference number"
COL_DEBIT = "Debit CHF"
COL_CREDIT = "Credit CHF"
COL_VALUE_DATE = "Value date"
COL_BALANCE = "Balance CHF"
COL_PAYMENT_PURPOSE = "Payment purpose"
COL_DETAILS = "Details"

COLUMNS: tuple[str, ...] = (
    COL_DATE,
    COL_BOOKING_TEXT,
    COL_CURRENCY,
    COL_AMOUNT_DETAILS,
    COL_REFERENCE,
    COL_REFERENCE_NUMBER,
    COL_DEBIT,
    COL_CREDIT,
    COL_VALUE_DATE,
    COL_BALANCE,
    COL_PAYMENT_PURPOSE,
    COL_DETAILS,
)


def decode_upload(raw: bytes) -> str:
    """Decode upload bytes as UTF-8 and drop a leading byte-order mark."""
    text = raw.decode("utf-8", errors="replace")
    if text.startswith(BOM):
        text = text[len(BOM):]
    return text


def read_rows(text: str) -> Iterator[dict[str, str]]:
    """Yield header-keyed rows from ``;``-delimited CSV text.

    Headers and cells are trimmed, blank lines are skipped, short rows are
    padded with empty strings and surplus cells are ignored.
    """
    reader = csv.reader(io.StringIO(text, newline=""), delimiter=DELIMITER)
    header: list[str] | None = None
    for cells in reader:
        cells = [c.strip() for c in cells]
        if not any(cells):
            continue
        if header is None:
            header = cells
            continue
        padded = cells + [""] * (len(header) - len(cells))
        yield dict(zip(header, padded))


def normalize_row(
    row: Mapping[str, str | None],
    categorizer: Categorizer = default_categorizer,
    user_full_name: str | None = None,
) -> ParsedTransaction | None:
    """Map one raw row to a ParsedTransaction, or ``None`` if it has no date."""
    booking_date = parse_locale_date(row.get(COL_DATE))
    if booking_date is None:
        return None

    debit_amount = parse_locale_number(row.get(COL_DEBIT))
    credit_amount = parse_locale_number(row.get(COL_CREDIT))
    transaction_type = "credit" if credit_amount > 0 else "debit"
    booking_text = row.get(COL_BOOKING_TEXT) or ""
    payment_purpose = row.get(COL_PAYMENT_PURPOSE) or ""

    return ParsedTransaction(
        date=booking_date,
        value_date=parse_locale_date(row.get(COL_VALUE_DATE)),
        booking_text=booking_text,
        currency=(row.get(COL_CURRENCY) or "CHF")[:MAX_CURRENCY_LENGTH],
        amount_details=row.get(COL_AMOUNT_DETAILS) or "",
        external_reference=row.get(COL_REFERENCE) or "",
        reference_number=row.get(COL_REFERENCE_NUMBER) or "",
        debit_amount=debit_amount,
        credit_amount=credit_amount,
        balance_after=parse_locale_number(row.get(COL_BALANCE)),
        payment_purpose=payment_purpose,
        details=row.get(COL_DETAILS) or "",
        category=categorizer.categorize(
            booking_text, payment_purpose, transaction_type, user_full_name
        ),
        category_manual=False,
    )


def normalize_rows(
    rows: Iterable[Mapping[str, str | None]],
    categorizer: Categorizer = default_categorizer,
    user_full_name: str | None = None,
) -> list[ParsedTransaction]:
    transactions: list[ParsedTransaction] = []
    dropped = 0
    for row in rows:
        parsed = normalize_row(row, categorizer, user_full_name)
        if parsed is None:
            dropped += 1
            continue
        transactions.append(parsed)

    if dropped:
        logger.info("Dropped rows without a booking date", extra={"dropped_rows": dropped})
    return transactions


def parse_statement(
    raw: bytes,
    categorizer: Categorizer = default_categorizer,
    user_full_name: str | None = None,
) -> list[ParsedTransaction]:
    """Parse a whole ZKB CSV export into normalized transactions."""
    return normalize_rows(read_rows(decode_upload(raw)), categorizer, user_full_name)
