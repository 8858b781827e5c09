"""Swiss locale helpers for ZKB statement fields.

ZKB exports dates as ``DD.MM.YYYY`` and amounts with ``'`` as thousands
separator and ``,`` as decimal separator (``1'234,56``). Parsing never
raises: unusable dates become ``None`` and unusable numbers become ``0``.
"""

from __future__ import annotations

import re
from datetime import date, timedelta

# Leading decimal number, mirroring a lenient "parse as much as you can".
_NUMBER_PREFIX = re.compile(r"[-+]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][-+]?\d+)?")


def _to_int(part: str) -> int | None:
    part = part.strip()
    if not re.fullmatch(r"[-+]?\d+", part):
        return None
    return int(part)


def parse_locale_date(value: str | None) -> date | None:
    """Parse ``DD.MM.YYYY`` into a date.

    Day and month are not range-checked: out-of-range components roll over
    with calendar arithmetic, so ``31.04.2024`` becomes 2024-05-01 and
    ``00.03.2024`` becomes 2024-02-29.
    """
    if not value or not value.strip():
        return None

    parts = value.strip().split(".")
    if len(parts) != 3:
        return None

    day, month, year = (_to_int(p) for p in parts)
    if day is None or month is None or year is None:
        return None

    # Normalize the month first (month 13 -> January next year), then add
    # the day offset onto the first of that month.
    year_offset, month_index = divmod(month - 1, 12)
    try:
        first_of_month = date(year + year_offset, month_index + 1, 1)
        return first_of_month + timedelta(days=day - 1)
    except (ValueError, OverflowError):
        return None


def parse_locale_number(value: str | None) -> float:
    """Parse a Swiss-formatted number such as ``1'234,56``.

    Empty input is 0; so is anything without a leading number.
    """
    if not value or not value.strip():
        return 0.0

    cleaned = value.strip().replace("'", "").replace(",", ".", 1)
    match = _NUMBER_PREFIX.match(cleaned)
    if not match:
        return 0.0
    try:
        return float(match.group(0))
    except ValueError:
        return 0.0


def format_locale_date(value: date) -> str:
    return f"{value.day:02d}.{value.month:02d}.{value.year:04d}"


def format_locale_number(value: float | None) -> str:
    """Render an amount the way the bank does, minus thousands separators.

    Zero renders as an empty cell, matching the export's debit/credit columns.
    """
    if not value:
        return ""
    return f"{value:.2f}".replace(".", ",")


def year_key(value: date) -> str:
    return f"{value.year:04d}"


def month_key(value: date) -> str:
    return f"{value.year:04d}-{value.month:02d}"


def day_key(value: date) -> str:
    return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"
