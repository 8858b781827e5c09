"""Transaction categorization utilities.

Local, rule-based categorization of statement rows from their booking
text and payment purpose.
"""

from .rules import (
    CATEGORIES,
    SAVINGS_TRANSFER,
    UNCATEGORIZED,
    Categorizer,
    CategoryRule,
    categorize,
)

__all__ = [
    "CATEGORIES",
    "SAVINGS_TRANSFER",
    "UNCATEGORIZED",
    "Categorizer",
    "CategoryRule",
    "categorize",
]
