"""Schemas for time-bucketed and per-category summaries."""

from pydantic import BaseModel, Field

from ledger.schemas.transaction import TransactionResponse


class BucketTotals(BaseModel):
    """Income/outcome figures of one time bucket.

    Savings transfers are kept out of income and outcome and reported
    separately as savings_in/savings_out.
    """

    income: float = 0.0
    outcome: float = 0.0
    savings: float = Field(0.0, description="income - outcome")
    savings_in: float = 0.0
    savings_out: float = 0.0
    savings_movement: float = Field(0.0, description="savings_in - savings_out")
    transaction_count: int = 0


class MonthSummary(BucketTotals):
    month_key: str
    month: str = Field(description="Display label, e.g. 'March 2024'")


class DaySummary(BucketTotals):
    day_key: str
    day: str = Field(description="Display label, e.g. 'Mar 15'")
    balance: float = Field(description="Account balance after the day's last transaction")


class DailyDetail(BucketTotals):
    day_key: str
    balance: float
    transactions: list[TransactionResponse] = Field(description="Newest first")


class CategoryTotal(BaseModel):
    category: str
    total: float
    count: int
    percentage: int = Field(description="Share of the month's expenses, rounded")


class CategorySummary(BaseModel):
    month_key: str
    total_expenses: float
    categories: list[CategoryTotal]
