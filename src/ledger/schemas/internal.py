"""Internal data schemas for parsed statement rows.

These models represent one normalized CSV row before it is tagged with a
batch and persisted. Type, amount and the bucket keys are computed from the
stored fields so they can never disagree with them.
"""

import datetime as dt
from typing import Literal

from pydantic import BaseModel, Field, computed_field

from ledger.parsers.locale import day_key, month_key, year_key


class ParsedTransaction(BaseModel):
    """A single statement row, normalized and categorized."""

    date: dt.date = Field(..., description="Booking date")
    value_date: dt.date | None = Field(None, description="Settlement date")
    booking_text: str = ""
    currency: str = "CHF"
    amount_details: str = ""
    external_reference: str = Field("", description="ZKB reference, empty when absent")
    reference_number: str = ""
    debit_amount: float = 0.0
    credit_amount: float = 0.0
    balance_after: float = 0.0
    payment_purpose: str = ""
    details: str = ""
    category: str = "Uncategorized"
    category_manual: bool = False

    @computed_field
    @property
    def type(self) -> Literal["debit", "credit"]:
        return "credit" if self.credit_amount > 0 else "debit"

    @computed_field
    @property
    def amount(self) -> float:
        return self.credit_amount if self.type == "credit" else self.debit_amount

    @computed_field
    @property
    def year_key(self) -> str:
        return year_key(self.date)

    @computed_field
    @property
    def month_key(self) -> str:
        return month_key(self.date)

    @computed_field
    @property
    def day_key(self) -> str:
        return day_key(self.date)


class ImportResult(BaseModel):
    """Outcome of importing one uploaded file."""

    batch_id: str = Field(description="Identifier shared by all rows of this upload")
    imported: int = Field(description="Rows persisted")
    skipped: int = Field(description="Rows skipped because their reference already exists")
