"""Pydantic schemas for transaction requests and API responses."""

import datetime as dt
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class MoneyMeta(BaseModel):
    """Metadata describing how monetary amounts are represented."""

    currency: str = Field(description="ISO currency code (e.g., CHF)")


class PaginationMeta(BaseModel):
    page: int
    limit: int
    total: int
    total_pages: int


class TransactionResponse(BaseModel):
    """Transaction data for API responses."""

    id: UUID
    date: dt.date = Field(description="Booking date")
    value_date: dt.date | None = None
    booking_text: str
    payment_purpose: str = ""
    amount_details: str = ""
    details: str = ""
    external_reference: str | None = Field(None, description="ZKB reference")
    reference_number: str = ""
    currency: str = "CHF"
    debit_amount: float = 0.0
    credit_amount: float = 0.0
    balance_after: float = 0.0
    type: str = Field(description="'debit' or 'credit'")
    amount: float
    year_key: str
    month_key: str
    day_key: str
    category: str
    category_manual: bool = False
    import_batch_id: str
    imported_at: dt.datetime

    model_config = ConfigDict(from_attributes=True)


class TransactionListResult(BaseModel):
    transactions: list[TransactionResponse]
    pagination: PaginationMeta
    money: MoneyMeta


class ImportResponse(BaseModel):
    """Result of a statement upload."""

    batch_id: str
    imported: int = Field(description="Transactions stored")
    skipped: int = Field(description="Transactions skipped as duplicates")
    message: str


class DeleteResult(BaseModel):
    deleted: int
    message: str


class CategoryUpdateRequest(BaseModel):
    """Request to set a transaction's category by hand."""

    category: str = Field(description="Category to apply (must be from the category list)")


class CategoryRuleResponse(BaseModel):
    category: str
    patterns: list[str]
    priority: int


class RecategorizeResult(BaseModel):
    updated: int = Field(description="Transactions whose category changed")
    total: int = Field(description="Transactions considered (manual overrides excluded)")
    message: str


class SettingsResponse(BaseModel):
    user_full_name: str


class SettingsUpdateRequest(BaseModel):
    user_full_name: str = Field(description="Account holder name used to detect savings transfers")
