"""Transaction model representing one booked line of an account statement."""
import datetime as dt

from sqlalchemy import Boolean, Date, DateTime, Float, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from ledger.models.base import BaseModel, utcnow


class Transaction(BaseModel):
    """A normalized, categorized statement row.

    ``external_reference`` is NULL when the bank supplied no reference so the
    unique constraint only applies to real references.
    """

    __tablename__ = "transactions"

    external_reference: Mapped[str | None] = mapped_column(
        String(100), nullable=True, unique=True
    )
    date: Mapped[dt.date] = mapped_column(Date, nullable=False, index=True)
    value_date: Mapped[dt.date | None] = mapped_column(Date, nullable=True)
    year_key: Mapped[str] = mapped_column(String(4), nullable=False, index=True)
    month_key: Mapped[str] = mapped_column(String(7), nullable=False, index=True)
    day_key: Mapped[str] = mapped_column(String(10), nullable=False, index=True)

    booking_text: Mapped[str] = mapped_column(Text, nullable=False, default="")
    payment_purpose: Mapped[str] = mapped_column(Text, nullable=False, default="")
    amount_details: Mapped[str] = mapped_column(Text, nullable=False, default="")
    details: Mapped[str] = mapped_column(Text, nullable=False, default="")
    reference_number: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    currency: Mapped[str] = mapped_column(String(16), nullable=False, default="CHF")

    debit_amount: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    credit_amount: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    balance_after: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    type: Mapped[str] = mapped_column(String(6), nullable=False)
    amount: Mapped[float] = mapped_column(Float, nullable=False)

    category: Mapped[str] = mapped_column(
        String(50), nullable=False, default="Uncategorized", index=True
    )
    category_manual: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    import_batch_id: Mapped[str] = mapped_column(String(40), nullable=False, index=True)
    imported_at: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
    )
    # Position of the row in its source file; breaks same-day ties.
    row_index: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    __table_args__ = (
        Index("ix_transactions_month_key_type", "month_key", "type"),
        Index("ix_transactions_day_key_type", "day_key", "type"),
    )

    def __repr__(self) -> str:
        return (
            f"<Transaction(id={self.id}, day={self.day_key}, type={self.type}, "
            f"amount={self.amount}, category={self.category})>"
        )
