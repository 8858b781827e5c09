"""Application settings persisted in the database (single "default" row)."""
from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from ledger.models.base import BaseModel


class AppSetting(BaseModel):
    """Editable application settings, keyed so a single row can be upserted."""

    __tablename__ = "app_settings"

    key: Mapped[str] = mapped_column(String(50), unique=True, nullable=False, default="default")
    user_full_name: Mapped[str] = mapped_column(String(255), nullable=False, default="")

    def __repr__(self) -> str:
        return f"<AppSetting(key={self.key})>"
