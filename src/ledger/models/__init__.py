"""Database models."""
from ledger.models.app_setting import AppSetting
from ledger.models.transaction import Transaction

__all__ = ["AppSetting", "Transaction"]
