"""Application settings editable at runtime (account holder name)."""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ledger.config import settings as app_config
from ledger.core.exceptions import PersistenceError
from ledger.repositories.app_setting import AppSettingRepository

logger = logging.getLogger(__name__)


class SettingsService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.repo = AppSettingRepository(db)

    async def get_user_full_name(self) -> str:
        """Stored account holder name, or the configured fallback."""
        stored = await self.repo.get_by_key()
        if stored is None:
            return app_config.user_full_name
        return stored.user_full_name

    async def update_user_full_name(self, user_full_name: str) -> str:
        name = user_full_name.strip()
        try:
            stored = await self.repo.upsert(name)
        except SQLAlchemyError as e:
            logger.error("Settings update failed", extra={"error_type": type(e).__name__})
            await self.db.rollback()
            raise PersistenceError("DB_001") from e
        logger.info("Account holder name updated")
        return stored.user_full_name
