"""Repository for the single-row application settings table."""
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ledger.models.app_setting import AppSetting
from ledger.repositories.base import BaseRepository

DEFAULT_KEY = "default"


class AppSettingRepository(BaseRepository[AppSetting]):
    def __init__(self, db: AsyncSession):
        super().__init__(db, AppSetting)

    async def get_by_key(self, key: str = DEFAULT_KEY) -> AppSetting | None:
        result = await self.db.execute(select(AppSetting).where(AppSetting.key == key))
        return result.scalar_one_or_none()

    async def upsert(self, user_full_name: str, key: str = DEFAULT_KEY) -> AppSetting:
        """Create or update the settings row for ``key``."""
        existing = await self.get_by_key(key)
        if existing:
            existing.user_full_name = user_full_name
            await self.db.commit()
            await self.db.refresh(existing)
            return existing
        return await self.create(AppSetting(key=key, user_full_name=user_full_name))
