"""Unit tests for SettingsService."""

from unittest.mock import AsyncMock, MagicMock, Mock, patch

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from ledger.core.exceptions import PersistenceError
from ledger.services.settings import SettingsService


async def test_falls_back_to_configured_name(db_session):
    with patch("ledger.services.settings.app_config") as config:
        config.user_full_name = "Config Name"
        assert await SettingsService(db_session).get_user_full_name() == "Config Name"


async def test_update_trims_and_persists(db_session):
    service = SettingsService(db_session)

    assert await service.update_user_full_name("  Jane Doe ") == "Jane Doe"
    assert await service.get_user_full_name() == "Jane Doe"

    assert await service.update_user_full_name("John Smith") == "John Smith"
    assert await service.get_user_full_name() == "John Smith"


async def test_stored_empty_name_wins_over_config(db_session):
    service = SettingsService(db_session)
    await service.update_user_full_name("")
    with patch("ledger.services.settings.app_config") as config:
        config.user_full_name = "Config Name"
        assert await service.get_user_full_name() == ""


async def test_update_failure_raises_persistence_error():
    db = AsyncMock(spec=AsyncSession)
    db.add = Mock()
    execute_result = MagicMock()
    execute_result.scalar_one_or_none.return_value = None
    db.execute = AsyncMock(return_value=execute_result)
    db.commit = AsyncMock(side_effect=OperationalError("INSERT", {}, Exception("locked")))
    db.rollback = AsyncMock()

    with pytest.raises(PersistenceError) as exc_info:
        await SettingsService(db).update_user_full_name("Jane Doe")

    assert exc_info.value.error_code == "DB_001"
    db.rollback.assert_awaited_once()
