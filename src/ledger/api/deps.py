"""FastAPI dependency injection for database sessions and services."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ledger.categorization.rules import Categorizer, default_categorizer
from ledger.db.session import get_db
from ledger.services.categories import CategoryService
from ledger.services.export import ExportService
from ledger.services.importer import ImportService
from ledger.services.settings import SettingsService
from ledger.services.summary import SummaryService

__all__ = [
    "get_db",
    "get_categorizer",
    "get_import_service",
    "get_category_service",
    "get_summary_service",
    "get_export_service",
    "get_settings_service",
]


def get_categorizer() -> Categorizer:
    """Rule table in use; override in tests to inject custom rules."""
    return default_categorizer


async def get_import_service(
    db: AsyncSession = Depends(get_db),
    categorizer: Categorizer = Depends(get_categorizer),
) -> ImportService:
    return ImportService(db, categorizer)


async def get_category_service(
    db: AsyncSession = Depends(get_db),
    categorizer: Categorizer = Depends(get_categorizer),
) -> CategoryService:
    return CategoryService(db, categorizer)


async def get_summary_service(db: AsyncSession = Depends(get_db)) -> SummaryService:
    return SummaryService(db)


async def get_export_service(db: AsyncSession = Depends(get_db)) -> ExportService:
    return ExportService(db)


async def get_settings_service(db: AsyncSession = Depends(get_db)) -> SettingsService:
    return SettingsService(db)
