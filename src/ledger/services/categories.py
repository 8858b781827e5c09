"""Category management: manual overrides and bulk recategorization."""

import logging
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ledger.categorization.rules import (
    CATEGORIES,
    Categorizer,
    CategoryRule,
    default_categorizer,
    is_valid_category,
)
from ledger.config import settings
from ledger.core.exceptions import (
    PersistenceError,
    TransactionNotFoundError,
    UnknownCategoryError,
)
from ledger.models.transaction import Transaction
from ledger.repositories.transaction import TransactionRepository
from ledger.services.settings import SettingsService

logger = logging.getLogger(__name__)


class CategoryService:
    """Apply the categorizer to stored transactions.

    Manual overrides (``category_manual``) are never touched by automatic
    recategorization.
    """

    def __init__(self, db: AsyncSession, categorizer: Categorizer = default_categorizer):
        self.db = db
        self.categorizer = categorizer
        self.transaction_repo = TransactionRepository(db)
        self.settings_service = SettingsService(db)

    def list_categories(self) -> list[str]:
        return list(CATEGORIES)

    def list_rules(self) -> list[CategoryRule]:
        """Rules in evaluation order (highest priority first)."""
        return list(self.categorizer.rules)

    async def set_manual_category(self, transaction_id: UUID, category: str) -> Transaction:
        """Set a category by hand and protect it from recategorization.

        Raises:
            UnknownCategoryError: If category is not in the category set
            TransactionNotFoundError: If no transaction has this id
        """
        if not is_valid_category(category):
            raise UnknownCategoryError("API_007", {"category": category})

        txn = await self.transaction_repo.get_by_id(transaction_id)
        if txn is None:
            raise TransactionNotFoundError("API_006", {"transaction_id": str(transaction_id)})

        try:
            txn.category = category
            txn.category_manual = True
            await self.db.commit()
            await self.db.refresh(txn)
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error("Category update failed", extra={"error_type": type(e).__name__})
            raise PersistenceError("DB_001") from e

        logger.info("Category set manually", extra={"transaction_id": str(transaction_id)})
        return txn

    async def recategorize_all(self, user_full_name: str | None = None) -> tuple[int, int]:
        """Re-run the categorizer over every automatically categorized row.

        Returns:
            Tuple of (updated, total considered)
        """
        try:
            if user_full_name is None:
                user_full_name = await self.settings_service.get_user_full_name()

            transactions = await self.transaction_repo.list_auto_categorized()
            updated = 0
            for txn in transactions:
                category = self.categorizer.categorize(
                    txn.booking_text, txn.payment_purpose, txn.type, user_full_name
                )
                if txn.category != category:
                    txn.category = category
                    updated += 1

            await self.db.commit()

        except SQLAlchemyError as e:
            await self.db.rollback()
            extra = {"error_type": type(e).__name__}
            if settings.debug:
                logger.exception("Recategorization failed", extra=extra)
            else:
                logger.error("Recategorization failed", extra=extra)
            raise PersistenceError("DB_001") from e

        logger.info("Recategorized transactions", extra={"updated": updated, "total": len(transactions)})
        return updated, len(transactions)
