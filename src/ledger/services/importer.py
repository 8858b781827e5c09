"""Statement import service.

This module orchestrates the import of one uploaded CSV export:
1. Decode and parse the CSV
2. Normalize and categorize every row
3. Reject files without usable rows
4. Skip rows whose bank reference is already stored
5. Persist the rest, one commit per row

Rows are independent: a storage failure halfway through leaves the rows
committed before it in place.
"""

import csv
import logging
import time
from datetime import datetime
from uuid import uuid4

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ledger.categorization.rules import Categorizer, default_categorizer
from ledger.config import settings
from ledger.core.exceptions import EmptyImportError, PersistenceError, UnreadableFileError
from ledger.models.base import utcnow
from ledger.models.transaction import Transaction
from ledger.parsers.zkb_csv import parse_statement
from ledger.repositories.transaction import TransactionRepository
from ledger.schemas.internal import ImportResult, ParsedTransaction
from ledger.services.settings import SettingsService

logger = logging.getLogger(__name__)


def new_batch_id() -> str:
    """Batch identifier: ``batch_<epoch millis>_<8 hex chars>``."""
    return f"batch_{int(time.time() * 1000)}_{uuid4().hex[:8]}"


def to_model(
    parsed: ParsedTransaction, batch_id: str, row_index: int, imported_at: datetime
) -> Transaction:
    data = parsed.model_dump(exclude={"external_reference"})
    return Transaction(
        **data,
        external_reference=parsed.external_reference or None,
        import_batch_id=batch_id,
        imported_at=imported_at,
        row_index=row_index,
    )


class ImportService:
    """Import ZKB CSV exports into the transaction store.

    Deduplication is check-then-insert backed by the unique constraint on
    ``external_reference``: a constraint violation (another import stored
    the same reference in between) counts as skipped.
    """

    def __init__(self, db: AsyncSession, categorizer: Categorizer = default_categorizer):
        self.db = db
        self.categorizer = categorizer
        self.transaction_repo = TransactionRepository(db)
        self.settings_service = SettingsService(db)

    async def import_batch(self, raw: bytes, user_full_name: str | None = None) -> ImportResult:
        """Import one uploaded file.

        Args:
            raw: File content as uploaded
            user_full_name: Account holder name for savings-transfer
                detection; read from settings when omitted

        Returns:
            ImportResult with the batch id and imported/skipped counts

        Raises:
            EmptyImportError: If no row has a usable booking date
            UnreadableFileError: If the content is not readable as CSV
            PersistenceError: If a storage operation fails
        """
        if user_full_name is None:
            user_full_name = await self._resolve_user_full_name()

        try:
            parsed = parse_statement(raw, self.categorizer, user_full_name)
        except csv.Error as e:
            logger.warning("Import rejected: unreadable CSV", extra={"size_bytes": len(raw)})
            raise UnreadableFileError("IMPORT_002", {"reason": str(e)}) from e

        if not parsed:
            logger.warning("Import rejected: no usable rows", extra={"size_bytes": len(raw)})
            raise EmptyImportError("IMPORT_001", {"reason": "no_transactions"})

        batch_id = new_batch_id()
        logger.info(
            "Starting import", extra={"batch_id": batch_id, "rows": len(parsed)}
        )

        imported_at = utcnow()
        imported = 0
        skipped = 0
        for row_index, txn in enumerate(parsed):
            try:
                if txn.external_reference and await self._reference_exists(txn.external_reference):
                    skipped += 1
                    continue

                await self.transaction_repo.create(
                    to_model(txn, batch_id, row_index, imported_at)
                )
                imported += 1

            except IntegrityError as e:
                await self.db.rollback()
                if not txn.external_reference:
                    self._log_failure(e, batch_id, imported)
                    raise PersistenceError(
                        "DB_001", {"batch_id": batch_id, "imported": imported}
                    ) from e
                logger.info(
                    "Reference stored concurrently; skipping",
                    extra={"batch_id": batch_id, "row_index": row_index},
                )
                skipped += 1

            except SQLAlchemyError as e:
                await self.db.rollback()
                self._log_failure(e, batch_id, imported)
                raise PersistenceError(
                    "DB_001", {"batch_id": batch_id, "imported": imported}
                ) from e

        logger.info(
            "Import complete",
            extra={"batch_id": batch_id, "imported": imported, "skipped": skipped},
        )
        return ImportResult(batch_id=batch_id, imported=imported, skipped=skipped)

    async def _resolve_user_full_name(self) -> str:
        try:
            return await self.settings_service.get_user_full_name()
        except SQLAlchemyError as e:
            self._log_failure(e, None, 0)
            raise PersistenceError("DB_001") from e

    async def _reference_exists(self, reference: str) -> bool:
        return await self.transaction_repo.get_by_external_reference(reference) is not None

    def _log_failure(self, exc: Exception, batch_id: str | None, imported: int) -> None:
        extra = {"error_type": type(exc).__name__, "batch_id": batch_id, "imported": imported}
        if settings.debug:
            logger.exception("Transaction persistence failed", extra=extra)
        else:
            logger.error("Transaction persistence failed", extra=extra)
