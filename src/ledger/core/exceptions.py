"""Custom exception classes for import and transaction management.

Each exception carries an error_code that maps to the catalog in
errors.py, plus the HTTP status the API layer answers with.

Row-level parse problems are deliberately absent: a row without a usable
date is dropped by the normalizer, never raised.
"""

from typing import Any


class LedgerError(Exception):
    """Base exception for all ledger errors.

    Attributes:
        error_code: Code from the error catalog (e.g., "IMPORT_001")
        details: Additional context about the error (for logging)
        http_status: HTTP status code to return (default: 500)
    """

    default_status = 500

    def __init__(
        self,
        error_code: str,
        details: dict[str, Any] | None = None,
        http_status: int | None = None,
    ):
        self.error_code = error_code
        self.details = details or {}
        self.http_status = http_status or self.default_status
        super().__init__(error_code)


class EmptyImportError(LedgerError):
    """Raised when an uploaded file yields zero usable transactions.

    Nothing is persisted and no batch id is generated.
    """

    default_status = 400


class UnreadableFileError(LedgerError):
    """Raised when the upload is not parseable as CSV at all."""

    default_status = 400


class UploadRejectedError(LedgerError):
    """Raised when the upload itself is unacceptable (type, size, empty)."""

    default_status = 400


class UnknownCategoryError(LedgerError):
    """Raised when a category outside the fixed category set is requested."""

    default_status = 400


class TransactionNotFoundError(LedgerError):
    default_status = 404


class NothingToExportError(LedgerError):
    default_status = 404


class PersistenceError(LedgerError):
    """Raised when a storage operation fails.

    Rows committed before the failure stay committed; the caller decides
    whether to retry.
    """

    default_status = 503
