"""Error codes and user-friendly messages.

This module defines the error catalog for statement import and the
transaction API. Each error has:
- error_code: Unique identifier
- message: Technical description (for logs)
- user_message: User-friendly explanation
- suggestion: Actionable guidance for the user
- retry_allowed: Whether the error is retryable
"""

# Error catalog for import and API errors
ERROR_CATALOG: dict[str, dict] = {
    "IMPORT_001": {
        "code": "IMPORT_001",
        "message": "No valid transactions found in CSV",
        "user_message": "We couldn't find any transactions in this file.",
        "suggestion": "Please upload an unmodified ZKB account statement CSV export.",
        "retry_allowed": False,
    },
    "IMPORT_002": {
        "code": "IMPORT_002",
        "message": "CSV could not be read",
        "user_message": "This file isn't a readable CSV export.",
        "suggestion": "Please upload the unmodified CSV export from ZKB e-banking.",
        "retry_allowed": False,
    },
    "DB_001": {
        "code": "DB_001",
        "message": "Database operation failed during transaction persistence",
        "user_message": "We couldn't save your transactions due to a database error.",
        "suggestion": "Please try again in a few moments. Rows already saved are kept.",
        "retry_allowed": True,
    },
    # API-specific errors
    "API_001": {
        "code": "API_001",
        "message": "Invalid file type uploaded",
        "user_message": "Only CSV files are supported.",
        "suggestion": "Please upload the CSV export of your account statement.",
        "retry_allowed": False,
    },
    "API_002": {
        "code": "API_002",
        "message": "File size exceeds maximum limit",
        "user_message": "The file is too large.",
        "suggestion": "Please export a shorter date range and upload it in parts.",
        "retry_allowed": False,
    },
    "API_003": {
        "code": "API_003",
        "message": "Empty upload body",
        "user_message": "No file was uploaded.",
        "suggestion": "Please choose a CSV file and try again.",
        "retry_allowed": False,
    },
    "API_006": {
        "code": "API_006",
        "message": "Transaction not found",
        "user_message": "We couldn't find this transaction.",
        "suggestion": "Please refresh and try again.",
        "retry_allowed": False,
    },
    "API_007": {
        "code": "API_007",
        "message": "Invalid category",
        "user_message": "That category isn't supported.",
        "suggestion": "Please choose a category from the allowed list.",
        "retry_allowed": False,
    },
    "API_010": {
        "code": "API_010",
        "message": "No transactions to export",
        "user_message": "There are no transactions to export.",
        "suggestion": "Import a statement first or choose a different year.",
        "retry_allowed": False,
    },
}


def get_error(error_code: str) -> dict:
    """Get error definition by code.

    Unknown codes resolve to a generic definition instead of raising.
    """
    if error_code not in ERROR_CATALOG:
        return {
            "code": "UNKNOWN",
            "message": f"Unknown error code: {error_code}",
            "user_message": "An unexpected error occurred.",
            "suggestion": "Please try again. Contact support if the problem persists.",
            "retry_allowed": True,
        }
    return ERROR_CATALOG[error_code]


def is_retryable(error_code: str) -> bool:
    """Check if an error is retryable."""
    return get_error(error_code)["retry_allowed"]
