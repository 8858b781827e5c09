"""Transaction endpoints: upload, listing, summaries, bulk delete and export."""

from datetime import date
from typing import Annotated, Literal

from fastapi import APIRouter, Depends, Path, Query, Request, Response, status

from ledger.api.deps import (
    get_export_service,
    get_import_service,
    get_summary_service,
)
from ledger.config import settings
from ledger.core.exceptions import UploadRejectedError
from ledger.db.session import get_db
from ledger.repositories.transaction import TransactionRepository
from ledger.schemas.summary import DailyDetail, DaySummary, MonthSummary
from ledger.schemas.transaction import (
    DeleteResult,
    ImportResponse,
    MoneyMeta,
    PaginationMeta,
    TransactionListResult,
    TransactionResponse,
)
from ledger.services.export import ExportService
from ledger.services.importer import ImportService
from ledger.services.summary import SummaryService

router = APIRouter(prefix="/transactions", tags=["transactions"])

ALLOWED_CONTENT_TYPES = {
    "text/csv",
    "application/csv",
    "text/plain",
    "application/vnd.ms-excel",
    "application/octet-stream",
}

YearPath = Annotated[int, Path(ge=1900, le=9999, description="Year (YYYY)")]
MonthPath = Annotated[int, Path(ge=1, le=12, description="Month (1-12)")]
DayPath = Annotated[int, Path(ge=1, le=31, description="Day of month (1-31)")]


async def _read_upload(request: Request) -> bytes:
    """Read the raw request body with a strict size cap."""
    content_type = (request.headers.get("content-type") or "").split(";")[0].strip().lower()
    if content_type not in ALLOWED_CONTENT_TYPES:
        raise UploadRejectedError("API_001", {"content_type": content_type})

    max_bytes = settings.upload_max_size_mb * 1024 * 1024
    buf = bytearray()
    async for chunk in request.stream():
        if not chunk:
            continue
        if len(buf) + len(chunk) > max_bytes:
            raise UploadRejectedError(
                "API_002", {"max_bytes": max_bytes}, http_status=status.HTTP_413_CONTENT_TOO_LARGE
            )
        buf.extend(chunk)

    if not buf:
        raise UploadRejectedError("API_003")
    return bytes(buf)


@router.post(
    "/upload",
    response_model=ImportResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Import a ZKB statement CSV",
    description="""
    Import a ZKB account statement CSV export.

    ## File Requirements
    - Request body is the raw CSV (`Content-Type: text/csv`)
    - `;`-delimited with header row, optional UTF-8 BOM
    - Maximum size: configurable via `UPLOAD_MAX_SIZE_MB`

    Rows whose ZKB reference is already stored are skipped.

    ## Error Codes
    - IMPORT_001: No valid transactions found
    - IMPORT_002: File is not readable as CSV
    - API_001: Invalid file type
    - API_002: File too large
    - API_003: Empty upload
    """,
)
async def upload_transactions(
    request: Request,
    service: ImportService = Depends(get_import_service),
) -> ImportResponse:
    raw = await _read_upload(request)
    result = await service.import_batch(raw)
    return ImportResponse(
        batch_id=result.batch_id,
        imported=result.imported,
        skipped=result.skipped,
        message=f"Successfully imported {result.imported} transactions",
    )


@router.get(
    "",
    response_model=TransactionListResult,
    summary="List transactions with filters",
    description="""
    ## Filters
    - **type**: debit or credit
    - **month_key**: YYYY-MM (takes precedence over the date range)
    - **start_date**, **end_date**: Date range filter (inclusive)
    - **search**: Search booking text (case-insensitive)

    ## Sorting
    - **sort_by**: date (default), amount, booking_text, category, balance_after
    - **order**: desc (default) or asc
    """,
)
async def list_transactions(
    page: Annotated[int, Query(ge=1, description="Page number (1-indexed)")] = 1,
    limit: Annotated[int, Query(ge=1, le=1000, description="Items per page (1-1000)")] = 50,
    sort_by: Annotated[
        Literal["date", "amount", "booking_text", "category", "balance_after"],
        Query(description="Sort field"),
    ] = "date",
    order: Annotated[Literal["asc", "desc"], Query(description="Sort order")] = "desc",
    type: Annotated[
        Literal["debit", "credit"] | None, Query(description="Filter by transaction type")
    ] = None,
    month_key: Annotated[
        str | None, Query(pattern=r"^\d{4}-\d{2}$", description="Filter by month (YYYY-MM)")
    ] = None,
    start_date: Annotated[date | None, Query(description="Filter from date (inclusive)")] = None,
    end_date: Annotated[date | None, Query(description="Filter to date (inclusive)")] = None,
    search: Annotated[str | None, Query(description="Search booking text")] = None,
    db=Depends(get_db),
) -> TransactionListResult:
    repo = TransactionRepository(db)
    transactions, total = await repo.list_transactions(
        type=type,
        month_key=month_key,
        start_date=start_date,
        end_date=end_date,
        search=search,
        sort_by=sort_by,
        descending=(order == "desc"),
        skip=(page - 1) * limit,
        limit=limit,
    )

    total_pages = (total + limit - 1) // limit if total > 0 else 0
    return TransactionListResult(
        transactions=[TransactionResponse.model_validate(t) for t in transactions],
        pagination=PaginationMeta(page=page, limit=limit, total=total, total_pages=total_pages),
        money=MoneyMeta(currency=settings.currency),
    )


@router.get(
    "/summary/yearly",
    response_model=list[MonthSummary],
    summary="Monthly totals across all stored months",
)
async def get_yearly_summary(
    service: SummaryService = Depends(get_summary_service),
) -> list[MonthSummary]:
    return await service.yearly()


@router.get(
    "/summary/monthly/{year}/{month}",
    response_model=list[DaySummary],
    summary="Daily totals and closing balances for one month",
)
async def get_monthly_summary(
    year: YearPath,
    month: MonthPath,
    service: SummaryService = Depends(get_summary_service),
) -> list[DaySummary]:
    return await service.monthly(year, month)


@router.get(
    "/summary/daily/{year}/{month}/{day}",
    response_model=DailyDetail,
    summary="Totals, balance and transactions of one day",
)
async def get_daily_summary(
    year: YearPath,
    month: MonthPath,
    day: DayPath,
    service: SummaryService = Depends(get_summary_service),
) -> DailyDetail:
    return await service.daily(year, month, day)


@router.delete(
    "/batch/{batch_id}",
    response_model=DeleteResult,
    summary="Delete every transaction of one import batch",
)
async def delete_batch(batch_id: str, db=Depends(get_db)) -> DeleteResult:
    deleted = await TransactionRepository(db).delete_by_batch(batch_id)
    return DeleteResult(deleted=deleted, message=f"Deleted {deleted} transactions")


@router.delete(
    "/all",
    response_model=DeleteResult,
    summary="Delete all transactions, optionally for one year",
)
async def delete_all_transactions(
    year: Annotated[str | None, Query(pattern=r"^\d{4}$", description="Limit to year (YYYY)")] = None,
    db=Depends(get_db),
) -> DeleteResult:
    deleted = await TransactionRepository(db).delete_all(year_key=year)
    year_msg = f" for year {year}" if year else ""
    return DeleteResult(deleted=deleted, message=f"Deleted {deleted} transactions{year_msg}")


@router.get(
    "/export",
    summary="Export transactions as ZKB-style CSV",
    response_class=Response,
    responses={
        200: {"content": {"text/csv": {}}, "description": "CSV file"},
        404: {"description": "No transactions to export"},
    },
)
async def export_transactions(
    year: Annotated[str | None, Query(pattern=r"^\d{4}$", description="Limit to year (YYYY)")] = None,
    service: ExportService = Depends(get_export_service),
) -> Response:
    filename, content = await service.export(year)
    return Response(
        content=content.encode("utf-8"),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
