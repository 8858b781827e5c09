"""Category endpoints: the category set, rules, summaries and overrides."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Path

from ledger.api.deps import get_category_service, get_summary_service
from ledger.schemas.summary import CategorySummary
from ledger.schemas.transaction import (
    CategoryRuleResponse,
    CategoryUpdateRequest,
    RecategorizeResult,
    TransactionResponse,
)
from ledger.services.categories import CategoryService
from ledger.services.summary import SummaryService

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get("", response_model=list[str], summary="List the category set")
async def list_categories(
    service: CategoryService = Depends(get_category_service),
) -> list[str]:
    return service.list_categories()


@router.get(
    "/rules",
    response_model=list[CategoryRuleResponse],
    summary="List categorization rules in evaluation order",
)
async def list_rules(
    service: CategoryService = Depends(get_category_service),
) -> list[CategoryRuleResponse]:
    return [
        CategoryRuleResponse(category=rule.category, patterns=list(rule.patterns), priority=rule.priority)
        for rule in service.list_rules()
    ]


@router.get(
    "/summary/{year}/{month}",
    response_model=CategorySummary,
    summary="Debit totals per category for one month",
)
async def get_category_summary(
    year: Annotated[int, Path(ge=1900, le=9999, description="Year (YYYY)")],
    month: Annotated[int, Path(ge=1, le=12, description="Month (1-12)")],
    service: SummaryService = Depends(get_summary_service),
) -> CategorySummary:
    return await service.categories(year, month)


@router.patch(
    "/transaction/{transaction_id}",
    response_model=TransactionResponse,
    summary="Set a transaction's category by hand",
    description="""
    The category must be one of the fixed category set. A manually set
    category is kept by later recategorization runs.

    ## Error Codes
    - API_006: Transaction not found
    - API_007: Invalid category
    """,
)
async def update_transaction_category(
    transaction_id: UUID,
    body: CategoryUpdateRequest,
    service: CategoryService = Depends(get_category_service),
) -> TransactionResponse:
    txn = await service.set_manual_category(transaction_id, body.category)
    return TransactionResponse.model_validate(txn)


@router.post(
    "/recategorize",
    response_model=RecategorizeResult,
    summary="Re-run the categorizer over stored transactions",
)
async def recategorize_transactions(
    service: CategoryService = Depends(get_category_service),
) -> RecategorizeResult:
    updated, total = await service.recategorize_all()
    return RecategorizeResult(
        updated=updated,
        total=total,
        message=f"Updated {updated} of {total} transactions",
    )
