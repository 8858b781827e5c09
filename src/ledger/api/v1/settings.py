"""Runtime settings endpoints."""

from fastapi import APIRouter, Depends

from ledger.api.deps import get_settings_service
from ledger.schemas.transaction import SettingsResponse, SettingsUpdateRequest
from ledger.services.settings import SettingsService

router = APIRouter(prefix="/settings", tags=["settings"])


@router.get("", response_model=SettingsResponse, summary="Get the account holder name")
async def get_settings(
    service: SettingsService = Depends(get_settings_service),
) -> SettingsResponse:
    return SettingsResponse(user_full_name=await service.get_user_full_name())


@router.put(
    "",
    response_model=SettingsResponse,
    summary="Update the account holder name",
    description="Used to detect transfers between the holder's own accounts. "
    "Run recategorization afterwards to apply it to stored transactions.",
)
async def update_settings(
    body: SettingsUpdateRequest,
    service: SettingsService = Depends(get_settings_service),
) -> SettingsResponse:
    return SettingsResponse(user_full_name=await service.update_user_full_name(body.user_full_name))
