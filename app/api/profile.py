"""
app/api/profile.py

Purpose: Provider self-service profile endpoints

- The authenticated phone selects the listing
- GET / PUT / DELETE (soft) the caller's own listing
- DELETE /profile/cleanup purges old soft-deleted listings (any valid token)
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends

from app.dependencies import get_current_account, get_profile_service
from app.models.provider import ServiceProvider
from app.schemas.provider import ProfileUpdate
from app.schemas.response import MessageResponse, PurgeResponse
from app.services.profile_service import ProfileService
from utils.constants import PROFILE_DELETED_MESSAGE, PROFILES_PURGED_MESSAGE

router = APIRouter(prefix="/profile")


@router.delete("/cleanup", response_model=PurgeResponse, dependencies=[Depends(get_current_account)])
async def purge_deleted_profiles(profiles: ProfileService = Depends(get_profile_service)):
    removed = await profiles.purge_deleted()
    return PurgeResponse(message=PROFILES_PURGED_MESSAGE, removed=removed)


@router.get("", response_model=ServiceProvider)
async def get_profile(
    account: Dict[str, Any] = Depends(get_current_account),
    profiles: ProfileService = Depends(get_profile_service),
):
    return await profiles.get(account["phone"])


@router.put("", response_model=ServiceProvider)
async def update_profile(
    payload: ProfileUpdate,
    account: Dict[str, Any] = Depends(get_current_account),
    profiles: ProfileService = Depends(get_profile_service),
):
    return await profiles.update(account["phone"], payload)


@router.delete("", response_model=MessageResponse)
async def delete_profile(
    account: Dict[str, Any] = Depends(get_current_account),
    profiles: ProfileService = Depends(get_profile_service),
):
    await profiles.soft_delete(account["phone"])
    return MessageResponse(message=PROFILE_DELETED_MESSAGE)
