"""
app/api/clicks.py

Purpose: Contact click tracking endpoints
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from app.dependencies import get_click_service
from app.models.click import Click
from app.schemas.click import ClickCreate
from app.services.click_service import ClickService

router = APIRouter(prefix="/clicks")


@router.post("", response_model=Click, status_code=status.HTTP_201_CREATED)
async def record_click(payload: ClickCreate, clicks: ClickService = Depends(get_click_service)):
    return await clicks.record(payload)


@router.get("", response_model=List[Click])
async def list_clicks(
    service_id: Optional[str] = Query(None, description="Only clicks for this provider"),
    clicks: ClickService = Depends(get_click_service),
):
    """Clicks, newest first."""
    return await clicks.list(service_id)
