"""
app/api/services.py

Purpose: Public service provider directory endpoints

- Filtered, paginated and sorted listing
- CRUD by ObjectId
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from app.dependencies import get_provider_service
from app.models.provider import ServiceProvider
from app.schemas.provider import ServiceProviderCreate, ServiceProviderUpdate, ServiceSearch
from app.schemas.response import MessageResponse
from app.services.provider_service import ProviderService, parse_sort
from utils.constants import SERVICE_DELETED_MESSAGE
from utils.validation_utils import split_csv

router = APIRouter(prefix="/services")


def get_search_params(
    category: Optional[str] = Query(None),
    categories: Optional[str] = Query(None, description="Comma separated categories"),
    service_type: Optional[str] = Query(None),
    service_type_like: Optional[str] = Query(None, description="Case-insensitive substring"),
    name: Optional[str] = Query(None, description="Case-insensitive substring"),
    urgent_24h: Optional[bool] = Query(None),
    nearby_localities: Optional[bool] = Query(None),
    locality: Optional[str] = Query(None),
    hour: Optional[int] = Query(None, ge=0, le=23, description="Open at this hour"),
    limit: Optional[int] = Query(None, ge=1, le=100),
    skip: Optional[int] = Query(None, ge=0),
    sort: Optional[str] = Query(None, description="e.g. name,-created_at"),
) -> ServiceSearch:
    return ServiceSearch(
        category=category,
        categories=split_csv(categories),
        service_type=service_type,
        service_type_like=service_type_like,
        name=name,
        urgent_24h=urgent_24h,
        nearby_localities=nearby_localities,
        locality=locality,
        hour=hour,
        limit=limit,
        skip=skip,
        sort=parse_sort(sort),
    )


@router.get("", response_model=List[ServiceProvider])
async def list_services(
    search: ServiceSearch = Depends(get_search_params),
    providers: ProviderService = Depends(get_provider_service),
):
    return await providers.search(search)


@router.get("/{service_id}", response_model=ServiceProvider)
async def get_service(service_id: str, providers: ProviderService = Depends(get_provider_service)):
    return await providers.get(service_id)


@router.post("", response_model=ServiceProvider, status_code=status.HTTP_201_CREATED)
async def create_service(
    payload: ServiceProviderCreate,
    providers: ProviderService = Depends(get_provider_service),
):
    return await providers.create(payload)


@router.put("/{service_id}", response_model=ServiceProvider)
async def update_service(
    service_id: str,
    payload: ServiceProviderUpdate,
    providers: ProviderService = Depends(get_provider_service),
):
    return await providers.update(service_id, payload)


@router.delete("/{service_id}", response_model=MessageResponse)
async def delete_service(service_id: str, providers: ProviderService = Depends(get_provider_service)):
    await providers.delete(service_id)
    return MessageResponse(message=SERVICE_DELETED_MESSAGE)
