from typing import List
from fastapi import APIRouter, Depends

from ..application.services.marketplace_service import MarketplaceService
from ..dependencies import get_marketplace_service
from ..schemas.common.common import ErrorResponse
from ..schemas.marketplace.service import ServiceCreate, ServiceResponse

router = APIRouter(prefix="/services", tags=["Services"])


@router.get("", response_model=List[ServiceResponse])
def list_services(marketplace: MarketplaceService = Depends(get_marketplace_service)):
    return [ServiceResponse.from_dto(s) for s in marketplace.list_services()]


@router.post("", response_model=ServiceResponse, status_code=201, responses={400: {"model": ErrorResponse}})
def create_service(payload: ServiceCreate, marketplace: MarketplaceService = Depends(get_marketplace_service)):
    service = marketplace.create_service(payload.model_dump())
    return ServiceResponse.from_dto(service)
