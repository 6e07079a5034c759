from typing import List
from fastapi import APIRouter, Depends

from ..application.services.marketplace_service import MarketplaceService
from ..application.services.profile_service import ProfileService
from ..dependencies import get_marketplace_service, get_profile_service
from ..schemas.common.common import ErrorResponse
from ..schemas.marketplace.service import ServiceResponse
from ..schemas.users.user import UserPublic

router = APIRouter(prefix="/user", tags=["Users"])


@router.get("/{user_id}", response_model=UserPublic, responses={404: {"model": ErrorResponse}})
def get_user(user_id: str, profile_service: ProfileService = Depends(get_profile_service)):
    return profile_service.get_profile(user_id)


@router.get("/{user_id}/services", response_model=List[ServiceResponse])
def get_user_services(user_id: str, marketplace: MarketplaceService = Depends(get_marketplace_service)):
    return [ServiceResponse.from_dto(s) for s in marketplace.list_services_by_user(user_id)]
