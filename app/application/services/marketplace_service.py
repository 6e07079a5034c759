from dataclasses import dataclass
from typing import Any, Dict, List
import logging

from pydantic import ValidationError

from ..ports.service_repo import ServiceRepository, ServiceDto
from ...exceptions import PayloadValidationError
from ...schemas.marketplace.service import ServiceCreate

logger = logging.getLogger(__name__)


@dataclass
class MarketplaceService:
    repo: ServiceRepository

    def create_service(self, fields: Dict[str, Any]) -> ServiceDto:
        # offered_by_user_id is not checked against stored users
        try:
            data = ServiceCreate(**fields)
        except ValidationError as e:
            errors = [{"field": ".".join(str(p) for p in err["loc"]), "msg": err["msg"]} for err in e.errors()]
            raise PayloadValidationError("Invalid service data", data=errors) from e
        service = self.repo.create(
            title=data.title,
            description=data.description,
            price=data.price,
            category=data.category,
            offered_by_user_id=data.offered_by_user_id,
        )
        logger.info(f"Service {service.id} created by user {service.offered_by_user_id}")
        return service

    def list_services(self) -> List[ServiceDto]:
        return self.repo.list_all()

    def list_services_by_user(self, user_id: str) -> List[ServiceDto]:
        return self.repo.list_by_user(user_id)
