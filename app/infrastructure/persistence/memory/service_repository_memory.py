import threading
from dataclasses import replace
from typing import Dict, List

from ....application.ports.service_repo import ServiceRepository, ServiceDto
from ....utils import generate_id, utc_now


class InMemoryServiceRepository(ServiceRepository):
    def __init__(self) -> None:
        self._store: Dict[str, ServiceDto] = {}
        self._lock = threading.Lock()

    def create(self, title: str, description: str, price: str, category: str, offered_by_user_id: str) -> ServiceDto:
        service = ServiceDto(
            id=generate_id(),
            title=title,
            description=description,
            price=price,
            category=category,
            offered_by_user_id=offered_by_user_id,
            created_at=utc_now(),
        )
        with self._lock:
            self._store[service.id] = service
        return replace(service)

    def list_all(self) -> List[ServiceDto]:
        return [replace(s) for s in list(self._store.values())]

    def list_by_user(self, user_id: str) -> List[ServiceDto]:
        return [replace(s) for s in list(self._store.values()) if s.offered_by_user_id == user_id]
