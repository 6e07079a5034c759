from typing import Protocol, List
from dataclasses import dataclass
from datetime import datetime


@dataclass
class ServiceDto:
    id: str
    title: str
    description: str
    price: str
    category: str
    offered_by_user_id: str
    created_at: datetime


class ServiceRepository(Protocol):
    def create(self, title: str, description: str, price: str, category: str, offered_by_user_id: str) -> ServiceDto:
        ...

    def list_all(self) -> List[ServiceDto]:
        ...

    def list_by_user(self, user_id: str) -> List[ServiceDto]:
        ...
