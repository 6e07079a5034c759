from typing import Protocol, Optional
from dataclasses import dataclass
from datetime import datetime


@dataclass
class UserDto:
    id: str
    name: str
    phone: str
    flat: str
    floor: str
    block: str
    role: str
    is_verified: bool
    created_at: datetime


class UserRepository(Protocol):
    def get_by_id(self, user_id: str) -> Optional[UserDto]:
        ...

    def get_by_phone(self, phone: str) -> Optional[UserDto]:
        ...

    def create(self, name: str, phone: str, flat: str, floor: str, block: str, role: str) -> UserDto:
        """Store a new user with is_verified=False and a fresh id."""
        ...

    def update(self, user_id: str, **fields) -> Optional[UserDto]:
        """Apply a partial update; id and created_at are never changed."""
        ...
