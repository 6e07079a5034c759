import threading
from dataclasses import replace
from typing import Dict, Optional

from ....application.ports.user_repo import UserRepository, UserDto
from ....utils import generate_id, utc_now

UPDATABLE_FIELDS = {"name", "phone", "flat", "floor", "block", "role", "is_verified"}


class InMemoryUserRepository(UserRepository):
    def __init__(self) -> None:
        self._store: Dict[str, UserDto] = {}
        self._lock = threading.Lock()

    def get_by_id(self, user_id: str) -> Optional[UserDto]:
        user = self._store.get(user_id)
        return replace(user) if user else None

    def get_by_phone(self, phone: str) -> Optional[UserDto]:
        for user in list(self._store.values()):
            if user.phone == phone:
                return replace(user)
        return None

    def create(self, name: str, phone: str, flat: str, floor: str, block: str, role: str) -> UserDto:
        with self._lock:
            if any(u.phone == phone for u in self._store.values()):
                raise ValueError(f"Phone {phone} is already registered")
            user = UserDto(
                id=generate_id(),
                name=name,
                phone=phone,
                flat=flat,
                floor=floor,
                block=block,
                role=role,
                is_verified=False,
                created_at=utc_now(),
            )
            self._store[user.id] = user
            return replace(user)

    def update(self, user_id: str, **fields) -> Optional[UserDto]:
        with self._lock:
            user = self._store.get(user_id)
            if not user:
                return None
            changes = {k: v for k, v in fields.items() if k in UPDATABLE_FIELDS}
            updated = replace(user, **changes)
            self._store[user_id] = updated
            return replace(updated)
