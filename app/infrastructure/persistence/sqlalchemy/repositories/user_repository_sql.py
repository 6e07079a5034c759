from typing import Optional
from sqlalchemy.engine import Engine
from sqlmodel import Session, select

from .....db.models import User
from .....application.ports.user_repo import UserRepository, UserDto
from .....utils import as_utc

# Columns a partial update may touch
UPDATABLE_FIELDS = {"name", "phone", "flat", "floor", "block", "role", "is_verified"}

class SqlUserRepository(UserRepository):
    def __init__(self, engine: Engine):
        self.engine = engine

    def _to_dto(self, user: User) -> UserDto:
        return UserDto(
            id=user.id,
            name=user.name,
            phone=user.phone,
            flat=user.flat,
            floor=user.floor,
            block=user.block,
            role=user.role,
            is_verified=bool(user.is_verified),
            created_at=as_utc(user.created_at),
        )

    def get_by_id(self, user_id: str) -> Optional[UserDto]:
        with Session(self.engine) as session:
            user = session.get(User, user_id)
            return self._to_dto(user) if user else None

    def get_by_phone(self, phone: str) -> Optional[UserDto]:
        with Session(self.engine) as session:
            user = session.exec(select(User).where(User.phone == phone)).first()
            return self._to_dto(user) if user else None

    def create(self, name: str, phone: str, flat: str, floor: str, block: str, role: str) -> UserDto:
        with Session(self.engine) as session:
            user = User(name=name, phone=phone, flat=flat, floor=floor, block=block, role=role, is_verified=False)
            session.add(user)
            session.commit()
            session.refresh(user)
            return self._to_dto(user)

    def update(self, user_id: str, **fields) -> Optional[UserDto]:
        with Session(self.engine) as session:
            user = session.get(User, user_id)
            if not user:
                return None
            for key, value in fields.items():
                if key in UPDATABLE_FIELDS:
                    setattr(user, key, value)
            session.add(user)
            session.commit()
            session.refresh(user)
            return self._to_dto(user)
