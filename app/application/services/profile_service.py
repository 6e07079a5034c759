from dataclasses import dataclass

from ..ports.user_repo import UserRepository
from ...exceptions import NotFoundError
from ...schemas.users.user import UserPublic


@dataclass
class ProfileService:
    user_repo: UserRepository

    def get_profile(self, user_id: str) -> UserPublic:
        user = self.user_repo.get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")
        return UserPublic.from_dto(user)
