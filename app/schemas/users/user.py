# app/schemas/user.py
from pydantic import Field, validator
from enum import Enum

from ..common.common import CamelModel

class UserRole(str, Enum):
    RESIDENT = "resident"
    PRESIDENT = "president"

class UserCreate(CamelModel):
    name: str = Field(..., description="Resident's full name")
    phone: str = Field(..., min_length=10, description="Normalized phone digits")
    flat: str = Field(..., description="Free text")
    floor: str = Field(..., description="Free text")
    block: str = Field(..., description="Free text")
    role: UserRole = Field(UserRole.RESIDENT, description="'resident' or 'president'")

    @validator('name', 'flat', 'floor', 'block')
    def validate_not_blank(cls, v):
        v = v.strip()
        if not v:
            raise ValueError('Field cannot be empty')
        return v

    @validator('phone')
    def validate_phone(cls, v):
        if not v.isdigit():
            raise ValueError('Phone must contain digits only')
        return v

class UserPublic(CamelModel):
    id: str
    name: str
    phone: str
    flat: str
    floor: str
    block: str
    role: UserRole
    is_verified: bool

    @classmethod
    def from_dto(cls, user) -> "UserPublic":
        return cls(
            id=user.id,
            name=user.name,
            phone=user.phone,
            flat=user.flat,
            floor=user.floor,
            block=user.block,
            role=user.role,
            is_verified=user.is_verified,
        )
