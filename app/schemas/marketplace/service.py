# app/schemas/service.py
from pydantic import Field, validator
from datetime import datetime

from ..common.common import CamelModel

class ServiceCreate(CamelModel):
    title: str
    description: str
    price: str = Field(..., description="Free text; numbers are stored as text")
    category: str
    offered_by_user_id: str

    @validator('price', pre=True)
    def coerce_price(cls, v):
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v

    @validator('title', 'description', 'price', 'category', 'offered_by_user_id')
    def validate_not_blank(cls, v):
        v = v.strip()
        if not v:
            raise ValueError('Field cannot be empty')
        return v

class ServiceResponse(CamelModel):
    id: str
    title: str
    description: str
    price: str
    category: str
    offered_by_user_id: str
    created_at: datetime

    @classmethod
    def from_dto(cls, service) -> "ServiceResponse":
        return cls(
            id=service.id,
            title=service.title,
            description=service.description,
            price=service.price,
            category=service.category,
            offered_by_user_id=service.offered_by_user_id,
            created_at=service.created_at,
        )
