# app/db/models/marketplace/service.py
from sqlalchemy import DateTime
from sqlmodel import SQLModel, Field
from datetime import datetime
import uuid

from ....utils import utc_now

class Service(SQLModel, table=True):
    __tablename__ = "services"
    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)
    title: str
    description: str
    price: str
    category: str = Field(index=True)
    # No foreign key: services may reference users that were never stored
    offered_by_user_id: str = Field(index=True)
    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))
