# app/db/models/users/user.py
from sqlalchemy import DateTime
from sqlmodel import SQLModel, Field
from datetime import datetime
import uuid

from ....utils import utc_now

class User(SQLModel, table=True):
    __tablename__ = "users"
    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)
    name: str
    phone: str = Field(unique=True, index=True)
    flat: str
    floor: str
    block: str
    role: str = Field(default="resident", max_length=20)
    is_verified: bool = Field(default=False)
    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))
