# app/db/models/auth/otp.py
from sqlalchemy import DateTime
from sqlmodel import SQLModel, Field
from datetime import datetime
import uuid

from ....utils import utc_now

class OtpVerification(SQLModel, table=True):
    __tablename__ = "otp_verifications"
    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)
    phone: str = Field(index=True)
    otp: str = Field(max_length=6)
    is_used: bool = Field(default=False)
    expires_at: datetime = Field(index=True, sa_type=DateTime(timezone=True))
    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))
