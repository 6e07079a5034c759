# app/schemas/auth.py
from pydantic import Field, validator
from typing import Optional, Dict, Any
from datetime import datetime

from ..common.common import CamelModel
from ..users.user import UserPublic

def _coerce_text(v):
    # JSON clients sometimes send phone numbers and codes as numbers
    if v is None or isinstance(v, str):
        return v
    if isinstance(v, bool):
        return v
    if isinstance(v, int):
        return str(v)
    if isinstance(v, float) and v.is_integer():
        return str(int(v))
    return v

class SendOtpRequest(CamelModel):
    phone: Optional[str] = Field(None, description="Phone number, any formatting")

    @validator('phone', pre=True)
    def coerce_phone(cls, v):
        return _coerce_text(v)

class SendOtpResponse(CamelModel):
    success: bool
    message: str
    phone: str
    expires_at: datetime
    code: Optional[str] = Field(None, description="Only present when code echo is enabled")

class VerifyOtpRequest(CamelModel):
    phone: Optional[str] = Field(None, description="Phone number, any formatting")
    code: Optional[str] = Field(None, description="6-digit OTP")
    otp: Optional[str] = Field(None, description="6-digit OTP (legacy field name)")
    name: Optional[str] = None
    flat: Optional[str] = None
    floor: Optional[str] = None
    block: Optional[str] = None
    role: Optional[str] = None

    @validator('phone', 'code', 'otp', 'flat', 'floor', 'block', pre=True)
    def coerce_text(cls, v):
        return _coerce_text(v)

    def get_code(self) -> Optional[str]:
        return self.code or self.otp

    def profile_fields(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "flat": self.flat,
            "floor": self.floor,
            "block": self.block,
            "role": self.role,
        }

class VerifyOtpResponse(CamelModel):
    success: bool
    message: str
    user: UserPublic
