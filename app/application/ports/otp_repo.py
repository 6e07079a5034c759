from typing import Protocol, Optional
from dataclasses import dataclass
from datetime import datetime


@dataclass
class OtpDto:
    id: str
    phone: str
    otp: str
    expires_at: datetime
    is_used: bool
    created_at: datetime


class OtpRepository(Protocol):
    def create(self, phone: str, otp: str, expires_at: datetime) -> OtpDto:
        ...

    def get_valid(self, phone: str, otp: str, now: datetime) -> Optional[OtpDto]:
        """Any unused record for (phone, otp) with expires_at > now."""
        ...

    def mark_used(self, otp_id: str) -> bool:
        """Flag a record used. Returns False if it was already used or is unknown."""
        ...

    def purge_expired(self, now: datetime) -> int:
        ...
