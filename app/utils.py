import re
import secrets
import uuid
from datetime import datetime, timezone
from typing import Optional

MIN_PHONE_DIGITS = 10
OTP_MIN = 100000
OTP_MAX = 999999

_NON_DIGITS = re.compile(r"\D")


# =========================
# Phone Handling
# =========================
def normalize_phone(phone: Optional[str]) -> str:
    """Strip every non-digit character from a phone number."""
    if not phone:
        return ""
    return _NON_DIGITS.sub("", str(phone))


def is_valid_phone(normalized: str) -> bool:
    return len(normalized) >= MIN_PHONE_DIGITS


# =========================
# OTP Generation
# =========================
def generate_otp() -> str:
    """Generate a uniformly random 6-digit OTP (100000-999999)."""
    return str(OTP_MIN + secrets.randbelow(OTP_MAX - OTP_MIN + 1))


def generate_id() -> str:
    return str(uuid.uuid4())


# =========================
# Timestamps
# =========================
def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Attach UTC to a naive timestamp read back from storage."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
