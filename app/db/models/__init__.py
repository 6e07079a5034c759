# Models package (re-export feature modules for stable imports)
from .users.user import User
from .auth.otp import OtpVerification
from .marketplace.service import Service

__all__ = [
    "User",
    "OtpVerification",
    "Service",
]
