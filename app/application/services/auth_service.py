import logging
from typing import Any, Callable, Dict, List, Optional
from dataclasses import dataclass, field
from datetime import datetime, timedelta

from pydantic import ValidationError

from ..ports.user_repo import UserRepository
from ..ports.otp_repo import OtpRepository
from ..ports.audit_logger import AuditLogger
from ...exceptions import (
    InvalidInputError,
    InvalidOrExpiredOtpError,
    MissingRegistrationFieldsError,
    OtpConsumedError,
    PayloadValidationError,
)
from ...schemas.users.user import UserCreate, UserPublic
from ...utils import generate_otp, is_valid_phone, normalize_phone, utc_now

logger = logging.getLogger(__name__)

OTP_EXPIRY_MINUTES = 5
REGISTRATION_FIELDS = ("name", "flat", "floor", "block", "role")


@dataclass
class OtpIssued:
    phone: str
    expires_at: datetime
    code: Optional[str] = None


@dataclass
class AuthService:
    """Phone OTP login and first-time registration.

    Issuance stores a code per request; several live codes may exist for the
    same phone and any of them verifies. Verification consumes exactly one
    record and either returns the existing user or registers a new one from
    the submitted profile fields.
    """

    user_repo: UserRepository
    otp_repo: OtpRepository
    audit: Optional[AuditLogger] = None
    expiry_minutes: int = OTP_EXPIRY_MINUTES
    purge_expired_on_issue: bool = False
    clock: Callable[[], datetime] = field(default=utc_now)
    code_generator: Callable[[], str] = field(default=generate_otp)

    def request_otp(self, phone: Optional[str], expose_code: bool = False) -> OtpIssued:
        """Issue a code for ``phone``.

        ``expose_code`` puts the code in the result; only development setups
        should pass True.
        """
        if not phone:
            raise InvalidInputError("Phone number is required")
        normalized = normalize_phone(phone)
        if not is_valid_phone(normalized):
            self._audit("otp_requested", normalized or str(phone), success=False, details={"reason": "invalid_phone"})
            raise InvalidInputError("Invalid phone number format")

        now = self.clock()
        if self.purge_expired_on_issue:
            purged = self.otp_repo.purge_expired(now)
            if purged:
                logger.info(f"Purged {purged} expired OTP records")

        code = self.code_generator()
        record = self.otp_repo.create(normalized, code, now + timedelta(minutes=self.expiry_minutes))
        self._audit("otp_requested", normalized, details={"otp_id": record.id})

        if expose_code:
            logger.info(f"OTP for {normalized}: {code}")
            return OtpIssued(phone=normalized, expires_at=record.expires_at, code=code)
        return OtpIssued(phone=normalized, expires_at=record.expires_at)

    def verify_otp(self, phone: Optional[str], code: Optional[str], profile: Optional[Dict[str, Any]] = None) -> UserPublic:
        """Verify ``code`` and return the existing or newly registered user.

        The code is consumed only after the new-user profile check passes, so a
        ``MISSING_REGISTRATION_FIELDS`` response leaves it valid for a resubmit.
        """
        normalized = normalize_phone(phone)
        if not normalized or not code:
            raise InvalidInputError("Phone number and OTP are required")

        otp = self.otp_repo.get_valid(normalized, code, self.clock())
        if otp is None:
            self._audit("otp_verified", normalized, success=False, details={"reason": "invalid_or_expired"})
            raise InvalidOrExpiredOtpError("Invalid or expired OTP")

        user = self.user_repo.get_by_phone(normalized)
        registration = None
        if user is None:
            # Checked before consuming so the same code can be resubmitted with a profile
            registration = self._registration_for(normalized, profile or {})

        if not self.otp_repo.mark_used(otp.id):
            # Lost the race against a concurrent verification of the same record
            self._audit("otp_verified", normalized, success=False, details={"reason": "already_used"})
            raise InvalidOrExpiredOtpError("Invalid or expired OTP")

        try:
            if registration is not None:
                user = self.user_repo.create(
                    name=registration.name,
                    phone=registration.phone,
                    flat=registration.flat,
                    floor=registration.floor,
                    block=registration.block,
                    role=registration.role.value,
                )
                self._audit("user_registered", normalized, user_id=user.id, details={"role": user.role})
            verified = self.user_repo.update(user.id, is_verified=True)
        except Exception as e:
            logger.error(f"Storing user for {normalized} failed after OTP {otp.id} was consumed: {e}", exc_info=True)
            raise OtpConsumedError("Verification could not be completed. Please request a new OTP.") from e

        if verified is None:
            logger.error(f"User {user.id} vanished after OTP {otp.id} was consumed")
            raise OtpConsumedError("Verification could not be completed. Please request a new OTP.")

        self._audit("otp_verified", normalized, user_id=verified.id)
        return UserPublic.from_dto(verified)

    def _registration_for(self, phone: str, profile: Dict[str, Any]) -> UserCreate:
        missing: List[str] = [name for name in REGISTRATION_FIELDS if not profile.get(name)]
        if missing:
            self._audit("otp_verified", phone, success=False, details={"reason": "registration_required", "missing": missing})
            raise MissingRegistrationFieldsError(missing)
        try:
            return UserCreate(phone=phone, **{name: profile[name] for name in REGISTRATION_FIELDS})
        except ValidationError as e:
            errors = [{"field": ".".join(str(p) for p in err["loc"]), "msg": err["msg"]} for err in e.errors()]
            raise PayloadValidationError("Invalid user data", data=errors) from e

    def _audit(self, action: str, phone: str, user_id: Optional[str] = None, success: bool = True, details: Optional[Dict[str, Any]] = None) -> None:
        if self.audit is not None:
            self.audit.log(action, phone, user_id=user_id, success=success, details=details)
