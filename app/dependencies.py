# ------------------------
# Minimal DI for services
# ------------------------
from fastapi import Depends, Request

from .config import Settings
from .application.ports.audit_logger import AuditLogger
from .application.services.auth_service import AuthService
from .application.services.marketplace_service import MarketplaceService
from .application.services.profile_service import ProfileService
from .infrastructure.audit.std_logger import StdAuditLogger
from .infrastructure.persistence.storage import Storage


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_storage(request: Request) -> Storage:
    return request.app.state.storage


def get_audit_logger() -> AuditLogger:
    return StdAuditLogger()


def get_auth_service(
    storage: Storage = Depends(get_storage),
    settings: Settings = Depends(get_app_settings),
    audit: AuditLogger = Depends(get_audit_logger),
) -> AuthService:
    return AuthService(
        user_repo=storage.users,
        otp_repo=storage.otps,
        audit=audit,
        expiry_minutes=settings.OTP_EXPIRY_MINUTES,
        purge_expired_on_issue=settings.OTP_PURGE_ON_ISSUE,
    )


def get_profile_service(storage: Storage = Depends(get_storage)) -> ProfileService:
    return ProfileService(user_repo=storage.users)


def get_marketplace_service(storage: Storage = Depends(get_storage)) -> MarketplaceService:
    return MarketplaceService(repo=storage.services)
