import hashlib
import json
import logging
from typing import Optional, Dict, Any

from ...application.ports.audit_logger import AuditLogger
from ...utils import utc_now


def hash_phone_number(phone: str) -> str:
    """Hash phone number for logs (one-way hash)"""
    return hashlib.sha256(phone.encode()).hexdigest()


class StdAuditLogger(AuditLogger):
    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self._logger = logger or logging.getLogger(__name__)

    def log(self, action: str, phone: str, user_id: Optional[str] = None, success: bool = True, details: Optional[Dict[str, Any]] = None) -> None:
        entry = {
            "timestamp": utc_now().isoformat(),
            "action": action,
            "phone_hash": hash_phone_number(phone),
            "user_id": user_id,
            "success": success,
            "details": details or {},
        }
        self._logger.info(f"AUDIT: {json.dumps(entry, default=str)}")
