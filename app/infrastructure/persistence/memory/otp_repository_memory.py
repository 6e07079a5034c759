import threading
from dataclasses import replace
from datetime import datetime
from typing import Dict, Optional

from ....application.ports.otp_repo import OtpRepository, OtpDto
from ....utils import generate_id, utc_now


class InMemoryOtpRepository(OtpRepository):
    def __init__(self) -> None:
        self._store: Dict[str, OtpDto] = {}
        self._lock = threading.Lock()

    def create(self, phone: str, otp: str, expires_at: datetime) -> OtpDto:
        rec = OtpDto(
            id=generate_id(),
            phone=phone,
            otp=otp,
            expires_at=expires_at,
            is_used=False,
            created_at=utc_now(),
        )
        with self._lock:
            self._store[rec.id] = rec
        return replace(rec)

    def get_valid(self, phone: str, otp: str, now: datetime) -> Optional[OtpDto]:
        for rec in list(self._store.values()):
            if rec.phone == phone and rec.otp == otp and not rec.is_used and rec.expires_at > now:
                return replace(rec)
        return None

    def mark_used(self, otp_id: str) -> bool:
        with self._lock:
            rec = self._store.get(otp_id)
            if not rec or rec.is_used:
                return False
            self._store[otp_id] = replace(rec, is_used=True)
            return True

    def purge_expired(self, now: datetime) -> int:
        with self._lock:
            expired = [k for k, rec in self._store.items() if rec.expires_at <= now]
            for k in expired:
                del self._store[k]
            return len(expired)
