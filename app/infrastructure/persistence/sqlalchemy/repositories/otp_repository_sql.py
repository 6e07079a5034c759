from datetime import datetime
from typing import Optional
from sqlalchemy import delete, update
from sqlalchemy.engine import Engine
from sqlmodel import Session, select

from .....db.models import OtpVerification
from .....application.ports.otp_repo import OtpRepository, OtpDto
from .....utils import as_utc


class SqlOtpRepository(OtpRepository):
    def __init__(self, engine: Engine):
        self.engine = engine

    def _to_dto(self, rec: OtpVerification) -> OtpDto:
        return OtpDto(
            id=rec.id,
            phone=rec.phone,
            otp=rec.otp,
            expires_at=as_utc(rec.expires_at),
            is_used=bool(rec.is_used),
            created_at=as_utc(rec.created_at),
        )

    def create(self, phone: str, otp: str, expires_at: datetime) -> OtpDto:
        with Session(self.engine) as session:
            rec = OtpVerification(phone=phone, otp=otp, expires_at=expires_at, is_used=False)
            session.add(rec)
            session.commit()
            session.refresh(rec)
            return self._to_dto(rec)

    def get_valid(self, phone: str, otp: str, now: datetime) -> Optional[OtpDto]:
        with Session(self.engine) as session:
            rec = session.exec(
                select(OtpVerification).where(
                    OtpVerification.phone == phone,
                    OtpVerification.otp == otp,
                    OtpVerification.is_used == False,  # noqa: E712
                    OtpVerification.expires_at > now,
                )
            ).first()
            return self._to_dto(rec) if rec else None

    def mark_used(self, otp_id: str) -> bool:
        # Conditional update: only one caller can flip is_used for a given row
        with self.engine.begin() as conn:
            result = conn.execute(
                update(OtpVerification)
                .where(OtpVerification.id == otp_id)
                .where(OtpVerification.is_used == False)  # noqa: E712
                .values(is_used=True)
            )
            return result.rowcount == 1

    def purge_expired(self, now: datetime) -> int:
        with self.engine.begin() as conn:
            result = conn.execute(delete(OtpVerification).where(OtpVerification.expires_at <= now))
            return result.rowcount
