from typing import List
from sqlalchemy.engine import Engine
from sqlmodel import Session, select

from .....db.models import Service
from .....application.ports.service_repo import ServiceRepository, ServiceDto
from .....utils import as_utc


class SqlServiceRepository(ServiceRepository):
    def __init__(self, engine: Engine):
        self.engine = engine

    def _to_dto(self, s: Service) -> ServiceDto:
        return ServiceDto(
            id=s.id,
            title=s.title,
            description=s.description,
            price=s.price,
            category=s.category,
            offered_by_user_id=s.offered_by_user_id,
            created_at=as_utc(s.created_at),
        )

    def create(self, title: str, description: str, price: str, category: str, offered_by_user_id: str) -> ServiceDto:
        with Session(self.engine) as session:
            rec = Service(
                title=title,
                description=description,
                price=price,
                category=category,
                offered_by_user_id=offered_by_user_id,
            )
            session.add(rec)
            session.commit()
            session.refresh(rec)
            return self._to_dto(rec)

    def list_all(self) -> List[ServiceDto]:
        with Session(self.engine) as session:
            rows = session.exec(select(Service)).all()
            return [self._to_dto(r) for r in rows]

    def list_by_user(self, user_id: str) -> List[ServiceDto]:
        with Session(self.engine) as session:
            rows = session.exec(select(Service).where(Service.offered_by_user_id == user_id)).all()
            return [self._to_dto(r) for r in rows]
