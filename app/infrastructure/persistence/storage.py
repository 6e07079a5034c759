import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.engine import Engine

from ...application.ports.user_repo import UserRepository
from ...application.ports.otp_repo import OtpRepository
from ...application.ports.service_repo import ServiceRepository
from ...config import Settings
from ...database import build_engine, create_db_and_tables
from .memory.user_repository_memory import InMemoryUserRepository
from .memory.otp_repository_memory import InMemoryOtpRepository
from .memory.service_repository_memory import InMemoryServiceRepository
from .sqlalchemy.repositories.user_repository_sql import SqlUserRepository
from .sqlalchemy.repositories.otp_repository_sql import SqlOtpRepository
from .sqlalchemy.repositories.service_repository_sql import SqlServiceRepository

logger = logging.getLogger(__name__)


@dataclass
class Storage:
    """The repositories one application instance works against."""
    backend: str
    users: UserRepository
    otps: OtpRepository
    services: ServiceRepository
    engine: Optional[Engine] = None

    def close(self) -> None:
        if self.engine is not None:
            self.engine.dispose()


def memory_storage() -> Storage:
    return Storage(
        backend="memory",
        users=InMemoryUserRepository(),
        otps=InMemoryOtpRepository(),
        services=InMemoryServiceRepository(),
    )


def sql_storage(engine: Engine) -> Storage:
    create_db_and_tables(engine)
    return Storage(
        backend="sql",
        users=SqlUserRepository(engine),
        otps=SqlOtpRepository(engine),
        services=SqlServiceRepository(engine),
        engine=engine,
    )


def build_storage(settings: Settings) -> Storage:
    if settings.uses_sql_storage:
        logger.info("Using SQL storage backend")
        return sql_storage(build_engine(settings.DATABASE_URL, echo=settings.DEBUG))
    logger.info("Using in-memory storage backend")
    return memory_storage()
