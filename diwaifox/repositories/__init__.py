"""
Слой хранения.

build_repositories() выбирает бэкенд по настройкам:
    - без DATABASE_URL: списки в памяти процесса
    - с DATABASE_URL: SQLAlchemy (SQLite, PostgreSQL и т.д.)
"""

import logging
import threading
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.engine import Engine

from diwaifox.core.config import Settings
from diwaifox.core.db import Base, make_engine, make_session_factory

from .base import PaymentRepository, RideRepository, SettingsRepository, UserRepository
from .memory import (
    MemoryPaymentRepository,
    MemoryRideRepository,
    MemorySettingsRepository,
    MemoryUserRepository,
)
from .sql import SqlPaymentRepository, SqlRideRepository, SqlSettingsRepository, SqlUserRepository

logger = logging.getLogger(__name__)


@dataclass
class Repositories:
    users: UserRepository
    rides: RideRepository
    payments: PaymentRepository
    settings: SettingsRepository
    engine: Optional[Engine] = None

    def close(self) -> None:
        if self.engine is not None:
            self.engine.dispose()


def build_memory_repositories() -> Repositories:
    lock = threading.Lock()
    return Repositories(
        users=MemoryUserRepository(lock),
        rides=MemoryRideRepository(lock),
        payments=MemoryPaymentRepository(lock),
        settings=MemorySettingsRepository(lock),
    )


def build_sql_repositories(url: str, echo: bool = False, auto_create: bool = True) -> Repositories:
    engine = make_engine(url, echo=echo)
    if auto_create:
        Base.metadata.create_all(bind=engine)
    session_factory = make_session_factory(engine)
    return Repositories(
        users=SqlUserRepository(session_factory),
        rides=SqlRideRepository(session_factory),
        payments=SqlPaymentRepository(session_factory),
        settings=SqlSettingsRepository(session_factory),
        engine=engine,
    )


def build_repositories(settings: Settings) -> Repositories:
    if settings.uses_database:
        logger.info(f"Хранилище: SQLAlchemy ({engine_label(settings.DATABASE_URL)})")
        return build_sql_repositories(
            settings.DATABASE_URL,
            echo=settings.DATABASE_ECHO,
            auto_create=settings.DATABASE_AUTO_CREATE,
        )
    logger.warning("Хранилище: память процесса, данные не переживут перезапуск")
    return build_memory_repositories()


def engine_label(url: str) -> str:
    """Имя драйвера без учетных данных для логов."""
    return url.split("://", 1)[0]


__all__ = [
    "Repositories",
    "UserRepository",
    "RideRepository",
    "PaymentRepository",
    "SettingsRepository",
    "build_repositories",
    "build_memory_repositories",
    "build_sql_repositories",
]
