"""
Хранилище на SQLAlchemy.
Каждый метод открывает короткую сессию; возвращаемые объекты отсоединены
от сессии, но полностью загружены (expire_on_commit=False).
"""

import logging
from typing import Any, List, Optional

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import sessionmaker

from diwaifox.core.exceptions import ConflictError
from diwaifox.models import Payment, PlatformSettings, Ride, User

from .base import PaymentRepository, RideRepository, SettingsRepository, UserRepository

logger = logging.getLogger(__name__)


class SqlUserRepository(UserRepository):

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    def add(self, user: User) -> User:
        with self._session_factory() as session:
            session.add(user)
            try:
                session.commit()
            except IntegrityError as e:
                session.rollback()
                logger.info(f"Email {user.email} уже зарегистрирован: {e.orig}")
                raise ConflictError("User already exists") from e
        return user

    def get(self, user_id: str) -> Optional[User]:
        with self._session_factory() as session:
            return session.get(User, user_id)

    def get_by_email(self, email: str) -> Optional[User]:
        with self._session_factory() as session:
            return session.scalars(select(User).where(User.email == email)).first()

    def list(self) -> List[User]:
        with self._session_factory() as session:
            return list(session.scalars(select(User).order_by(User.created_at)))

    def update(self, user_id: str, **fields: Any) -> Optional[User]:
        with self._session_factory() as session:
            if fields:
                session.execute(update(User).where(User.id == user_id).values(**fields))
                session.commit()
            return session.get(User, user_id, populate_existing=True)

    def add_earnings(self, user_id: str, amount: float) -> Optional[User]:
        with self._session_factory() as session:
            session.execute(
                update(User)
                .where(User.id == user_id)
                .values(earnings=User.earnings + amount)
            )
            session.commit()
            return session.get(User, user_id, populate_existing=True)


class SqlRideRepository(RideRepository):

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    def add(self, ride: Ride) -> Ride:
        with self._session_factory() as session:
            session.add(ride)
            session.commit()
        return ride

    def get(self, ride_id: str) -> Optional[Ride]:
        with self._session_factory() as session:
            return session.get(Ride, ride_id)

    def list(self) -> List[Ride]:
        with self._session_factory() as session:
            return list(session.scalars(select(Ride).order_by(Ride.created_at)))

    def compare_and_set(
        self,
        ride_id: str,
        expected_version: int,
        expected_status: Optional[str] = None,
        **changes: Any,
    ) -> Optional[Ride]:
        stmt = update(Ride).where(Ride.id == ride_id, Ride.version == expected_version)
        if expected_status is not None:
            stmt = stmt.where(Ride.status == expected_status)
        stmt = stmt.values(version=Ride.version + 1, **changes)

        with self._session_factory() as session:
            result = session.execute(stmt.execution_options(synchronize_session=False))
            if result.rowcount != 1:
                session.rollback()
                return None
            session.commit()
            return session.get(Ride, ride_id, populate_existing=True)


class SqlPaymentRepository(PaymentRepository):

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    def add(self, payment: Payment) -> Payment:
        with self._session_factory() as session:
            session.add(payment)
            session.commit()
        return payment

    def list(self) -> List[Payment]:
        with self._session_factory() as session:
            return list(session.scalars(select(Payment).order_by(Payment.created_at)))


class SqlSettingsRepository(SettingsRepository):

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    def _get_or_create(self, session) -> PlatformSettings:
        row = session.get(PlatformSettings, 1)
        if row is None:
            row = PlatformSettings(id=1, email_notifications=True, theme="gold")
            session.add(row)
            session.commit()
        return row

    def get(self) -> PlatformSettings:
        with self._session_factory() as session:
            return self._get_or_create(session)

    def update(self, **fields: Any) -> PlatformSettings:
        with self._session_factory() as session:
            row = self._get_or_create(session)
            for key, value in fields.items():
                setattr(row, key, value)
            session.commit()
            return row
