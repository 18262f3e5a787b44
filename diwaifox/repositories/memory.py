"""Хранилище в памяти процесса. Все данные теряются при перезапуске."""

import threading
from typing import Any, List, Optional

from diwaifox.core.exceptions import ConflictError
from diwaifox.models import Payment, PlatformSettings, Ride, User

from .base import PaymentRepository, RideRepository, SettingsRepository, UserRepository


class MemoryUserRepository(UserRepository):

    def __init__(self, lock: threading.Lock):
        self._lock = lock
        self._users: List[User] = []

    def add(self, user: User) -> User:
        with self._lock:
            if any(u.email == user.email for u in self._users):
                raise ConflictError("User already exists")
            self._users.append(user)
        return user

    def get(self, user_id: str) -> Optional[User]:
        return next((u for u in self._users if u.id == user_id), None)

    def get_by_email(self, email: str) -> Optional[User]:
        return next((u for u in self._users if u.email == email), None)

    def list(self) -> List[User]:
        return list(self._users)

    def update(self, user_id: str, **fields: Any) -> Optional[User]:
        with self._lock:
            user = self.get(user_id)
            if user is None:
                return None
            for key, value in fields.items():
                setattr(user, key, value)
        return user

    def add_earnings(self, user_id: str, amount: float) -> Optional[User]:
        with self._lock:
            user = self.get(user_id)
            if user is None:
                return None
            user.earnings = (user.earnings or 0.0) + amount
        return user


class MemoryRideRepository(RideRepository):

    def __init__(self, lock: threading.Lock):
        self._lock = lock
        self._rides: List[Ride] = []

    def add(self, ride: Ride) -> Ride:
        with self._lock:
            self._rides.append(ride)
        return ride

    def get(self, ride_id: str) -> Optional[Ride]:
        return next((r for r in self._rides if r.id == ride_id), None)

    def list(self) -> List[Ride]:
        return list(self._rides)

    def compare_and_set(
        self,
        ride_id: str,
        expected_version: int,
        expected_status: Optional[str] = None,
        **changes: Any,
    ) -> Optional[Ride]:
        with self._lock:
            ride = self.get(ride_id)
            if ride is None or ride.version != expected_version:
                return None
            if expected_status is not None and ride.status != expected_status:
                return None
            for key, value in changes.items():
                setattr(ride, key, value)
            ride.version += 1
        return ride


class MemoryPaymentRepository(PaymentRepository):

    def __init__(self, lock: threading.Lock):
        self._lock = lock
        self._payments: List[Payment] = []

    def add(self, payment: Payment) -> Payment:
        with self._lock:
            self._payments.append(payment)
        return payment

    def list(self) -> List[Payment]:
        return list(self._payments)


class MemorySettingsRepository(SettingsRepository):

    def __init__(self, lock: threading.Lock):
        self._lock = lock
        self._settings = PlatformSettings(id=1, email_notifications=True, theme="gold")

    def get(self) -> PlatformSettings:
        return self._settings

    def update(self, **fields: Any) -> PlatformSettings:
        with self._lock:
            for key, value in fields.items():
                setattr(self._settings, key, value)
        return self._settings
