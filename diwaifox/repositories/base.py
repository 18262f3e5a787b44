"""
Интерфейсы хранилища.

Сервисы работают только через эти классы, поэтому бэкенд (память или SQL)
подменяется без изменения бизнес-логики. Возвращаемые записи считаются
доступными только для чтения: любые изменения идут через методы репозитория.
"""

from abc import ABC, abstractmethod
from typing import Any, List, Optional

from diwaifox.models import Payment, PlatformSettings, Ride, User


class UserRepository(ABC):

    @abstractmethod
    def add(self, user: User) -> User:
        """Сохраняет пользователя. ConflictError, если email уже занят."""

    @abstractmethod
    def get(self, user_id: str) -> Optional[User]:
        ...

    @abstractmethod
    def get_by_email(self, email: str) -> Optional[User]:
        ...

    @abstractmethod
    def list(self) -> List[User]:
        ...

    @abstractmethod
    def update(self, user_id: str, **fields: Any) -> Optional[User]:
        ...

    @abstractmethod
    def add_earnings(self, user_id: str, amount: float) -> Optional[User]:
        """Атомарно увеличивает заработок водителя."""


class RideRepository(ABC):

    @abstractmethod
    def add(self, ride: Ride) -> Ride:
        ...

    @abstractmethod
    def get(self, ride_id: str) -> Optional[Ride]:
        ...

    @abstractmethod
    def list(self) -> List[Ride]:
        """Все поездки в порядке создания."""

    @abstractmethod
    def compare_and_set(
        self,
        ride_id: str,
        expected_version: int,
        expected_status: Optional[str] = None,
        **changes: Any,
    ) -> Optional[Ride]:
        """
        Применяет changes, только если версия (и статус, если задан) не изменились.

        Returns:
            Обновленную поездку или None, если запись уже изменил кто-то другой.
        """


class PaymentRepository(ABC):

    @abstractmethod
    def add(self, payment: Payment) -> Payment:
        ...

    @abstractmethod
    def list(self) -> List[Payment]:
        ...


class SettingsRepository(ABC):

    @abstractmethod
    def get(self) -> PlatformSettings:
        ...

    @abstractmethod
    def update(self, **fields: Any) -> PlatformSettings:
        ...
