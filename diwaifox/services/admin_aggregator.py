"""Статистика для панели администратора. Только чтение."""

from dataclasses import dataclass
from typing import Callable

from diwaifox.core.clock import utcnow
from diwaifox.models import RideStatus, UserRole, UserStatus
from diwaifox.repositories import PaymentRepository, RideRepository, UserRepository

from .access_control import Principal, require_admin


@dataclass(frozen=True)
class AdminStats:
    total_rides: int
    completed_rides: int
    active_rides: int
    total_revenue: float
    total_drivers: int
    online_drivers: int
    total_passengers: int
    today_rides: int


class AdminAggregator:

    def __init__(
        self,
        users: UserRepository,
        rides: RideRepository,
        payments: PaymentRepository,
        clock: Callable = utcnow,
    ):
        self._users = users
        self._rides = rides
        self._payments = payments
        self._clock = clock

    def stats(self, principal: Principal) -> AdminStats:
        require_admin(principal)

        rides = self._rides.list()
        users = self._users.list()
        drivers = [u for u in users if u.role == UserRole.DRIVER]
        # "сегодня" считается по локальной дате сервера
        today = self._clock().astimezone().date()

        return AdminStats(
            total_rides=len(rides),
            completed_rides=sum(1 for r in rides if r.status == RideStatus.COMPLETED),
            active_rides=sum(1 for r in rides if r.status == RideStatus.IN_PROGRESS),
            # все платежи, включая повторные по одной поездке
            total_revenue=sum(p.amount for p in self._payments.list()),
            total_drivers=len(drivers),
            online_drivers=sum(1 for d in drivers if d.status == UserStatus.ONLINE),
            total_passengers=sum(1 for u in users if u.role == UserRole.PASSENGER),
            today_rides=sum(1 for r in rides if r.created_at.astimezone().date() == today),
        )
