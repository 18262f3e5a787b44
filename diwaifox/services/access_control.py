"""
Проверки доступа по роли и владельцу.

Каждый предикат явно разбирает все три роли; неизвестная роль считается
ошибкой программы, а не отказом в доступе.
"""

from dataclasses import dataclass
from typing import Any, Dict

from diwaifox.core.exceptions import InvalidTokenError, PermissionDeniedError
from diwaifox.models import Payment, Ride, RideStatus, UserRole


@dataclass(frozen=True)
class Principal:
    """Пользователь, от имени которого выполняется запрос (из токена)."""
    id: str
    email: str
    role: UserRole

    @classmethod
    def from_claims(cls, claims: Dict[str, Any]) -> "Principal":
        try:
            return cls(
                id=str(claims["id"]),
                email=str(claims["email"]),
                role=UserRole(claims["role"]),
            )
        except (KeyError, ValueError) as e:
            raise InvalidTokenError("Invalid token") from e

    @property
    def is_admin(self) -> bool:
        return self.role is UserRole.ADMIN


def _unknown_role(role) -> AssertionError:
    return AssertionError(f"Unhandled role: {role!r}")


def ride_visible_in_list(principal: Principal, ride: Ride) -> bool:
    """Фильтр списка поездок: водитель видит свои и все ожидающие."""
    role = principal.role
    if role is UserRole.ADMIN:
        return True
    if role is UserRole.DRIVER:
        return ride.driver_id == principal.id or ride.status == RideStatus.PENDING
    if role is UserRole.PASSENGER:
        return ride.passenger_id == principal.id
    raise _unknown_role(role)


def can_view_ride(principal: Principal, ride: Ride) -> bool:
    role = principal.role
    if role is UserRole.ADMIN:
        return True
    if role is UserRole.DRIVER or role is UserRole.PASSENGER:
        return principal.id in (ride.passenger_id, ride.driver_id)
    raise _unknown_role(role)


def can_accept_rides(principal: Principal) -> bool:
    role = principal.role
    if role is UserRole.DRIVER:
        return True
    if role is UserRole.ADMIN or role is UserRole.PASSENGER:
        return False
    raise _unknown_role(role)


def can_update_ride_status(principal: Principal, ride: Ride) -> bool:
    role = principal.role
    if role is UserRole.ADMIN:
        return True
    if role is UserRole.DRIVER:
        return ride.driver_id == principal.id
    if role is UserRole.PASSENGER:
        return False
    raise _unknown_role(role)


def can_submit_payment(principal: Principal, ride: Ride) -> bool:
    role = principal.role
    if role is UserRole.ADMIN:
        return True
    if role is UserRole.DRIVER or role is UserRole.PASSENGER:
        return ride.passenger_id == principal.id
    raise _unknown_role(role)


def payment_visible_in_list(principal: Principal, payment: Payment) -> bool:
    role = principal.role
    if role is UserRole.ADMIN:
        return True
    if role is UserRole.DRIVER or role is UserRole.PASSENGER:
        return payment.passenger_id == principal.id
    raise _unknown_role(role)


def require_admin(principal: Principal) -> None:
    if not principal.is_admin:
        raise PermissionDeniedError("Admin access required")


def require_driver(principal: Principal, message: str = "Driver access required") -> None:
    if principal.role is not UserRole.DRIVER:
        raise PermissionDeniedError(message)
