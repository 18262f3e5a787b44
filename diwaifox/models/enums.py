"""Перечисления ролей и статусов."""

from enum import Enum


class UserRole(str, Enum):
    PASSENGER = "passenger"
    DRIVER = "driver"
    ADMIN = "admin"


class UserStatus(str, Enum):
    ACTIVE = "active"
    ONLINE = "online"
    OFFLINE = "offline"


class DriverStatus(str, Enum):
    """Статусы, которые водитель может выставить себе сам."""
    ONLINE = "online"
    OFFLINE = "offline"


class RideStatus(str, Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class PaymentStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
