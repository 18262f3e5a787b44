from .enums import DriverStatus, PaymentStatus, RideStatus, UserRole, UserStatus
from .payment import Payment, PlatformSettings
from .ride import Ride
from .user import User

__all__ = [
    "DriverStatus",
    "PaymentStatus",
    "RideStatus",
    "UserRole",
    "UserStatus",
    "Payment",
    "PlatformSettings",
    "Ride",
    "User",
]
