"""Pydantic схемы пользователей и аутентификации."""

from datetime import datetime
from typing import List, Optional

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, Field, field_validator

from diwaifox.models import DriverStatus, UserRole

from .base import CamelModel


class UserResponse(CamelModel):
    """Публичное представление пользователя, без хэша пароля."""
    id: str
    email: str
    name: str
    phone: str
    role: UserRole
    vehicle_type: Optional[str] = None
    license_plate: Optional[str] = None
    status: str
    earnings: float = 0.0
    rating: float = 5.0
    created_at: datetime


class RegisterRequest(CamelModel):
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    phone: str = Field(..., min_length=1)
    role: UserRole
    vehicle_type: Optional[str] = None
    license_plate: Optional[str] = None

    @field_validator("email")
    @classmethod
    def check_email_format(cls, value: str) -> str:
        # формат проверяем, но адрес сохраняем как прислали: уникальность по точному совпадению
        try:
            validate_email(value, check_deliverability=False)
        except EmailNotValidError as e:
            raise ValueError(f"value is not a valid email address: {e}") from e
        return value


class LoginRequest(CamelModel):
    """Без проверки формата: любой промах дает одинаковый ответ 401."""
    email: str
    password: str


class ResetPasswordRequest(CamelModel):
    email: str


class AuthResponse(BaseModel):
    message: str
    token: str
    user: UserResponse


class ProfileUpdate(CamelModel):
    name: Optional[str] = None
    phone: Optional[str] = None
    vehicle_type: Optional[str] = None
    license_plate: Optional[str] = None


class DriverStatusUpdate(CamelModel):
    status: DriverStatus


class UserEnvelope(BaseModel):
    user: UserResponse


class UserUpdatedResponse(BaseModel):
    message: str
    user: UserResponse


class UserListResponse(BaseModel):
    users: List[UserResponse]


class DriverStatusResponse(BaseModel):
    message: str
    driver: UserResponse
