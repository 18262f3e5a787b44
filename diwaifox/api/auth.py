# api/auth.py
from fastapi import APIRouter, Depends, status

from diwaifox.schemas.base import MessageResponse
from diwaifox.schemas.user import (
    AuthResponse,
    LoginRequest,
    RegisterRequest,
    ResetPasswordRequest,
    UserResponse,
)
from diwaifox.services import ServiceContainer

from .dependencies import get_services

router = APIRouter(prefix="/auth", tags=["authentication"])


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    user_data: RegisterRequest,
    services: ServiceContainer = Depends(get_services),
):
    """Регистрация нового пользователя (пассажира, водителя или администратора)"""
    user, token = services.credentials.register(
        email=user_data.email,
        password=user_data.password,
        name=user_data.name,
        phone=user_data.phone,
        role=user_data.role,
        vehicle_type=user_data.vehicle_type,
        license_plate=user_data.license_plate,
    )
    return AuthResponse(
        message="User registered successfully",
        token=token,
        user=UserResponse.model_validate(user),
    )


@router.post("/login", response_model=AuthResponse)
def login(
    login_data: LoginRequest,
    services: ServiceContainer = Depends(get_services),
):
    """Вход в систему"""
    user, token = services.credentials.login(login_data.email, login_data.password)
    return AuthResponse(
        message="Login successful",
        token=token,
        user=UserResponse.model_validate(user),
    )


@router.post("/reset-password", response_model=MessageResponse)
def reset_password(
    reset_data: ResetPasswordRequest,
    services: ServiceContainer = Depends(get_services),
):
    """Запрос на сброс пароля (письмо не отправляется)"""
    message = services.credentials.request_password_reset(reset_data.email)
    return MessageResponse(message=message)
