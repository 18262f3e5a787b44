# api/users.py
from fastapi import APIRouter, Depends

from diwaifox.schemas.user import (
    ProfileUpdate,
    UserEnvelope,
    UserListResponse,
    UserResponse,
    UserUpdatedResponse,
)
from diwaifox.services import Principal, ServiceContainer

from .dependencies import get_current_principal, get_services

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=UserListResponse)
def list_users(
    services: ServiceContainer = Depends(get_services),
    current_user: Principal = Depends(get_current_principal),
):
    """Все пользователи (только админ)"""
    users = services.credentials.list_users(current_user)
    return UserListResponse(users=[UserResponse.model_validate(u) for u in users])


@router.get("/me", response_model=UserEnvelope)
def get_profile(
    services: ServiceContainer = Depends(get_services),
    current_user: Principal = Depends(get_current_principal),
):
    user = services.credentials.get_user(current_user.id)
    return UserEnvelope(user=UserResponse.model_validate(user))


@router.put("/me", response_model=UserUpdatedResponse)
def update_profile(
    profile: ProfileUpdate,
    services: ServiceContainer = Depends(get_services),
    current_user: Principal = Depends(get_current_principal),
):
    """Обновление профиля; поля машины учитываются только у водителя"""
    user = services.credentials.update_profile(
        current_user,
        name=profile.name,
        phone=profile.phone,
        vehicle_type=profile.vehicle_type,
        license_plate=profile.license_plate,
    )
    return UserUpdatedResponse(message="Profile updated", user=UserResponse.model_validate(user))
