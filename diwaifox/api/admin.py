# api/admin.py
from dataclasses import asdict

from fastapi import APIRouter, Depends

from diwaifox.schemas.admin import (
    SettingsEnvelope,
    SettingsResponse,
    SettingsUpdate,
    SettingsUpdatedResponse,
    StatsEnvelope,
    StatsResponse,
)
from diwaifox.services import Principal, ServiceContainer

from .dependencies import get_current_principal, get_services

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/stats", response_model=StatsEnvelope)
def get_stats(
    services: ServiceContainer = Depends(get_services),
    current_user: Principal = Depends(get_current_principal),
):
    """Статистика для панели администратора"""
    stats = services.admin.stats(current_user)
    return StatsEnvelope(stats=StatsResponse(**asdict(stats)))


@router.get("/settings", response_model=SettingsEnvelope)
def get_settings(
    services: ServiceContainer = Depends(get_services),
    current_user: Principal = Depends(get_current_principal),
):
    platform_settings = services.platform_settings.get(current_user)
    return SettingsEnvelope(settings=SettingsResponse.model_validate(platform_settings))


@router.put("/settings", response_model=SettingsUpdatedResponse)
def update_settings(
    settings_update: SettingsUpdate,
    services: ServiceContainer = Depends(get_services),
    current_user: Principal = Depends(get_current_principal),
):
    platform_settings = services.platform_settings.update(
        current_user,
        email_notifications=settings_update.email_notifications,
        theme=settings_update.theme,
    )
    return SettingsUpdatedResponse(
        message="Settings updated",
        settings=SettingsResponse.model_validate(platform_settings),
    )
