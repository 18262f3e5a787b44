"""Модуль с общими зависимостями для API."""

from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from diwaifox.core.exceptions import AuthenticationError
from diwaifox.schemas.ride import RideResponse, RideWithParticipants
from diwaifox.schemas.user import UserResponse
from diwaifox.services import Principal, ServiceContainer

bearer_scheme = HTTPBearer(auto_error=False)


def get_services(request: Request) -> ServiceContainer:
    """Контейнер сервисов, созданный при старте приложения."""
    return request.app.state.services


def get_current_principal(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    services: ServiceContainer = Depends(get_services),
) -> Principal:
    """
    Достает пользователя из заголовка Authorization: Bearer <token>.
    Нет токена - 401, невалидный токен - 403.
    """
    if credentials is None:
        raise AuthenticationError("Access denied")
    return services.credentials.verify_token(credentials.credentials)


def ride_with_participants(services: ServiceContainer, ride) -> RideWithParticipants:
    passenger, driver = services.rides.participants(ride)
    return RideWithParticipants(
        **RideResponse.model_validate(ride).model_dump(),
        passenger=UserResponse.model_validate(passenger) if passenger else None,
        driver=UserResponse.model_validate(driver) if driver else None,
    )
