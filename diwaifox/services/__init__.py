"""
Services package - бизнес-логика, отделенная от HTTP-слоя.

Modules:
    - access_control: роли и проверки доступа
    - credential_store: регистрация, вход, токены, профиль
    - fare_estimator: цена и ETA поездки
    - ride_ledger: жизненный цикл поездки
    - payment_ledger: платежи
    - admin_aggregator: статистика для администратора
    - platform_settings: глобальные настройки
"""

import random
from dataclasses import dataclass
from typing import Optional

from diwaifox.core.config import Settings
from diwaifox.core.security import PasswordHasher, TokenCodec
from diwaifox.repositories import Repositories

from .access_control import Principal
from .admin_aggregator import AdminAggregator, AdminStats
from .credential_store import CredentialStore
from .fare_estimator import (
    DistanceEstimator,
    FareEstimate,
    FareEstimator,
    FixedDistanceEstimator,
    RandomDistanceEstimator,
)
from .payment_ledger import PaymentLedger
from .platform_settings import PlatformSettingsService
from .ride_ledger import RideLedger


@dataclass
class ServiceContainer:
    repositories: Repositories
    credentials: CredentialStore
    rides: RideLedger
    payments: PaymentLedger
    admin: AdminAggregator
    platform_settings: PlatformSettingsService


def build_services(
    settings: Settings,
    repositories: Repositories,
    distance_estimator: Optional[DistanceEstimator] = None,
    rng: Optional[random.Random] = None,
) -> ServiceContainer:
    """Собирает сервисы поверх выбранного хранилища."""
    rng = rng or random.Random()
    if distance_estimator is None:
        distance_estimator = RandomDistanceEstimator(
            settings.MIN_DISTANCE_KM, settings.MAX_DISTANCE_KM, rng=rng
        )

    return ServiceContainer(
        repositories=repositories,
        credentials=CredentialStore(
            repositories.users,
            PasswordHasher(rounds=settings.BCRYPT_ROUNDS),
            TokenCodec(settings.JWT_SECRET, settings.JWT_ALGORITHM),
        ),
        rides=RideLedger(
            repositories.rides,
            repositories.users,
            FareEstimator.from_settings(settings, rng=rng),
            distance_estimator,
        ),
        payments=PaymentLedger(repositories.payments, repositories.rides),
        admin=AdminAggregator(repositories.users, repositories.rides, repositories.payments),
        platform_settings=PlatformSettingsService(repositories.settings),
    )


__all__ = [
    "AdminAggregator",
    "AdminStats",
    "CredentialStore",
    "DistanceEstimator",
    "FareEstimate",
    "FareEstimator",
    "FixedDistanceEstimator",
    "PaymentLedger",
    "PlatformSettingsService",
    "Principal",
    "RandomDistanceEstimator",
    "RideLedger",
    "ServiceContainer",
    "build_services",
]
