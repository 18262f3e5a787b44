"""
Расчет стоимости и ETA поездки.

Расстояние не приходит от клиента: его дает подключаемый DistanceEstimator.
По умолчанию это случайная величина, заглушка вместо сервиса маршрутизации.
"""

import random
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, Optional

from diwaifox.core.config import Settings


@dataclass(frozen=True)
class FareEstimate:
    distance: float
    fare: float
    eta: int


class DistanceEstimator(ABC):
    """Источник расстояния между точкой подачи и назначением, км."""

    @abstractmethod
    def estimate_km(self, pickup_location: str, destination: str) -> float:
        ...


class RandomDistanceEstimator(DistanceEstimator):
    """Равномерно случайное расстояние в [min_km, max_km)."""

    def __init__(self, min_km: float = 2.0, max_km: float = 22.0, rng: Optional[random.Random] = None):
        if max_km <= min_km:
            raise ValueError("max_km must be greater than min_km")
        self.min_km = min_km
        self.max_km = max_km
        self._rng = rng or random.Random()

    def estimate_km(self, pickup_location: str, destination: str) -> float:
        return self.min_km + self._rng.random() * (self.max_km - self.min_km)


class FixedDistanceEstimator(DistanceEstimator):
    """Всегда одно и то же расстояние. Для тестов и детерминированных прогонов."""

    def __init__(self, km: float):
        self.km = km

    def estimate_km(self, pickup_location: str, destination: str) -> float:
        return self.km


class FareEstimator:
    """Цена = базовый тариф + расстояние * тариф за км для класса машины."""

    def __init__(
        self,
        base_fare: float = 5.0,
        per_km_rates: Optional[Dict[str, float]] = None,
        default_rate: float = 1.5,
        min_eta: int = 5,
        max_eta: int = 20,
        rng: Optional[random.Random] = None,
    ):
        self.base_fare = base_fare
        self.per_km_rates = dict(per_km_rates if per_km_rates is not None else {"sedan": 2.0, "suv": 3.0})
        self.default_rate = default_rate
        self.min_eta = min_eta
        self.max_eta = max_eta
        self._rng = rng or random.Random()

    @classmethod
    def from_settings(cls, settings: Settings, rng: Optional[random.Random] = None) -> "FareEstimator":
        return cls(
            base_fare=settings.BASE_FARE,
            per_km_rates=settings.PER_KM_RATES,
            default_rate=settings.DEFAULT_PER_KM_RATE,
            min_eta=settings.MIN_ETA_MIN,
            max_eta=settings.MAX_ETA_MIN,
            rng=rng,
        )

    def rate_for(self, vehicle_type: str) -> float:
        # van и любые неизвестные классы идут по тарифу по умолчанию
        return self.per_km_rates.get(vehicle_type, self.default_rate)

    def estimate(self, vehicle_type: str, distance_km: float) -> FareEstimate:
        fare = round(self.base_fare + distance_km * self.rate_for(vehicle_type), 2)
        # ETA не зависит от расстояния
        eta = self._rng.randint(self.min_eta, self.max_eta)
        return FareEstimate(distance=distance_km, fare=fare, eta=eta)
