"""
Жизненный цикл поездки: создание, просмотр, принятие водителем, смена статуса.

Все изменения поездки идут через compare-and-swap по полю version,
поэтому два водителя не могут принять одну поездку одновременно.
"""

import logging
import uuid
from typing import Callable, List, Optional, Tuple

from diwaifox.core.clock import utcnow
from diwaifox.core.exceptions import (
    ConflictError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)
from diwaifox.models import PaymentStatus, Ride, RideStatus, User
from diwaifox.repositories import RideRepository, UserRepository

from .access_control import (
    Principal,
    can_accept_rides,
    can_update_ride_status,
    can_view_ride,
    ride_visible_in_list,
)
from .fare_estimator import DistanceEstimator, FareEstimator

logger = logging.getLogger(__name__)


class RideLedger:

    DEFAULT_PAYMENT_METHOD = "cash"

    def __init__(
        self,
        rides: RideRepository,
        users: UserRepository,
        fare_estimator: FareEstimator,
        distance_estimator: DistanceEstimator,
        clock: Callable = utcnow,
    ):
        self._rides = rides
        self._users = users
        self._fares = fare_estimator
        self._distances = distance_estimator
        self._clock = clock

    def book(
        self,
        principal: Principal,
        pickup_location: str,
        destination: str,
        vehicle_type: str,
        payment_method: Optional[str] = None,
    ) -> Ride:
        """Создает поездку в статусе pending с рассчитанной ценой и ETA."""
        if not pickup_location or not destination or not vehicle_type:
            raise ValidationError("Missing required fields")

        distance = self._distances.estimate_km(pickup_location, destination)
        estimate = self._fares.estimate(vehicle_type, distance)

        ride = Ride(
            id=str(uuid.uuid4()),
            passenger_id=principal.id,
            driver_id=None,
            pickup_location=pickup_location,
            destination=destination,
            vehicle_type=vehicle_type,
            distance=round(estimate.distance, 2),
            fare=estimate.fare,
            eta=estimate.eta,
            status=RideStatus.PENDING.value,
            payment_method=payment_method or self.DEFAULT_PAYMENT_METHOD,
            payment_status=PaymentStatus.PENDING.value,
            created_at=self._clock(),
            start_time=None,
            end_time=None,
            earnings_credited=False,
            version=1,
        )
        self._rides.add(ride)
        logger.info(f"Создана поездка {ride.id}: {vehicle_type}, {ride.distance} км, цена {ride.fare}")
        return ride

    def list_for(self, principal: Principal) -> List[Ride]:
        return [ride for ride in self._rides.list() if ride_visible_in_list(principal, ride)]

    def get(self, ride_id: str) -> Ride:
        ride = self._rides.get(ride_id)
        if ride is None:
            raise NotFoundError("Ride not found")
        return ride

    def get_for(self, principal: Principal, ride_id: str) -> Ride:
        ride = self.get(ride_id)
        if not can_view_ride(principal, ride):
            raise PermissionDeniedError("Access denied")
        return ride

    def participants(self, ride: Ride) -> Tuple[Optional[User], Optional[User]]:
        """Пассажир и водитель поездки (водителя может не быть)."""
        passenger = self._users.get(ride.passenger_id)
        driver = self._users.get(ride.driver_id) if ride.driver_id else None
        return passenger, driver

    def accept(self, principal: Principal, ride_id: str) -> Ride:
        """
        Водитель принимает поездку.

        Raises:
            PermissionDeniedError: вызывающий не водитель.
            NotFoundError: поездки нет.
            ConflictError: поездка уже не в статусе pending.
        """
        if not can_accept_rides(principal):
            raise PermissionDeniedError("Only drivers can accept rides")

        ride = self.get(ride_id)
        if ride.status != RideStatus.PENDING:
            raise ConflictError("Ride is not available")

        accepted = self._rides.compare_and_set(
            ride.id,
            expected_version=ride.version,
            expected_status=RideStatus.PENDING.value,
            driver_id=principal.id,
            status=RideStatus.ACCEPTED.value,
            start_time=self._clock(),
        )
        if accepted is None:
            logger.info(f"Поездку {ride_id} уже принял другой водитель")
            raise ConflictError("Ride is not available")

        logger.info(f"Водитель {principal.id} принял поездку {ride_id}")
        return accepted

    def update_status(self, principal: Principal, ride_id: str, status) -> Ride:
        """
        Меняет статус поездки. Граф переходов не проверяется.
        При первом переходе в completed назначенному водителю начисляется
        стоимость поездки; completed -> cancelled -> completed второй раз не платит.
        """
        try:
            new_status = RideStatus(status)
        except ValueError:
            raise ValidationError(f"Invalid status: {status}")

        ride = self.get(ride_id)
        # версию читаем до остальных полей: в памяти ride это живой объект
        expected_version = ride.version
        if not can_update_ride_status(principal, ride):
            raise PermissionDeniedError("Access denied")

        previous_status = ride.status
        completing = new_status is RideStatus.COMPLETED and previous_status != RideStatus.COMPLETED
        crediting = completing and bool(ride.driver_id) and not ride.earnings_credited
        changes = {"status": new_status.value}
        if completing:
            changes["end_time"] = self._clock()
        if crediting:
            changes["earnings_credited"] = True

        updated = self._rides.compare_and_set(ride.id, expected_version=expected_version, **changes)
        if updated is None:
            raise ConflictError("Ride was modified concurrently")

        logger.info(f"Поездка {ride_id}: статус {previous_status} -> {new_status.value}")

        if crediting:
            self._users.add_earnings(updated.driver_id, updated.fare)
            logger.info(f"Водителю {updated.driver_id} начислено {updated.fare} за поездку {ride_id}")

        return updated
