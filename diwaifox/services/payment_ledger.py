"""Учет платежей по поездкам. Платежный шлюз не подключен: платеж всегда успешен."""

import logging
import uuid
from typing import Callable, List, Optional

from diwaifox.core.clock import utcnow
from diwaifox.core.exceptions import ConflictError, NotFoundError, PermissionDeniedError
from diwaifox.models import Payment, PaymentStatus
from diwaifox.repositories import PaymentRepository, RideRepository

from .access_control import Principal, can_submit_payment, payment_visible_in_list

logger = logging.getLogger(__name__)


class PaymentLedger:

    MAX_CAS_ATTEMPTS = 3

    def __init__(
        self,
        payments: PaymentRepository,
        rides: RideRepository,
        clock: Callable = utcnow,
    ):
        self._payments = payments
        self._rides = rides
        self._clock = clock

    def submit(
        self,
        principal: Principal,
        ride_id: str,
        amount: float,
        method: Optional[str] = None,
    ) -> Payment:
        """
        Записывает платеж и помечает поездку оплаченной.
        Сумма не сверяется с ценой поездки, повторный платеж создает новую запись.
        """
        ride = self._rides.get(ride_id)
        if ride is None:
            raise NotFoundError("Ride not found")
        if not can_submit_payment(principal, ride):
            raise PermissionDeniedError("Access denied")

        # сначала отметка на поездке: при ConflictError платеж не записывается
        self._mark_paid(ride)

        now = self._clock()
        payment = Payment(
            id=str(uuid.uuid4()),
            ride_id=ride.id,
            passenger_id=principal.id,
            amount=amount,
            method=method or ride.payment_method,
            status=PaymentStatus.COMPLETED.value,
            transaction_id=f"TXN-{int(now.timestamp() * 1000)}",
            created_at=now,
        )
        self._payments.add(payment)

        logger.info(f"Платеж {payment.transaction_id} на {amount} по поездке {ride.id}")
        return payment

    def _mark_paid(self, ride) -> None:
        for _ in range(self.MAX_CAS_ATTEMPTS):
            if ride.payment_status == PaymentStatus.COMPLETED:
                return
            updated = self._rides.compare_and_set(
                ride.id,
                expected_version=ride.version,
                payment_status=PaymentStatus.COMPLETED.value,
            )
            if updated is not None:
                return
            ride = self._rides.get(ride.id)
        raise ConflictError("Ride was modified concurrently")

    def list_for(self, principal: Principal) -> List[Payment]:
        return [p for p in self._payments.list() if payment_visible_in_list(principal, p)]
