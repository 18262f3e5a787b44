# api/payments.py
from fastapi import APIRouter, Depends, status

from diwaifox.schemas.payment import (
    PaymentCreate,
    PaymentCreatedResponse,
    PaymentListResponse,
    PaymentResponse,
)
from diwaifox.services import Principal, ServiceContainer

from .dependencies import get_current_principal, get_services

router = APIRouter(prefix="/payments", tags=["payments"])


@router.post("", response_model=PaymentCreatedResponse, status_code=status.HTTP_201_CREATED)
def submit_payment(
    payment_data: PaymentCreate,
    services: ServiceContainer = Depends(get_services),
    current_user: Principal = Depends(get_current_principal),
):
    """Оплата поездки пассажиром (или админом)"""
    payment = services.payments.submit(
        current_user,
        ride_id=payment_data.ride_id,
        amount=payment_data.amount,
        method=payment_data.method,
    )
    return PaymentCreatedResponse(
        message="Payment processed successfully",
        payment=PaymentResponse.model_validate(payment),
    )


@router.get("", response_model=PaymentListResponse)
def list_payments(
    services: ServiceContainer = Depends(get_services),
    current_user: Principal = Depends(get_current_principal),
):
    payments = services.payments.list_for(current_user)
    return PaymentListResponse(payments=[PaymentResponse.model_validate(p) for p in payments])
