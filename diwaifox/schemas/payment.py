from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from .base import CamelModel


class PaymentCreate(CamelModel):
    ride_id: str = Field(..., min_length=1)
    amount: float
    method: Optional[str] = None


class PaymentResponse(CamelModel):
    id: str
    ride_id: str
    passenger_id: str
    amount: float
    method: Optional[str] = None
    status: str
    transaction_id: str
    created_at: datetime


class PaymentCreatedResponse(BaseModel):
    message: str
    payment: PaymentResponse


class PaymentListResponse(BaseModel):
    payments: List[PaymentResponse]
