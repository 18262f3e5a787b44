"""
Pydantic схемы для работы с поездками (rides).
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from diwaifox.models import RideStatus

from .base import CamelModel
from .user import UserResponse


class RideCreate(CamelModel):
    """
    Схема запроса на создание поездки.
    Адреса свободным текстом, координаты не передаются.
    """
    pickup_location: str = Field(..., min_length=1, description="Адрес подачи")
    destination: str = Field(..., min_length=1, description="Адрес назначения")
    vehicle_type: str = Field(..., min_length=1, description="sedan, suv, van...")
    payment_method: Optional[str] = Field(None, description="По умолчанию cash")


class RideResponse(CamelModel):
    id: str
    passenger_id: str
    driver_id: Optional[str] = None
    pickup_location: str
    destination: str
    vehicle_type: str
    distance: float
    fare: float
    eta: int
    status: RideStatus
    payment_method: str
    payment_status: str
    created_at: datetime
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None


class RideWithParticipants(RideResponse):
    passenger: Optional[UserResponse] = None
    driver: Optional[UserResponse] = None


class RideStatusUpdate(CamelModel):
    """
    Схема запроса для обновления статуса поездки.
    """
    status: RideStatus = Field(..., description="Новый статус поездки")


class RideEnvelope(BaseModel):
    ride: RideResponse


class RideChangedResponse(BaseModel):
    message: str
    ride: RideResponse


class RideListResponse(BaseModel):
    rides: List[RideWithParticipants]
