from typing import Optional

from pydantic import BaseModel

from .base import CamelModel


class StatsResponse(CamelModel):
    total_rides: int
    completed_rides: int
    active_rides: int
    total_revenue: float
    total_drivers: int
    online_drivers: int
    total_passengers: int
    today_rides: int


class StatsEnvelope(BaseModel):
    stats: StatsResponse


class SettingsResponse(CamelModel):
    email_notifications: bool
    theme: str


class SettingsUpdate(CamelModel):
    email_notifications: Optional[bool] = None
    theme: Optional[str] = None


class SettingsEnvelope(BaseModel):
    settings: SettingsResponse


class SettingsUpdatedResponse(BaseModel):
    message: str
    settings: SettingsResponse
