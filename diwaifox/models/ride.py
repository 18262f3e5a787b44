"""SQLAlchemy-модель поездки."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from diwaifox.core.db import Base, UTCDateTime


class Ride(Base):
    """
    Поездка. Цена и ETA считаются один раз при создании.
    version увеличивается при каждом изменении и используется для compare-and-swap.
    """
    __tablename__ = "rides"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    passenger_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    driver_id: Mapped[Optional[str]] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True
    )
    pickup_location: Mapped[str] = mapped_column(Text, nullable=False)
    destination: Mapped[str] = mapped_column(Text, nullable=False)
    vehicle_type: Mapped[str] = mapped_column(String(32), nullable=False)
    distance: Mapped[float] = mapped_column(Float, nullable=False)
    fare: Mapped[float] = mapped_column(Float, nullable=False)
    eta: Mapped[int] = mapped_column(Integer, nullable=False)
    status: Mapped[str] = mapped_column(String(32), nullable=False, default="pending")
    payment_method: Mapped[str] = mapped_column(String(32), nullable=False, default="cash")
    payment_status: Mapped[str] = mapped_column(String(16), nullable=False, default="pending")
    created_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)
    start_time: Mapped[Optional[datetime]] = mapped_column(UTCDateTime, nullable=True)
    end_time: Mapped[Optional[datetime]] = mapped_column(UTCDateTime, nullable=True)
    # выставляется вместе с первым начислением водителю, повторно не начисляем
    earnings_credited: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    def __repr__(self) -> str:
        return f"<Ride id={self.id} status={self.status} driver={self.driver_id}>"
