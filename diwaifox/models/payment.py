"""SQLAlchemy-модели платежа и настроек платформы."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, Float, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from diwaifox.core.db import Base, UTCDateTime


class Payment(Base):
    """Платеж по поездке. После создания не изменяется."""
    __tablename__ = "payments"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    ride_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("rides.id", ondelete="CASCADE"), nullable=False, index=True
    )
    passenger_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    amount: Mapped[float] = mapped_column(Float, nullable=False)
    method: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    status: Mapped[str] = mapped_column(String(16), nullable=False, default="completed")
    transaction_id: Mapped[str] = mapped_column(String(64), nullable=False)
    created_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)

    def __repr__(self) -> str:
        return f"<Payment id={self.id} ride={self.ride_id} amount={self.amount}>"


class PlatformSettings(Base):
    """Единственная строка с настройками платформы (id всегда 1)."""
    __tablename__ = "platform_settings"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, default=1)
    email_notifications: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    theme: Mapped[str] = mapped_column(String(32), nullable=False, default="gold")
