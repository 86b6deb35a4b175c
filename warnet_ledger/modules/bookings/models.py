# -*- coding: utf-8 -*-
"""
warnet_ledger/modules/bookings/models.py

Modelo ORM de reservas de estaciones.

Tabla: bookings

Ciclo de vida:
- creada pending/pending
- confirm_payment → payment_status=paid, can_cancel_until = paid_at + ventana
- cancel (dentro de la ventana) → cancelled (terminal)
- start_session → active, session_start_time=now
- expiración natural o manual → completed (terminal)

Autor: WarnetLedger
Fecha: 2026-10-07
"""

from __future__ import annotations

from datetime import date, datetime, time
from typing import Optional

from sqlalchemy import (
    BigInteger,
    Boolean,
    CheckConstraint,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Text,
    Time,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column

from warnet_ledger.shared.database.base import Base, BigIntPK, str_enum
from warnet_ledger.shared.utils.time_utils import now_utc
from .enums import BookingStatus, PaymentStatus


class Booking(Base):
    __tablename__ = "bookings"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True, autoincrement=True)
    owner_id: Mapped[int] = mapped_column(BigInteger, nullable=False, index=True)
    venue_id: Mapped[int] = mapped_column(
        BigInteger,
        ForeignKey("venues.id", ondelete="RESTRICT"),
        nullable=False,
    )
    resource_number: Mapped[int] = mapped_column(Integer, nullable=False)

    booking_date: Mapped[date] = mapped_column(Date, nullable=False)
    booking_time: Mapped[time] = mapped_column(Time, nullable=False)
    duration_hours: Mapped[int] = mapped_column(Integer, nullable=False)

    status: Mapped[BookingStatus] = mapped_column(
        str_enum(BookingStatus, name="booking_status"),
        nullable=False,
        default=BookingStatus.PENDING,
    )
    payment_status: Mapped[PaymentStatus] = mapped_column(
        str_enum(PaymentStatus, name="booking_payment_status"),
        nullable=False,
        default=PaymentStatus.PENDING,
    )
    status_note: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Sesión
    session_start_time: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    session_end_time: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    is_session_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    # Precio (snapshot al crear)
    price_per_hour: Mapped[int] = mapped_column(Integer, nullable=False)
    total_price: Mapped[int] = mapped_column(BigInteger, nullable=False)
    is_member_booking: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    # Pago y ventana de cancelación
    paid_with_wallet: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    paid_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    can_cancel_until: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=now_utc,
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=now_utc,
        server_default=func.now(),
    )

    __table_args__ = (
        CheckConstraint("duration_hours > 0", name="duration_positive"),
        CheckConstraint("resource_number > 0", name="resource_number_positive"),
        CheckConstraint("total_price >= 0", name="total_price_non_negative"),
        Index("ix_bookings_owner_status", "owner_id", "status"),
    )

    def __repr__(self) -> str:
        return (
            f"<Booking id={self.id} owner={self.owner_id} venue={self.venue_id} "
            f"status={self.status.value} payment={self.payment_status.value}>"
        )


__all__ = ["Booking"]
# Fin del archivo warnet_ledger/modules/bookings/models.py
