# -*- coding: utf-8 -*-
"""
warnet_ledger/modules/bookings/schemas.py

Esquemas Pydantic para reservas.

Autor: WarnetLedger
Fecha: 2026-10-07
"""

from __future__ import annotations

from datetime import date, datetime, time
from typing import List, Optional

from pydantic import BaseModel, Field

from .enums import BookingStatus, PaymentStatus
from .models import Booking
from .services import remaining_minutes


class BookingCreateRequest(BaseModel):
    venue_id: int
    resource_number: int = Field(description="Número de estación (PC) dentro de la sede.")
    booking_date: date
    booking_time: time
    duration_hours: int


class ConfirmPaymentRequest(BaseModel):
    use_money_wallet: bool = Field(
        default=True,
        description="True: débito del saldo del dueño. False: pago externo registrado por un operador.",
    )


class RejectPaymentRequest(BaseModel):
    note: Optional[str] = None


class BookingResponse(BaseModel):
    id: int
    owner_id: int
    venue_id: int
    resource_number: int
    booking_date: date
    booking_time: time
    duration_hours: int
    status: BookingStatus
    payment_status: PaymentStatus
    status_note: Optional[str] = None
    price_per_hour: int
    total_price: int
    is_member_booking: bool
    paid_with_wallet: bool
    paid_at: Optional[datetime] = None
    can_cancel_until: Optional[datetime] = None
    session_start_time: Optional[datetime] = None
    session_end_time: Optional[datetime] = None
    is_session_active: bool
    remaining_minutes: Optional[float] = None

    @classmethod
    def from_booking(cls, booking: Booking, now: datetime) -> "BookingResponse":
        left = remaining_minutes(booking, now)
        return cls(
            id=booking.id,
            owner_id=booking.owner_id,
            venue_id=booking.venue_id,
            resource_number=booking.resource_number,
            booking_date=booking.booking_date,
            booking_time=booking.booking_time,
            duration_hours=booking.duration_hours,
            status=booking.status,
            payment_status=booking.payment_status,
            status_note=booking.status_note,
            price_per_hour=booking.price_per_hour,
            total_price=booking.total_price,
            is_member_booking=booking.is_member_booking,
            paid_with_wallet=booking.paid_with_wallet,
            paid_at=booking.paid_at,
            can_cancel_until=booking.can_cancel_until,
            session_start_time=booking.session_start_time,
            session_end_time=booking.session_end_time,
            is_session_active=booking.is_session_active,
            remaining_minutes=round(left, 4) if left is not None else None,
        )


class BookingListResponse(BaseModel):
    owner_id: int
    items: List[BookingResponse]
    limit: int
    offset: int


class RemainingMinutesResponse(BaseModel):
    booking_id: int
    is_session_active: bool
    remaining_minutes: Optional[float] = None


__all__ = [
    "BookingCreateRequest",
    "ConfirmPaymentRequest",
    "RejectPaymentRequest",
    "BookingResponse",
    "BookingListResponse",
    "RemainingMinutesResponse",
]
# Fin del archivo warnet_ledger/modules/bookings/schemas.py
