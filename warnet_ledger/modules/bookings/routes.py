# -*- coding: utf-8 -*-
"""
warnet_ledger/modules/bookings/routes.py

Rutas de reservas.

Endpoints:
- POST /bookings                          → createBooking
- GET  /bookings                          → listado del dueño (u operador con owner_id)
- GET  /bookings/{id}                     → detalle (aplica expiración perezosa)
- POST /bookings/{id}/confirm-payment     → confirmBookingPayment
- POST /bookings/{id}/reject-payment      → rejectBookingPayment (operador)
- POST /bookings/{id}/cancel              → cancelBooking
- POST /bookings/{id}/start               → startBookingSession
- POST /bookings/{id}/complete            → completeBookingSession
- GET  /bookings/{id}/remaining           → getBookingRemainingMinutes

Autor: WarnetLedger
Fecha: 2026-10-07
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from warnet_ledger.core.db import commit_or_raise, get_db_session
from warnet_ledger.core.settings import get_settings
from warnet_ledger.shared.auth_context import Identity, get_current_identity

from .enums import BookingStatus
from .schemas import (
    BookingCreateRequest,
    BookingListResponse,
    BookingResponse,
    ConfirmPaymentRequest,
    RejectPaymentRequest,
    RemainingMinutesResponse,
)
from .services import BookingService, remaining_minutes

router = APIRouter(prefix="/bookings", tags=["bookings"])


def get_booking_service() -> BookingService:
    return BookingService()


@router.post("", response_model=BookingResponse, status_code=status.HTTP_201_CREATED)
async def create_booking(
    payload: BookingCreateRequest,
    identity: Identity = Depends(get_current_identity),
    session: AsyncSession = Depends(get_db_session),
    service: BookingService = Depends(get_booking_service),
):
    async def _work():
        return await service.create(
            session,
            identity,
            venue_id=payload.venue_id,
            resource_number=payload.resource_number,
            booking_date=payload.booking_date,
            booking_time=payload.booking_time,
            duration_hours=payload.duration_hours,
        )

    booking = await commit_or_raise(session, _work)
    return BookingResponse.from_booking(booking, service.clock())


@router.get("", response_model=BookingListResponse)
async def list_bookings(
    owner_id: Optional[int] = Query(default=None),
    booking_status: Optional[BookingStatus] = Query(default=None, alias="status"),
    limit: Optional[int] = Query(default=None, ge=1),
    offset: int = Query(default=0, ge=0),
    identity: Identity = Depends(get_current_identity),
    session: AsyncSession = Depends(get_db_session),
    service: BookingService = Depends(get_booking_service),
):
    settings = get_settings()
    page = min(limit or settings.page_size_default, settings.page_size_max)
    async def _work():
        return await service.list_bookings(
            session,
            identity,
            owner_id,
            status=booking_status,
            limit=page,
            offset=offset,
        )

    items = await commit_or_raise(session, _work)
    now = service.clock()
    return BookingListResponse(
        owner_id=identity.user_id if owner_id is None else owner_id,
        items=[BookingResponse.from_booking(b, now) for b in items],
        limit=page,
        offset=offset,
    )


@router.get("/{booking_id}", response_model=BookingResponse)
async def get_booking(
    booking_id: int,
    identity: Identity = Depends(get_current_identity),
    session: AsyncSession = Depends(get_db_session),
    service: BookingService = Depends(get_booking_service),
):
    booking = await commit_or_raise(session, lambda: service.get_booking(session, booking_id, identity))
    return BookingResponse.from_booking(booking, service.clock())


@router.post("/{booking_id}/confirm-payment", response_model=BookingResponse)
async def confirm_booking_payment(
    booking_id: int,
    payload: Optional[ConfirmPaymentRequest] = None,
    identity: Identity = Depends(get_current_identity),
    session: AsyncSession = Depends(get_db_session),
    service: BookingService = Depends(get_booking_service),
):
    use_wallet = payload.use_money_wallet if payload else True
    booking = await commit_or_raise(
        session,
        lambda: service.confirm_payment(session, booking_id, identity, use_money_wallet=use_wallet),
    )
    return BookingResponse.from_booking(booking, service.clock())


@router.post("/{booking_id}/reject-payment", response_model=BookingResponse)
async def reject_booking_payment(
    booking_id: int,
    payload: Optional[RejectPaymentRequest] = None,
    identity: Identity = Depends(get_current_identity),
    session: AsyncSession = Depends(get_db_session),
    service: BookingService = Depends(get_booking_service),
):
    note = payload.note if payload else None
    booking = await commit_or_raise(
        session,
        lambda: service.reject_payment(session, booking_id, identity, note),
    )
    return BookingResponse.from_booking(booking, service.clock())


@router.post("/{booking_id}/cancel", response_model=BookingResponse)
async def cancel_booking(
    booking_id: int,
    identity: Identity = Depends(get_current_identity),
    session: AsyncSession = Depends(get_db_session),
    service: BookingService = Depends(get_booking_service),
):
    booking = await commit_or_raise(session, lambda: service.cancel(session, booking_id, identity))
    return BookingResponse.from_booking(booking, service.clock())


@router.post("/{booking_id}/start", response_model=BookingResponse)
async def start_booking_session(
    booking_id: int,
    identity: Identity = Depends(get_current_identity),
    session: AsyncSession = Depends(get_db_session),
    service: BookingService = Depends(get_booking_service),
):
    booking = await commit_or_raise(session, lambda: service.start_session(session, booking_id, identity))
    return BookingResponse.from_booking(booking, service.clock())


@router.post("/{booking_id}/complete", response_model=BookingResponse)
async def complete_booking_session(
    booking_id: int,
    identity: Identity = Depends(get_current_identity),
    session: AsyncSession = Depends(get_db_session),
    service: BookingService = Depends(get_booking_service),
):
    booking = await commit_or_raise(session, lambda: service.complete_session(session, booking_id, identity))
    return BookingResponse.from_booking(booking, service.clock())


@router.get("/{booking_id}/remaining", response_model=RemainingMinutesResponse)
async def get_booking_remaining_minutes(
    booking_id: int,
    identity: Identity = Depends(get_current_identity),
    session: AsyncSession = Depends(get_db_session),
    service: BookingService = Depends(get_booking_service),
):
    booking = await commit_or_raise(session, lambda: service.get_booking(session, booking_id, identity))
    left = remaining_minutes(booking, service.clock())
    return RemainingMinutesResponse(
        booking_id=booking.id,
        is_session_active=booking.is_session_active,
        remaining_minutes=round(left, 4) if left is not None else None,
    )


__all__ = ["router", "get_booking_service"]
# Fin del archivo warnet_ledger/modules/bookings/routes.py
