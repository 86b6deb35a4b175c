# -*- coding: utf-8 -*-
"""
warnet_ledger/modules/bookings/services.py

Máquina de estados de reservas: creación, pago, ventana de cancelación
y sesión activa.

Flujo de datos en un solo sentido:
- confirm_payment → MoneyWalletService.payment (débito) y, si es reserva
  de miembro, TimeWalletService.credit_minutes (duration_hours * 60).
- cancel → TimeWalletService.debit_minutes (reserva de miembro) y
  MoneyWalletService.refund_booking (neto cobrado, proporcional a los
  minutos recuperados).

Todo el cálculo temporal es perezoso sobre timestamps guardados: no hay
scheduler. Una sesión activa cuyo tiempo se agotó se marca completed la
próxima vez que se lee o se opera sobre la reserva.

Autor: WarnetLedger
Fecha: 2026-10-07
"""

from __future__ import annotations

import logging
from datetime import date, datetime, time, timedelta
from typing import Callable, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from warnet_ledger.core.settings import get_settings
from warnet_ledger.modules.accounts.repositories import VenueRepository
from warnet_ledger.modules.time_wallet.services import TimeWalletService
from warnet_ledger.modules.wallet.services import MoneyWalletService
from warnet_ledger.shared.auth_context import Identity, require_operator, require_owner_or_operator
from warnet_ledger.shared.config.settings_base import BaseAppSettings
from warnet_ledger.shared.errors import Conflict, Forbidden, InvalidState, NotFound, ValidationError
from warnet_ledger.shared.utils.time_utils import as_utc, minutes_between, now_utc

from .enums import (
    TERMINAL_STATUSES,
    BookingStatus,
    PaymentStatus,
    is_valid_status_transition,
)
from .models import Booking
from .repositories import BookingRepository

logger = logging.getLogger(__name__)


def remaining_minutes(booking: Booking, now: datetime) -> Optional[float]:
    """
    Minutos restantes de la sesión: max(0, duración − transcurrido).

    None si la sesión no está activa. Función pura de los timestamps.
    """
    if not booking.is_session_active or booking.session_start_time is None:
        return None
    elapsed = max(0.0, minutes_between(booking.session_start_time, now))
    return max(0.0, booking.duration_hours * 60 - elapsed)


def _transition(booking: Booking, to_status: BookingStatus) -> None:
    if not is_valid_status_transition(booking.status, to_status):
        raise InvalidState(
            f"Invalid booking transition: {booking.status.value} -> {to_status.value}",
            from_state=booking.status.value,
            to_state=to_status.value,
        )
    booking.status = to_status


class BookingService:
    """
    Servicio de reservas. Solo hace flush(); el commit lo hace la ruta.
    """

    def __init__(
        self,
        booking_repo: Optional[BookingRepository] = None,
        venue_repo: Optional[VenueRepository] = None,
        wallet_service: Optional[MoneyWalletService] = None,
        time_wallet_service: Optional[TimeWalletService] = None,
        settings: Optional[BaseAppSettings] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.clock = clock or now_utc
        self.settings = settings or get_settings()
        self.booking_repo = booking_repo or BookingRepository()
        self.venue_repo = venue_repo or VenueRepository()
        self.wallet_service = wallet_service or MoneyWalletService(clock=self.clock)
        self.time_wallet_service = time_wallet_service or TimeWalletService(
            venue_repo=self.venue_repo,
            clock=self.clock,
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _get_for_update(self, session: AsyncSession, booking_id: int) -> Booking:
        """Obtiene una reserva para actualización con bloqueo pesimista."""
        booking = await self.booking_repo.get(session, booking_id, for_update=True)
        if booking is None:
            raise NotFound("booking", booking_id)
        return booking

    def _touch(self, booking: Booking, now: datetime) -> None:
        booking.updated_at = now

    def _expire_if_elapsed(self, booking: Booking, now: datetime) -> bool:
        """
        Completa una sesión activa cuyo tiempo se agotó.

        Returns:
            True si la reserva cambió a completed.
        """
        left = remaining_minutes(booking, now)
        if left is None or left > 0:
            return False
        start = as_utc(booking.session_start_time)
        _transition(booking, BookingStatus.COMPLETED)
        booking.is_session_active = False
        booking.session_end_time = start + timedelta(hours=booking.duration_hours)
        self._touch(booking, now)
        logger.info("Booking session expired: booking=%s", booking.id)
        return True

    async def minimum_hours_for(
        self,
        session: AsyncSession,
        owner_id: int,
        venue_id: int,
        is_member: bool,
    ) -> int:
        """
        Duración mínima de una reserva.

        La primera reserva de un miembro en una sede (aún sin wallet de
        minutos para ese par) exige FIRST_MEMBER_BOOKING_MIN_HOURS.
        """
        if is_member and not await self.time_wallet_service.has_wallet(session, owner_id, venue_id):
            return self.settings.first_member_booking_min_hours
        return self.settings.min_booking_hours

    # ------------------------------------------------------------------
    # Operaciones
    # ------------------------------------------------------------------

    async def create(
        self,
        session: AsyncSession,
        requester: Identity,
        *,
        venue_id: int,
        resource_number: int,
        booking_date: date,
        booking_time: time,
        duration_hours: int,
        is_member: Optional[bool] = None,
    ) -> Booking:
        """
        Crea una reserva pending/pending con precio según membresía.

        Raises:
            ValidationError: duración bajo el mínimo o estación inválida
            NotFound: la sede no existe
        """
        is_member = requester.is_member if is_member is None else is_member

        if isinstance(duration_hours, bool) or not isinstance(duration_hours, int):
            raise ValidationError("duration_hours must be an integer", field="duration_hours")
        if isinstance(resource_number, bool) or not isinstance(resource_number, int) or resource_number < 1:
            raise ValidationError("resource_number must be a positive integer", field="resource_number")

        venue = await self.venue_repo.get(session, venue_id)
        if venue is None:
            raise NotFound("venue", venue_id)

        minimum = await self.minimum_hours_for(session, requester.user_id, venue_id, is_member)
        if duration_hours < minimum:
            logger.warning(
                "Booking rejected: duration=%s below minimum=%s (owner=%s venue=%s member=%s)",
                duration_hours, minimum, requester.user_id, venue_id, is_member,
            )
            raise ValidationError(
                f"Minimum booking duration is {minimum} hour(s)",
                field="duration_hours",
                minimum=minimum,
            )

        rate = venue.rate(is_member)
        now = self.clock()
        booking = Booking(
            owner_id=requester.user_id,
            venue_id=venue_id,
            resource_number=resource_number,
            booking_date=booking_date,
            booking_time=booking_time,
            duration_hours=duration_hours,
            status=BookingStatus.PENDING,
            payment_status=PaymentStatus.PENDING,
            is_session_active=False,
            price_per_hour=rate,
            total_price=rate * duration_hours,
            is_member_booking=is_member,
            paid_with_wallet=False,
            created_at=now,
            updated_at=now,
        )
        await self.booking_repo.add(session, booking)
        logger.info(
            "Booking created: booking=%s owner=%s venue=%s hours=%s total=%s member=%s",
            booking.id, booking.owner_id, venue_id, duration_hours, booking.total_price, is_member,
        )
        return booking

    async def confirm_payment(
        self,
        session: AsyncSession,
        booking_id: int,
        requester: Identity,
        *,
        use_money_wallet: bool = True,
    ) -> Booking:
        """
        Confirma el pago y abre la ventana de cancelación.

        - use_money_wallet=True: el dueño paga con su saldo (débito atómico).
        - use_money_wallet=False: un operador registra un pago externo.
        Las reservas de miembro acreditan duration_hours*60 minutos al
        wallet de minutos de la sede.

        Raises:
            Forbidden, InvalidState (ya pagada o terminal), InsufficientBalance
        """
        booking = await self._get_for_update(session, booking_id)

        if use_money_wallet:
            if not requester.owns(booking.owner_id):
                raise Forbidden(f"User {requester.user_id} cannot pay booking {booking_id}")
        else:
            require_operator(requester, "record external booking payments")

        if booking.status in TERMINAL_STATUSES or booking.payment_status != PaymentStatus.PENDING:
            raise InvalidState(
                f"Booking {booking_id} is not awaiting payment",
                from_state=f"{booking.status.value}/{booking.payment_status.value}",
                to_state="paid",
            )

        if use_money_wallet and booking.total_price > 0:
            await self.wallet_service.payment(
                session,
                booking.owner_id,
                booking.id,
                booking.total_price,
            )

        now = self.clock()
        booking.payment_status = PaymentStatus.PAID
        booking.paid_with_wallet = use_money_wallet and booking.total_price > 0
        booking.paid_at = now
        booking.can_cancel_until = now + timedelta(seconds=self.settings.cancel_window_seconds)
        self._touch(booking, now)

        if booking.is_member_booking:
            await self.time_wallet_service.credit_minutes(
                session,
                booking.owner_id,
                booking.venue_id,
                booking.duration_hours * 60,
            )

        await session.flush()
        logger.info(
            "Booking paid: booking=%s owner=%s total=%s wallet=%s member=%s",
            booking.id, booking.owner_id, booking.total_price, booking.paid_with_wallet, booking.is_member_booking,
        )
        return booking

    async def reject_payment(
        self,
        session: AsyncSession,
        booking_id: int,
        operator: Identity,
        note: Optional[str] = None,
    ) -> Booking:
        """El operador rechaza un pago pendiente: payment=rejected, status=cancelled."""
        require_operator(operator, "reject booking payments")
        booking = await self._get_for_update(session, booking_id)

        if booking.payment_status != PaymentStatus.PENDING:
            raise InvalidState(
                f"Booking {booking_id} payment already processed",
                from_state=booking.payment_status.value,
                to_state=PaymentStatus.REJECTED.value,
            )
        _transition(booking, BookingStatus.CANCELLED)
        booking.payment_status = PaymentStatus.REJECTED
        booking.status_note = (note or "").strip() or None
        self._touch(booking, self.clock())
        await session.flush()
        logger.info("Booking payment rejected: booking=%s operator=%s", booking_id, operator.user_id)
        return booking

    async def cancel(
        self,
        session: AsyncSession,
        booking_id: int,
        requester: Identity,
    ) -> Booking:
        """
        Cancela dentro de la ventana (now < can_cancel_until) una reserva pending.

        Si se cobró del wallet, reembolsa el neto cobrado con el mismo
        related_booking_id. En reservas de miembro retira antes los minutos
        acreditados; si parte ya se consumió, el reembolso es proporcional
        a lo recuperado.

        Raises:
            Forbidden: el solicitante no es el dueño
            Conflict: fuera de ventana, sin pagar o estado distinto de pending
        """
        booking = await self._get_for_update(session, booking_id)
        if not requester.owns(booking.owner_id):
            raise Forbidden(f"User {requester.user_id} cannot cancel booking {booking_id}")

        now = self.clock()
        if booking.status != BookingStatus.PENDING:
            raise InvalidState(
                f"Booking {booking_id} cannot be cancelled in status {booking.status.value}",
                from_state=booking.status.value,
                to_state=BookingStatus.CANCELLED.value,
            )

        deadline = as_utc(booking.can_cancel_until)
        if deadline is None or not now < deadline:
            logger.warning(
                "Cancel rejected (window closed): booking=%s deadline=%s now=%s",
                booking_id, deadline, now,
            )
            raise Conflict(
                "Cancellation window has closed",
                booking_id=booking_id,
                can_cancel_until=deadline.isoformat() if deadline else None,
            )

        _transition(booking, BookingStatus.CANCELLED)
        self._touch(booking, now)

        # Los minutos acreditados por el pago se retiran; el reembolso cubre
        # solo la parte que pudo recuperarse.
        max_refund = None
        reclaimed = None
        if booking.is_member_booking:
            credited = booking.duration_hours * 60
            reclaimed = await self.time_wallet_service.debit_minutes(
                session,
                booking.owner_id,
                booking.venue_id,
                credited,
            )
            max_refund = int(booking.total_price * (reclaimed / credited))

        refund = None
        if booking.paid_with_wallet:
            refund = await self.wallet_service.refund_booking(
                session,
                booking.owner_id,
                booking.id,
                max_amount=max_refund,
            )

        await session.flush()
        logger.info(
            "Booking cancelled: booking=%s owner=%s refund_tx=%s reclaimed_minutes=%s",
            booking_id, booking.owner_id, refund.id if refund else None, reclaimed,
        )
        return booking

    async def start_session(
        self,
        session: AsyncSession,
        booking_id: int,
        requester: Identity,
    ) -> Booking:
        """
        Inicia la sesión. No-op si ya está activa.

        Raises:
            InvalidState: sin pagar o en estado terminal
        """
        booking = await self._get_for_update(session, booking_id)
        require_owner_or_operator(requester, booking.owner_id, "booking")

        now = self.clock()
        if self._expire_if_elapsed(booking, now):
            await session.flush()

        if booking.is_session_active:
            return booking

        if booking.status not in (BookingStatus.PENDING, BookingStatus.ACTIVE) \
                or booking.payment_status != PaymentStatus.PAID:
            raise InvalidState(
                f"Booking {booking_id} cannot start a session "
                f"({booking.status.value}/{booking.payment_status.value})",
                from_state=booking.status.value,
                to_state=BookingStatus.ACTIVE.value,
            )

        if booking.status == BookingStatus.PENDING:
            _transition(booking, BookingStatus.ACTIVE)
        booking.session_start_time = now
        booking.is_session_active = True
        self._touch(booking, now)
        await session.flush()
        logger.info("Booking session started: booking=%s", booking_id)
        return booking

    async def complete_session(
        self,
        session: AsyncSession,
        booking_id: int,
        requester: Identity,
    ) -> Booking:
        """Finaliza manualmente una sesión activa."""
        booking = await self._get_for_update(session, booking_id)
        require_owner_or_operator(requester, booking.owner_id, "booking")

        now = self.clock()
        if self._expire_if_elapsed(booking, now):
            await session.flush()
            return booking

        if booking.status != BookingStatus.ACTIVE:
            raise InvalidState(
                f"Booking {booking_id} has no active session",
                from_state=booking.status.value,
                to_state=BookingStatus.COMPLETED.value,
            )
        _transition(booking, BookingStatus.COMPLETED)
        booking.is_session_active = False
        booking.session_end_time = now
        self._touch(booking, now)
        await session.flush()
        logger.info("Booking session completed: booking=%s", booking_id)
        return booking

    # ------------------------------------------------------------------
    # Consultas
    # ------------------------------------------------------------------

    async def get_booking(
        self,
        session: AsyncSession,
        booking_id: int,
        requester: Identity,
    ) -> Booking:
        """Lee una reserva aplicando la expiración perezosa de la sesión."""
        booking = await self._get_for_update(session, booking_id)
        require_owner_or_operator(requester, booking.owner_id, "booking")
        if self._expire_if_elapsed(booking, self.clock()):
            await session.flush()
        return booking

    async def list_bookings(
        self,
        session: AsyncSession,
        requester: Identity,
        owner_id: Optional[int] = None,
        *,
        status: Optional[BookingStatus] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> List[Booking]:
        """
        Lista reservas de un dueño aplicando la misma expiración perezosa
        que get_booking. Una sesión que expira en esta lectura deja de
        coincidir con un filtro status=active y se omite.
        """
        target = requester.user_id if owner_id is None else owner_id
        require_owner_or_operator(requester, target, "bookings")
        items = await self.booking_repo.list_by_owner(
            session,
            target,
            status=status,
            limit=limit,
            offset=offset,
        )
        now = self.clock()
        expired = [b for b in items if self._expire_if_elapsed(b, now)]
        if expired:
            await session.flush()
        if status is not None:
            items = [b for b in items if b.status == status]
        return items


__all__ = ["BookingService", "remaining_minutes"]
# Fin del archivo warnet_ledger/modules/bookings/services.py
