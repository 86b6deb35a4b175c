# -*- coding: utf-8 -*-
"""
warnet_ledger/modules/operator/services.py

Consultas del panel del operador por sede: miembros con su wallet de
minutos y estadísticas de reservas/recargas.

Solo lectura: no hace flush ni commit.

Autor: WarnetLedger
Fecha: 2026-10-19
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone
from typing import Callable, List, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from warnet_ledger.modules.accounts.models import Venue
from warnet_ledger.modules.accounts.repositories import VenueRepository
from warnet_ledger.modules.bookings.enums import BookingStatus
from warnet_ledger.modules.time_wallet.models import TimeWallet
from warnet_ledger.modules.wallet.repositories import MoneyTransactionRepository
from warnet_ledger.shared.auth_context import Identity, require_operator
from warnet_ledger.shared.errors import NotFound, ValidationError
from warnet_ledger.shared.utils.time_utils import now_utc

from .aggregators import VenueStatsAggregator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VenueStatistics:
    venue_id: int
    start_date: date
    end_date: date
    revenue: int
    total_bookings: int
    paid_bookings: int
    today_bookings: int
    active_bookings: int
    member_count: int
    pending_topups: int


def _day_start(day: date) -> datetime:
    return datetime.combine(day, time.min, tzinfo=timezone.utc)


class OperatorReportService:
    """
    Servicio de reportes por sede, restringido a operadores.
    """

    def __init__(
        self,
        venue_repo: Optional[VenueRepository] = None,
        tx_repo: Optional[MoneyTransactionRepository] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.venue_repo = venue_repo or VenueRepository()
        self.tx_repo = tx_repo or MoneyTransactionRepository()
        self.clock = clock or now_utc

    async def _get_venue(self, session: AsyncSession, venue_id: int) -> Venue:
        venue = await self.venue_repo.get(session, venue_id)
        if venue is None:
            raise NotFound("venue", venue_id)
        return venue

    async def venue_members(
        self,
        session: AsyncSession,
        venue_id: int,
        operator: Identity,
    ) -> Tuple[Venue, List[Tuple[TimeWallet, int]]]:
        """Miembros de la sede: quienes tienen wallet de minutos en ella."""
        require_operator(operator, "list venue members")
        venue = await self._get_venue(session, venue_id)
        rows = await VenueStatsAggregator(session).member_rows(venue_id)
        return venue, rows

    async def venue_statistics(
        self,
        session: AsyncSession,
        venue_id: int,
        operator: Identity,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> VenueStatistics:
        """
        Estadísticas de la sede.

        El rango [start_date, end_date] (ambos inclusive, UTC) filtra por
        created_at de la reserva y por defecto es el día de hoy. Ingresos y
        conteos total/pagadas salen de ese rango; reservas activas y
        miembros son el estado actual; las recargas pendientes son globales
        porque una recarga no pertenece a ninguna sede.

        Raises:
            Forbidden: el solicitante no es operador
            NotFound: la sede no existe
            ValidationError: end_date anterior a start_date
        """
        require_operator(operator, "view venue statistics")
        await self._get_venue(session, venue_id)

        today = self.clock().astimezone(timezone.utc).date()
        start_date = start_date or today
        end_date = end_date or max(start_date, today)
        if end_date < start_date:
            raise ValidationError(
                "end_date must not be before start_date",
                field="end_date",
                start_date=start_date.isoformat(),
                end_date=end_date.isoformat(),
            )

        agg = VenueStatsAggregator(session)
        summary = await agg.bookings_summary(
            venue_id,
            _day_start(start_date),
            _day_start(end_date + timedelta(days=1)),
        )
        stats = VenueStatistics(
            venue_id=venue_id,
            start_date=start_date,
            end_date=end_date,
            revenue=summary.revenue,
            total_bookings=summary.total,
            paid_bookings=summary.paid,
            today_bookings=await agg.count_bookings(
                venue_id,
                start=_day_start(today),
                end=_day_start(today + timedelta(days=1)),
            ),
            active_bookings=await agg.count_bookings(venue_id, status=BookingStatus.ACTIVE),
            member_count=await agg.member_count(venue_id),
            pending_topups=await self.tx_repo.count_pending_topups(session),
        )
        logger.debug(
            "Venue statistics: venue=%s range=%s..%s revenue=%s bookings=%s",
            venue_id, start_date, end_date, stats.revenue, stats.total_bookings,
        )
        return stats


__all__ = ["OperatorReportService", "VenueStatistics"]
# Fin del archivo warnet_ledger/modules/operator/services.py
