# -*- coding: utf-8 -*-
"""
warnet_ledger/modules/operator/aggregators.py

Agregadores desde BD para el panel del operador de una sede.

- Resumen de reservas en un rango [start, end) de created_at: total,
  pagadas e ingresos (Σ total_price de las pagadas).
- Conteos puntuales: reservas activas, miembros (wallets de minutos).
- Filas de miembros con su wallet de minutos y saldo monetario.

Funciones ORM genéricas (SQLite/Postgres): sin FILTER ni date_trunc.

Autor: WarnetLedger
Fecha: 2026-10-19
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Tuple

from sqlalchemy import case, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from warnet_ledger.modules.accounts.models import Account
from warnet_ledger.modules.bookings.enums import BookingStatus, PaymentStatus
from warnet_ledger.modules.bookings.models import Booking
from warnet_ledger.modules.time_wallet.models import TimeWallet


@dataclass(frozen=True)
class BookingSummary:
    total: int
    paid: int
    revenue: int


class VenueStatsAggregator:
    """
    Agregador de métricas por sede.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def bookings_summary(self, venue_id: int, start: datetime, end: datetime) -> BookingSummary:
        is_paid = Booking.payment_status == PaymentStatus.PAID
        stmt = select(
            func.count(Booking.id),
            func.coalesce(func.sum(case((is_paid, 1), else_=0)), 0),
            func.coalesce(func.sum(case((is_paid, Booking.total_price), else_=0)), 0),
        ).where(
            Booking.venue_id == venue_id,
            Booking.created_at >= start,
            Booking.created_at < end,
        )
        total, paid, revenue = (await self.db.execute(stmt)).one()
        return BookingSummary(total=int(total or 0), paid=int(paid or 0), revenue=int(revenue or 0))

    async def count_bookings(
        self,
        venue_id: int,
        *,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        status: Optional[BookingStatus] = None,
    ) -> int:
        stmt = select(func.count(Booking.id)).where(Booking.venue_id == venue_id)
        if start is not None:
            stmt = stmt.where(Booking.created_at >= start)
        if end is not None:
            stmt = stmt.where(Booking.created_at < end)
        if status is not None:
            stmt = stmt.where(Booking.status == status)
        return int((await self.db.execute(stmt)).scalar_one() or 0)

    async def member_count(self, venue_id: int) -> int:
        stmt = select(func.count(TimeWallet.id)).where(TimeWallet.venue_id == venue_id)
        return int((await self.db.execute(stmt)).scalar_one() or 0)

    async def member_rows(self, venue_id: int) -> List[Tuple[TimeWallet, int]]:
        """(wallet de minutos, saldo monetario) por miembro, ordenado por owner_id."""
        stmt = (
            select(TimeWallet, func.coalesce(Account.money_balance, 0))
            .outerjoin(Account, Account.user_id == TimeWallet.owner_id)
            .where(TimeWallet.venue_id == venue_id)
            .order_by(TimeWallet.owner_id.asc())
        )
        rows = (await self.db.execute(stmt)).all()
        return [(wallet, int(balance)) for wallet, balance in rows]


__all__ = ["VenueStatsAggregator", "BookingSummary"]
# Fin del archivo warnet_ledger/modules/operator/aggregators.py
