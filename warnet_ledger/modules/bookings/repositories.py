# -*- coding: utf-8 -*-
"""
warnet_ledger/modules/bookings/repositories.py

Repositorio de reservas.

Autor: WarnetLedger
Fecha: 2026-10-07
"""

from __future__ import annotations

import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from .enums import BookingStatus
from .models import Booking

logger = logging.getLogger(__name__)


class BookingRepository:

    async def get(
        self,
        session: AsyncSession,
        booking_id: int,
        *,
        for_update: bool = False,
    ) -> Optional[Booking]:
        stmt = select(Booking).where(Booking.id == booking_id)
        if for_update:
            stmt = stmt.with_for_update().execution_options(populate_existing=True)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def add(self, session: AsyncSession, booking: Booking) -> Booking:
        session.add(booking)
        await session.flush()
        logger.debug("Booking created: %r", booking)
        return booking

    async def list_by_owner(
        self,
        session: AsyncSession,
        owner_id: int,
        *,
        status: Optional[BookingStatus] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> List[Booking]:
        stmt = select(Booking).where(Booking.owner_id == owner_id)
        if status is not None:
            stmt = stmt.where(Booking.status == status)
        stmt = stmt.order_by(Booking.created_at.desc(), Booking.id.desc()).limit(limit).offset(offset)
        result = await session.execute(stmt)
        return list(result.scalars().all())


__all__ = ["BookingRepository"]
# Fin del archivo warnet_ledger/modules/bookings/repositories.py
