# -*- coding: utf-8 -*-
"""
warnet_ledger/modules/time_wallet/repositories.py

Repositorio de wallets de minutos.

Autor: WarnetLedger
Fecha: 2026-10-06
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from .models import TimeWallet

logger = logging.getLogger(__name__)


class TimeWalletRepository:

    async def get(
        self,
        session: AsyncSession,
        wallet_id: int,
        *,
        for_update: bool = False,
    ) -> Optional[TimeWallet]:
        stmt = select(TimeWallet).where(TimeWallet.id == wallet_id)
        if for_update:
            stmt = stmt.with_for_update().execution_options(populate_existing=True)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_owner_venue(
        self,
        session: AsyncSession,
        owner_id: int,
        venue_id: int,
        *,
        for_update: bool = False,
    ) -> Optional[TimeWallet]:
        stmt = select(TimeWallet).where(
            TimeWallet.owner_id == owner_id,
            TimeWallet.venue_id == venue_id,
        )
        if for_update:
            stmt = stmt.with_for_update().execution_options(populate_existing=True)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_or_create(
        self,
        session: AsyncSession,
        owner_id: int,
        venue_id: int,
        *,
        initial_minutes: float,
        at: datetime,
    ) -> tuple[TimeWallet, bool]:
        """
        Obtiene (con lock) o crea el wallet de (owner, venue).

        El alta concurrente se resuelve con el UNIQUE(owner_id, venue_id)
        dentro de un SAVEPOINT; el perdedor relee la fila ganadora.

        Returns:
            Tuple (wallet, created: bool)
        """
        wallet = await self.get_by_owner_venue(session, owner_id, venue_id, for_update=True)
        if wallet:
            return wallet, False

        try:
            async with session.begin_nested():
                wallet = TimeWallet(
                    owner_id=owner_id,
                    venue_id=venue_id,
                    remaining_minutes=initial_minutes,
                    is_active=False,
                    last_updated=at,
                )
                session.add(wallet)
                await session.flush()
            logger.info("TimeWallet created: owner=%s venue=%s minutes=%.2f", owner_id, venue_id, initial_minutes)
            return wallet, True
        except IntegrityError:
            logger.debug("TimeWallet already exists for owner=%s venue=%s (concurrent create)", owner_id, venue_id)

        wallet = await self.get_by_owner_venue(session, owner_id, venue_id, for_update=True)
        if wallet:
            return wallet, False

        raise RuntimeError(f"Failed to get or create time wallet for owner={owner_id} venue={venue_id}")

    async def exists(self, session: AsyncSession, owner_id: int, venue_id: int) -> bool:
        stmt = select(TimeWallet.id).where(
            TimeWallet.owner_id == owner_id,
            TimeWallet.venue_id == venue_id,
        )
        result = await session.execute(stmt)
        return result.first() is not None

    async def list_by_owner(self, session: AsyncSession, owner_id: int) -> List[TimeWallet]:
        stmt = (
            select(TimeWallet)
            .where(TimeWallet.owner_id == owner_id)
            .order_by(TimeWallet.venue_id.asc())
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())


__all__ = ["TimeWalletRepository"]
# Fin del archivo warnet_ledger/modules/time_wallet/repositories.py
