# -*- coding: utf-8 -*-
"""
warnet_ledger/modules/accounts/repositories.py

Repositorios de cuentas y sedes.

Las mutaciones de saldo son UPDATE condicionales de una sola sentencia
(lectura-chequeo-escritura atómica en PostgreSQL y SQLite).

Autor: WarnetLedger
Fecha: 2026-10-04
"""

from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from warnet_ledger.shared.utils.time_utils import now_utc
from .models import Account, Venue

logger = logging.getLogger(__name__)


class AccountRepository:
    """Repositorio para el saldo monetario materializado."""

    async def get(
        self,
        session: AsyncSession,
        user_id: int,
        *,
        for_update: bool = False,
        refresh: bool = False,
    ) -> Optional[Account]:
        stmt = select(Account).where(Account.user_id == user_id)
        if for_update:
            stmt = stmt.with_for_update()
        if refresh:
            stmt = stmt.execution_options(populate_existing=True)

        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_or_create(
        self,
        session: AsyncSession,
        user_id: int,
    ) -> tuple[Account, bool]:
        """
        Obtiene o crea la cuenta del usuario.

        Usa SAVEPOINT para manejar concurrencia sin invalidar
        la transacción principal del request.

        Returns:
            Tuple (account, created: bool)
        """
        account = await self.get(session, user_id)
        if account:
            return account, False

        try:
            async with session.begin_nested():
                account = Account(user_id=user_id, money_balance=0)
                session.add(account)
                await session.flush()
            logger.info("Account created for user %s", user_id)
            return account, True
        except IntegrityError:
            # SAVEPOINT ya hizo rollback; otro request creó la cuenta
            logger.debug("Account already exists for user %s (concurrent create)", user_id)

        account = await self.get(session, user_id)
        if account:
            return account, False

        raise RuntimeError(f"Failed to get or create account for user {user_id}")

    async def credit(self, session: AsyncSession, user_id: int, amount: int) -> int:
        """
        Suma `amount` al saldo de forma atómica.

        Returns:
            Número de filas afectadas (0 si la cuenta no existe).
        """
        stmt = (
            update(Account)
            .where(Account.user_id == user_id)
            .values(money_balance=Account.money_balance + amount, updated_at=now_utc())
            .execution_options(synchronize_session=False)
        )
        result = await session.execute(stmt)
        return result.rowcount

    async def debit_if_sufficient(self, session: AsyncSession, user_id: int, amount: int) -> bool:
        """
        Resta `amount` solo si el saldo alcanza, en una única sentencia.

        Dos débitos concurrentes contra el mismo saldo se serializan en el
        lock de fila; el segundo re-evalúa la condición sobre el valor ya
        confirmado, de modo que nunca se sobregira.
        """
        stmt = (
            update(Account)
            .where(Account.user_id == user_id, Account.money_balance >= amount)
            .values(money_balance=Account.money_balance - amount, updated_at=now_utc())
            .execution_options(synchronize_session=False)
        )
        result = await session.execute(stmt)
        return result.rowcount == 1

    async def get_balance(self, session: AsyncSession, user_id: int) -> int:
        account = await self.get(session, user_id, refresh=True)
        return account.money_balance if account else 0


class VenueRepository:
    """Lookup de sedes y precios."""

    async def get(self, session: AsyncSession, venue_id: int) -> Optional[Venue]:
        return await session.get(Venue, venue_id)

    async def create(
        self,
        session: AsyncSession,
        *,
        name: str,
        regular_price_per_hour: int,
        member_price_per_hour: int,
    ) -> Venue:
        venue = Venue(
            name=name,
            regular_price_per_hour=regular_price_per_hour,
            member_price_per_hour=member_price_per_hour,
        )
        session.add(venue)
        await session.flush()
        logger.info("Venue created: id=%s name=%s", venue.id, name)
        return venue


__all__ = ["AccountRepository", "VenueRepository"]
# Fin del archivo warnet_ledger/modules/accounts/repositories.py
