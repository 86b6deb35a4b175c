# -*- coding: utf-8 -*-
"""
warnet_ledger/modules/wallet/repositories.py

Repositorio del ledger monetario.

Autor: WarnetLedger
Fecha: 2026-10-05
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from .enums import TransactionKind, TransactionStatus
from .models import MoneyTransaction

logger = logging.getLogger(__name__)


class MoneyTransactionRepository:
    """Repositorio para operaciones sobre MoneyTransaction (ledger)."""

    async def create(
        self,
        session: AsyncSession,
        *,
        owner_id: int,
        kind: TransactionKind,
        amount: int,
        status: TransactionStatus,
        related_booking_id: Optional[int] = None,
        proof_image: Optional[str] = None,
        sender_name: Optional[str] = None,
        description: Optional[str] = None,
    ) -> MoneyTransaction:
        """
        Inserta una fila en el ledger.

        Validaciones:
        - amount != 0
        - solo topup puede nacer pending
        """
        if amount == 0:
            raise ValueError("amount cannot be zero")
        if status == TransactionStatus.PENDING and kind != TransactionKind.TOPUP:
            raise ValueError("only topup transactions may be pending")

        tx = MoneyTransaction(
            owner_id=owner_id,
            kind=kind,
            amount=amount,
            status=status,
            related_booking_id=related_booking_id,
            proof_image=proof_image,
            sender_name=sender_name,
            description=description,
        )
        session.add(tx)
        await session.flush()

        logger.debug(
            "MoneyTransaction created: id=%s owner=%s kind=%s amount=%+d status=%s",
            tx.id, owner_id, kind.value, amount, status.value,
        )
        return tx

    async def get(
        self,
        session: AsyncSession,
        tx_id: int,
        *,
        refresh: bool = False,
    ) -> Optional[MoneyTransaction]:
        stmt = select(MoneyTransaction).where(MoneyTransaction.id == tx_id)
        if refresh:
            stmt = stmt.execution_options(populate_existing=True)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def transition_pending_topup(
        self,
        session: AsyncSession,
        tx_id: int,
        *,
        to_status: TransactionStatus,
        operator_id: int,
        at: datetime,
        rejection_note: Optional[str] = None,
    ) -> bool:
        """
        Cambia una recarga PENDING a `to_status` en una sola sentencia.

        El WHERE incluye status='pending' y kind='topup': si otro request ya
        la procesó, rowcount es 0 y el llamador decide NotFound vs Conflict.
        """
        values = {
            "status": to_status,
            "approved_by": operator_id,
            "approved_at": at,
        }
        if rejection_note is not None:
            values["rejection_note"] = rejection_note

        stmt = (
            update(MoneyTransaction)
            .where(
                MoneyTransaction.id == tx_id,
                MoneyTransaction.status == TransactionStatus.PENDING,
                MoneyTransaction.kind == TransactionKind.TOPUP,
            )
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        result = await session.execute(stmt)
        return result.rowcount == 1

    async def list_by_owner(
        self,
        session: AsyncSession,
        owner_id: int,
        *,
        kind: Optional[TransactionKind] = None,
        status: Optional[TransactionStatus] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> List[MoneyTransaction]:
        """Lista transacciones del dueño, más recientes primero."""
        stmt = select(MoneyTransaction).where(MoneyTransaction.owner_id == owner_id)
        if kind is not None:
            stmt = stmt.where(MoneyTransaction.kind == kind)
        if status is not None:
            stmt = stmt.where(MoneyTransaction.status == status)
        stmt = (
            stmt.order_by(MoneyTransaction.created_at.desc(), MoneyTransaction.id.desc())
            .limit(limit)
            .offset(offset)
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())

    async def list_pending_topups(
        self,
        session: AsyncSession,
        *,
        limit: int = 20,
        offset: int = 0,
    ) -> List[MoneyTransaction]:
        """Cola de recargas pendientes, más antiguas primero (FIFO para el operador)."""
        stmt = (
            select(MoneyTransaction)
            .where(
                MoneyTransaction.kind == TransactionKind.TOPUP,
                MoneyTransaction.status == TransactionStatus.PENDING,
            )
            .order_by(MoneyTransaction.created_at.asc(), MoneyTransaction.id.asc())
            .limit(limit)
            .offset(offset)
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())

    async def count_pending_topups(self, session: AsyncSession) -> int:
        stmt = select(func.count(MoneyTransaction.id)).where(
            MoneyTransaction.kind == TransactionKind.TOPUP,
            MoneyTransaction.status == TransactionStatus.PENDING,
        )
        result = await session.execute(stmt)
        return int(result.scalar_one())

    async def sum_completed(self, session: AsyncSession, owner_id: int) -> int:
        """Saldo según el ledger: Σ amount de las filas COMPLETED."""
        stmt = select(func.coalesce(func.sum(MoneyTransaction.amount), 0)).where(
            MoneyTransaction.owner_id == owner_id,
            MoneyTransaction.status == TransactionStatus.COMPLETED,
        )
        result = await session.execute(stmt)
        return int(result.scalar_one())

    async def net_debited_for_booking(
        self,
        session: AsyncSession,
        owner_id: int,
        booking_id: int,
    ) -> int:
        """
        Monto neto cobrado por una reserva (pagos menos reembolsos), positivo
        si queda dinero por devolver.
        """
        stmt = select(func.coalesce(func.sum(MoneyTransaction.amount), 0)).where(
            MoneyTransaction.owner_id == owner_id,
            MoneyTransaction.related_booking_id == booking_id,
            MoneyTransaction.status == TransactionStatus.COMPLETED,
            MoneyTransaction.kind.in_([TransactionKind.PAYMENT, TransactionKind.REFUND]),
        )
        result = await session.execute(stmt)
        return -int(result.scalar_one())


__all__ = ["MoneyTransactionRepository"]
# Fin del archivo warnet_ledger/modules/wallet/repositories.py
