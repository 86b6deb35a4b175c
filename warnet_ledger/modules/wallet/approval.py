# -*- coding: utf-8 -*-
"""
warnet_ledger/modules/wallet/approval.py

Flujo de aprobación de recargas (solo operadores).

approve y reject comparten precondición: la transacción debe ser una
recarga PENDING. La transición se hace con un UPDATE condicional, así dos
aprobaciones concurrentes de la misma recarga producen un solo crédito:
la segunda observa el estado ya confirmado y falla con Conflict.

Autor: WarnetLedger
Fecha: 2026-10-05
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from warnet_ledger.modules.accounts.repositories import AccountRepository
from warnet_ledger.shared.auth_context import Identity, require_operator
from warnet_ledger.shared.errors import Conflict, NotFound
from warnet_ledger.shared.utils.time_utils import now_utc

from .enums import TransactionStatus
from .models import MoneyTransaction
from .repositories import MoneyTransactionRepository

logger = logging.getLogger(__name__)


class TopupApprovalService:

    def __init__(
        self,
        account_repo: Optional[AccountRepository] = None,
        tx_repo: Optional[MoneyTransactionRepository] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.account_repo = account_repo or AccountRepository()
        self.tx_repo = tx_repo or MoneyTransactionRepository()
        self.clock = clock or now_utc

    async def _already_processed(self, session: AsyncSession, tx_id: int) -> Exception:
        tx = await self.tx_repo.get(session, tx_id, refresh=True)
        if tx is None:
            return NotFound("transaction", tx_id)
        logger.warning(
            "Topup already processed: tx=%s kind=%s status=%s",
            tx_id, tx.kind.value, tx.status.value,
        )
        return Conflict(
            "Transaction already processed",
            transaction_id=tx_id,
            status=tx.status.value,
            kind=tx.kind.value,
        )

    async def approve(
        self,
        session: AsyncSession,
        tx_id: int,
        operator: Identity,
    ) -> MoneyTransaction:
        """
        Aprueba una recarga pendiente y acredita el saldo del dueño.

        Raises:
            Forbidden: el llamador no es operador
            NotFound: la transacción no existe
            Conflict: la transacción no es una recarga pendiente
        """
        require_operator(operator, "approve top-ups")

        moved = await self.tx_repo.transition_pending_topup(
            session,
            tx_id,
            to_status=TransactionStatus.COMPLETED,
            operator_id=operator.user_id,
            at=self.clock(),
        )
        if not moved:
            raise await self._already_processed(session, tx_id)

        tx = await self.tx_repo.get(session, tx_id, refresh=True)
        await self.account_repo.get_or_create(session, tx.owner_id)
        await self.account_repo.credit(session, tx.owner_id, tx.amount)

        logger.info(
            "Topup approved: tx=%s owner=%s amount=%d operator=%s",
            tx.id, tx.owner_id, tx.amount, operator.user_id,
        )
        return tx

    async def reject(
        self,
        session: AsyncSession,
        tx_id: int,
        operator: Identity,
        note: Optional[str] = None,
    ) -> MoneyTransaction:
        """Rechaza una recarga pendiente (status=failed). El saldo no cambia."""
        require_operator(operator, "reject top-ups")

        moved = await self.tx_repo.transition_pending_topup(
            session,
            tx_id,
            to_status=TransactionStatus.FAILED,
            operator_id=operator.user_id,
            at=self.clock(),
            rejection_note=(note or "").strip() or "Rejected by operator",
        )
        if not moved:
            raise await self._already_processed(session, tx_id)

        tx = await self.tx_repo.get(session, tx_id, refresh=True)
        logger.info("Topup rejected: tx=%s owner=%s operator=%s", tx.id, tx.owner_id, operator.user_id)
        return tx

    async def list_pending(
        self,
        session: AsyncSession,
        operator: Identity,
        *,
        limit: int = 20,
        offset: int = 0,
    ) -> tuple[List[MoneyTransaction], int]:
        """Cola de recargas pendientes y su total."""
        require_operator(operator, "list pending top-ups")
        items = await self.tx_repo.list_pending_topups(session, limit=limit, offset=offset)
        total = await self.tx_repo.count_pending_topups(session)
        return items, total


__all__ = ["TopupApprovalService"]
# Fin del archivo warnet_ledger/modules/wallet/approval.py
