# -*- coding: utf-8 -*-
"""
warnet_ledger/modules/wallet/services.py

Servicio del wallet monetario.

Provee lógica de negocio para:
- topup: solicitud de recarga (pending, sin efecto en saldo)
- payment: débito atómico con chequeo de saldo
- refund: crédito atómico
- consultas de saldo/transacciones y verificación ledger vs saldo

Cada mutación de saldo va acompañada de exactamente una fila del ledger
en la misma transacción. El servicio solo hace flush(); el commit lo
decide el llamador (commit_or_raise en las rutas).

Autor: WarnetLedger
Fecha: 2026-10-05
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from warnet_ledger.modules.accounts.repositories import AccountRepository
from warnet_ledger.shared.auth_context import Identity, require_owner_or_operator
from warnet_ledger.shared.errors import InsufficientBalance, NotFound, ValidationError
from warnet_ledger.shared.utils.time_utils import now_utc

from .enums import TransactionKind, TransactionStatus
from .models import MoneyTransaction
from .repositories import MoneyTransactionRepository

logger = logging.getLogger(__name__)


@dataclass
class LedgerCheck:
    """Resultado de comparar el saldo materializado contra el ledger."""
    owner_id: int
    money_balance: int
    ledger_balance: int

    @property
    def drift(self) -> int:
        return self.money_balance - self.ledger_balance

    @property
    def consistent(self) -> bool:
        return self.drift == 0


def _require_positive(amount: int, field: str = "amount") -> None:
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise ValidationError(f"{field} must be an integer", field=field)
    if amount <= 0:
        raise ValidationError(f"{field} must be positive", field=field, value=amount)


def _require_text(value: Optional[str], field: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"{field} is required", field=field)
    return str(value).strip()


class MoneyWalletService:
    """
    Servicio para el saldo monetario y su ledger.
    """

    def __init__(
        self,
        account_repo: Optional[AccountRepository] = None,
        tx_repo: Optional[MoneyTransactionRepository] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.account_repo = account_repo or AccountRepository()
        self.tx_repo = tx_repo or MoneyTransactionRepository()
        self.clock = clock or now_utc

    async def topup(
        self,
        session: AsyncSession,
        owner_id: int,
        amount: int,
        *,
        proof_image: Optional[str],
        sender_name: Optional[str],
        description: Optional[str] = None,
    ) -> MoneyTransaction:
        """
        Registra una solicitud de recarga PENDING.

        El saldo no cambia hasta que un operador la aprueba. La prueba de
        transferencia solo se valida como texto no vacío.
        """
        _require_positive(amount)
        proof = _require_text(proof_image, "proof_image")
        sender = _require_text(sender_name, "sender_name")

        await self.account_repo.get_or_create(session, owner_id)
        tx = await self.tx_repo.create(
            session,
            owner_id=owner_id,
            kind=TransactionKind.TOPUP,
            amount=amount,
            status=TransactionStatus.PENDING,
            proof_image=proof,
            sender_name=sender,
            description=description or f"Top up {amount} from {sender}",
        )
        logger.info("Topup requested: tx=%s owner=%s amount=%d", tx.id, owner_id, amount)
        return tx

    async def payment(
        self,
        session: AsyncSession,
        owner_id: int,
        booking_id: Optional[int],
        amount: int,
        *,
        description: Optional[str] = None,
    ) -> MoneyTransaction:
        """
        Débito atómico: descuenta solo si el saldo alcanza.

        Raises:
            ValidationError: amount <= 0
            InsufficientBalance: saldo < amount (saldo y ledger sin cambios)
        """
        _require_positive(amount)

        await self.account_repo.get_or_create(session, owner_id)
        debited = await self.account_repo.debit_if_sufficient(session, owner_id, amount)
        if not debited:
            available = await self.account_repo.get_balance(session, owner_id)
            logger.warning(
                "Payment rejected (insufficient balance): owner=%s booking=%s amount=%d available=%d",
                owner_id, booking_id, amount, available,
            )
            raise InsufficientBalance(owner_id, amount, available)

        tx = await self.tx_repo.create(
            session,
            owner_id=owner_id,
            kind=TransactionKind.PAYMENT,
            amount=-amount,
            status=TransactionStatus.COMPLETED,
            related_booking_id=booking_id,
            description=description or (f"Payment for booking #{booking_id}" if booking_id else "Payment"),
        )
        logger.info("Payment completed: tx=%s owner=%s booking=%s amount=%d", tx.id, owner_id, booking_id, amount)
        return tx

    async def refund(
        self,
        session: AsyncSession,
        owner_id: int,
        booking_id: Optional[int],
        amount: int,
        *,
        description: Optional[str] = None,
    ) -> MoneyTransaction:
        """Crédito atómico + fila REFUND completed."""
        _require_positive(amount)

        await self.account_repo.get_or_create(session, owner_id)
        await self.account_repo.credit(session, owner_id, amount)
        tx = await self.tx_repo.create(
            session,
            owner_id=owner_id,
            kind=TransactionKind.REFUND,
            amount=amount,
            status=TransactionStatus.COMPLETED,
            related_booking_id=booking_id,
            description=description or (f"Refund for booking #{booking_id}" if booking_id else "Refund"),
        )
        logger.info("Refund completed: tx=%s owner=%s booking=%s amount=%d", tx.id, owner_id, booking_id, amount)
        return tx

    async def refund_booking(
        self,
        session: AsyncSession,
        owner_id: int,
        booking_id: int,
        *,
        max_amount: Optional[int] = None,
    ) -> Optional[MoneyTransaction]:
        """
        Devuelve el neto cobrado por una reserva, acotado por `max_amount`.
        None si no hay nada que devolver.
        """
        net = await self.tx_repo.net_debited_for_booking(session, owner_id, booking_id)
        if max_amount is not None:
            net = min(net, max_amount)
        if net <= 0:
            return None
        return await self.refund(session, owner_id, booking_id, net)

    # ------------------------------------------------------------------
    # Consultas
    # ------------------------------------------------------------------

    async def get_balance(self, session: AsyncSession, owner_id: int) -> int:
        return await self.account_repo.get_balance(session, owner_id)

    async def get_transaction(
        self,
        session: AsyncSession,
        tx_id: int,
        requester: Identity,
    ) -> MoneyTransaction:
        tx = await self.tx_repo.get(session, tx_id)
        if tx is None:
            raise NotFound("transaction", tx_id)
        require_owner_or_operator(requester, tx.owner_id, "transaction")
        return tx

    async def list_transactions(
        self,
        session: AsyncSession,
        requester: Identity,
        owner_id: Optional[int] = None,
        *,
        kind: Optional[TransactionKind] = None,
        status: Optional[TransactionStatus] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> List[MoneyTransaction]:
        """
        Lista transacciones de un dueño. Los operadores pueden consultar
        cualquier dueño; el resto solo las propias.
        """
        target = requester.user_id if owner_id is None else owner_id
        require_owner_or_operator(requester, target, "transactions")
        if limit <= 0 or offset < 0:
            raise ValidationError("limit must be positive and offset non-negative")
        return await self.tx_repo.list_by_owner(
            session,
            target,
            kind=kind,
            status=status,
            limit=limit,
            offset=offset,
        )

    async def verify_ledger(self, session: AsyncSession, owner_id: int) -> LedgerCheck:
        """
        Compara money_balance con Σ amount de transacciones COMPLETED.
        Registra un error si divergen.
        """
        balance = await self.account_repo.get_balance(session, owner_id)
        ledger = await self.tx_repo.sum_completed(session, owner_id)
        check = LedgerCheck(owner_id=owner_id, money_balance=balance, ledger_balance=ledger)
        if not check.consistent:
            logger.error(
                "LEDGER DRIFT owner=%s money_balance=%d ledger=%d drift=%+d",
                owner_id, balance, ledger, check.drift,
            )
        return check


__all__ = ["MoneyWalletService", "LedgerCheck"]
# Fin del archivo warnet_ledger/modules/wallet/services.py
