# -*- coding: utf-8 -*-
"""
warnet_ledger/modules/wallet/models.py

Modelo ORM del ledger monetario.

Tabla: money_transactions

Columnas:
- id: BIGSERIAL PRIMARY KEY
- owner_id: BIGINT NOT NULL
- kind: topup | payment | refund
- amount: BIGINT NOT NULL (positivo topup/refund, negativo payment)
- status: pending | completed | failed
- related_booking_id: BIGINT (nullable)
- proof_image, sender_name, description: TEXT (nullable, solo topup)
- approved_by: BIGINT (nullable), approved_at: TIMESTAMPTZ (nullable)
- rejection_note: TEXT (nullable)
- created_at: TIMESTAMPTZ NOT NULL DEFAULT now()

Autor: WarnetLedger
Fecha: 2026-10-05
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import (
    BigInteger,
    CheckConstraint,
    DateTime,
    Index,
    String,
    Text,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column

from warnet_ledger.shared.database.base import Base, BigIntPK, str_enum
from warnet_ledger.shared.utils.time_utils import now_utc
from .enums import TransactionKind, TransactionStatus


class MoneyTransaction(Base):
    """
    Fila inmutable del ledger monetario.

    La suma de `amount` sobre las filas COMPLETED de un dueño es igual a
    su Account.money_balance. Solo status/approved_* de una recarga
    pendiente cambian después de insertarse.
    """

    __tablename__ = "money_transactions"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True, autoincrement=True)

    owner_id: Mapped[int] = mapped_column(BigInteger, nullable=False, index=True)

    kind: Mapped[TransactionKind] = mapped_column(
        str_enum(TransactionKind, name="money_tx_kind"),
        nullable=False,
    )

    amount: Mapped[int] = mapped_column(BigInteger, nullable=False)

    status: Mapped[TransactionStatus] = mapped_column(
        str_enum(TransactionStatus, name="money_tx_status"),
        nullable=False,
    )

    related_booking_id: Mapped[Optional[int]] = mapped_column(BigInteger, nullable=True, index=True)

    # Datos de la recarga (revisados manualmente por el operador)
    proof_image: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    sender_name: Mapped[Optional[str]] = mapped_column(String(120), nullable=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    approved_by: Mapped[Optional[int]] = mapped_column(BigInteger, nullable=True)
    approved_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    rejection_note: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=now_utc,
        server_default=func.now(),
    )

    __table_args__ = (
        CheckConstraint("amount <> 0", name="amount_nonzero"),
        CheckConstraint(
            "(kind = 'payment' AND amount < 0) OR (kind <> 'payment' AND amount > 0)",
            name="amount_sign_by_kind",
        ),
        CheckConstraint("kind = 'topup' OR status <> 'pending'", name="only_topup_pending"),
        Index("ix_money_transactions_owner_status", "owner_id", "status"),
    )

    def __repr__(self) -> str:
        return (
            f"<MoneyTransaction id={self.id} owner={self.owner_id} kind={self.kind.value} "
            f"amount={self.amount:+d} status={self.status.value}>"
        )


__all__ = ["MoneyTransaction"]
# Fin del archivo warnet_ledger/modules/wallet/models.py
