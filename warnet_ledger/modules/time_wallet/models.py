# -*- coding: utf-8 -*-
"""
warnet_ledger/modules/time_wallet/models.py

Modelo ORM del wallet de minutos por (dueño, sede).

Tabla: time_wallets

Constraints:
- uq_time_wallets_owner_id: UNIQUE(owner_id, venue_id)
- ck_time_wallets_remaining_non_negative: remaining_minutes >= 0

Autor: WarnetLedger
Fecha: 2026-10-06
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import (
    BigInteger,
    Boolean,
    CheckConstraint,
    DateTime,
    Float,
    ForeignKey,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column

from warnet_ledger.shared.database.base import Base, BigIntPK
from warnet_ledger.shared.utils.time_utils import now_utc


class TimeWallet(Base):
    """
    Saldo prepagado de minutos de un usuario en una sede.

    remaining_minutes solo decrece mientras is_active, en función del
    tiempo transcurrido desde last_updated (se captura en cada
    activate/deactivate/sync; no hay proceso en segundo plano).
    """

    __tablename__ = "time_wallets"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True, autoincrement=True)
    owner_id: Mapped[int] = mapped_column(BigInteger, nullable=False, index=True)
    venue_id: Mapped[int] = mapped_column(
        BigInteger,
        ForeignKey("venues.id", ondelete="RESTRICT"),
        nullable=False,
    )
    remaining_minutes: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    last_updated: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=now_utc,
        server_default=func.now(),
    )

    __table_args__ = (
        UniqueConstraint("owner_id", "venue_id"),
        CheckConstraint("remaining_minutes >= 0", name="remaining_non_negative"),
    )

    def __repr__(self) -> str:
        return (
            f"<TimeWallet id={self.id} owner={self.owner_id} venue={self.venue_id} "
            f"remaining={self.remaining_minutes:.2f} active={self.is_active}>"
        )


__all__ = ["TimeWallet"]
# Fin del archivo warnet_ledger/modules/time_wallet/models.py
