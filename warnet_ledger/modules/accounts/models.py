# -*- coding: utf-8 -*-
"""
warnet_ledger/modules/accounts/models.py

Modelos ORM de cuentas y sedes.

- Account: registro del dueño que materializa money_balance.
  Solo las operaciones de MoneyWallet lo mutan.
- Venue: sede (warnet) con tarifas regular y de miembro por hora.

Autor: WarnetLedger
Fecha: 2026-10-04
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import (
    BigInteger,
    CheckConstraint,
    DateTime,
    Integer,
    String,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column

from warnet_ledger.shared.database.base import Base, BigIntPK
from warnet_ledger.shared.utils.time_utils import now_utc


class Account(Base):
    """
    Saldo monetario del usuario (proyección materializada del ledger).

    Tabla: accounts

    Constraints:
    - ck_accounts_money_balance_non_negative: money_balance >= 0
    """

    __tablename__ = "accounts"

    user_id: Mapped[int] = mapped_column(
        BigInteger,
        primary_key=True,
        autoincrement=False,
    )

    # Rupiah enteros
    money_balance: Mapped[int] = mapped_column(
        BigInteger,
        nullable=False,
        default=0,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=now_utc,
        server_default=func.now(),
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=now_utc,
        server_default=func.now(),
    )

    __table_args__ = (
        CheckConstraint("money_balance >= 0", name="money_balance_non_negative"),
    )

    def __repr__(self) -> str:
        return f"<Account user={self.user_id} money_balance={self.money_balance}>"


class Venue(Base):
    """Sede con estaciones reservables y su tarifa por hora."""

    __tablename__ = "venues"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(120), nullable=False)
    regular_price_per_hour: Mapped[int] = mapped_column(Integer, nullable=False)
    member_price_per_hour: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=now_utc,
        server_default=func.now(),
    )

    __table_args__ = (
        CheckConstraint("regular_price_per_hour >= 0", name="regular_price_non_negative"),
        CheckConstraint("member_price_per_hour >= 0", name="member_price_non_negative"),
    )

    def rate(self, is_member: bool) -> int:
        """Tarifa por hora aplicable según membresía."""
        return self.member_price_per_hour if is_member else self.regular_price_per_hour

    def __repr__(self) -> str:
        return f"<Venue id={self.id} name={self.name!r}>"


__all__ = ["Account", "Venue"]
# Fin del archivo warnet_ledger/modules/accounts/models.py
