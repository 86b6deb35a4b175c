# -*- coding: utf-8 -*-
"""
warnet_ledger/modules/time_wallet/schemas.py

Esquemas Pydantic para wallets de minutos.

Autor: WarnetLedger
Fecha: 2026-10-06
"""

from __future__ import annotations

from datetime import datetime
from typing import List

from pydantic import BaseModel, Field

from .models import TimeWallet
from .services import effective_remaining


class CreditMinutesRequest(BaseModel):
    owner_id: int
    venue_id: int
    minutes: float


class SyncRemainingRequest(BaseModel):
    remaining_minutes: float = Field(description="Minutos restantes según el cliente.")


class TimeWalletResponse(BaseModel):
    id: int
    owner_id: int
    venue_id: int
    remaining_minutes: float
    effective_remaining_minutes: float = Field(
        description="remaining_minutes descontando el tiempo activo transcurrido (lectura perezosa)."
    )
    is_active: bool
    last_updated: datetime

    @classmethod
    def from_wallet(cls, wallet: TimeWallet, now: datetime) -> "TimeWalletResponse":
        return cls(
            id=wallet.id,
            owner_id=wallet.owner_id,
            venue_id=wallet.venue_id,
            remaining_minutes=wallet.remaining_minutes,
            effective_remaining_minutes=round(effective_remaining(wallet, now), 4),
            is_active=wallet.is_active,
            last_updated=wallet.last_updated,
        )


class TimeWalletListResponse(BaseModel):
    owner_id: int
    items: List[TimeWalletResponse]


__all__ = [
    "CreditMinutesRequest",
    "SyncRemainingRequest",
    "TimeWalletResponse",
    "TimeWalletListResponse",
]
# Fin del archivo warnet_ledger/modules/time_wallet/schemas.py
