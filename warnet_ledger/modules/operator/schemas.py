# -*- coding: utf-8 -*-
"""
warnet_ledger/modules/operator/schemas.py

Esquemas Pydantic del panel del operador.

Autor: WarnetLedger
Fecha: 2026-10-19
"""

from __future__ import annotations

from datetime import date, datetime
from typing import List

from pydantic import BaseModel, Field

from warnet_ledger.modules.time_wallet.models import TimeWallet
from warnet_ledger.modules.time_wallet.services import effective_remaining

from .services import VenueStatistics


class VenueMemberItem(BaseModel):
    owner_id: int
    time_wallet_id: int
    remaining_minutes: float = Field(description="Minutos efectivos (descontando el tiempo activo).")
    is_active: bool
    last_updated: datetime
    money_balance: int

    @classmethod
    def from_row(cls, wallet: TimeWallet, money_balance: int, now: datetime) -> "VenueMemberItem":
        return cls(
            owner_id=wallet.owner_id,
            time_wallet_id=wallet.id,
            remaining_minutes=round(effective_remaining(wallet, now), 4),
            is_active=wallet.is_active,
            last_updated=wallet.last_updated,
            money_balance=money_balance,
        )


class VenueMembersResponse(BaseModel):
    venue_id: int
    venue_name: str
    total: int
    items: List[VenueMemberItem]


class VenueStatisticsResponse(BaseModel):
    venue_id: int
    start_date: date
    end_date: date
    revenue: int = Field(description="Σ total_price de reservas pagadas en el rango (Rupiah).")
    total_bookings: int
    paid_bookings: int
    today_bookings: int
    active_bookings: int
    member_count: int
    pending_topups: int

    @classmethod
    def from_stats(cls, stats: VenueStatistics) -> "VenueStatisticsResponse":
        return cls(
            venue_id=stats.venue_id,
            start_date=stats.start_date,
            end_date=stats.end_date,
            revenue=stats.revenue,
            total_bookings=stats.total_bookings,
            paid_bookings=stats.paid_bookings,
            today_bookings=stats.today_bookings,
            active_bookings=stats.active_bookings,
            member_count=stats.member_count,
            pending_topups=stats.pending_topups,
        )


__all__ = ["VenueMemberItem", "VenueMembersResponse", "VenueStatisticsResponse"]
# Fin del archivo warnet_ledger/modules/operator/schemas.py
