# -*- coding: utf-8 -*-
"""
warnet_ledger/modules/operator/routes.py

Rutas del panel del operador por sede.

Endpoints:
- GET /venues/{id}/members      → miembros con wallet de minutos y saldo
- GET /venues/{id}/statistics   → ingresos y conteos (start_date/end_date)

Autor: WarnetLedger
Fecha: 2026-10-19
"""

from __future__ import annotations

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from warnet_ledger.core.db import get_db_session
from warnet_ledger.shared.auth_context import Identity, get_current_identity

from .schemas import VenueMemberItem, VenueMembersResponse, VenueStatisticsResponse
from .services import OperatorReportService

router = APIRouter(prefix="/venues", tags=["operator"])


def get_report_service() -> OperatorReportService:
    return OperatorReportService()


@router.get("/{venue_id}/members", response_model=VenueMembersResponse)
async def list_venue_members(
    venue_id: int,
    identity: Identity = Depends(get_current_identity),
    session: AsyncSession = Depends(get_db_session),
    service: OperatorReportService = Depends(get_report_service),
):
    venue, rows = await service.venue_members(session, venue_id, identity)
    now = service.clock()
    return VenueMembersResponse(
        venue_id=venue.id,
        venue_name=venue.name,
        total=len(rows),
        items=[VenueMemberItem.from_row(wallet, balance, now) for wallet, balance in rows],
    )


@router.get("/{venue_id}/statistics", response_model=VenueStatisticsResponse)
async def get_venue_statistics(
    venue_id: int,
    start_date: Optional[date] = Query(default=None),
    end_date: Optional[date] = Query(default=None),
    identity: Identity = Depends(get_current_identity),
    session: AsyncSession = Depends(get_db_session),
    service: OperatorReportService = Depends(get_report_service),
):
    stats = await service.venue_statistics(
        session,
        venue_id,
        identity,
        start_date=start_date,
        end_date=end_date,
    )
    return VenueStatisticsResponse.from_stats(stats)


__all__ = ["router"]
# Fin del archivo warnet_ledger/modules/operator/routes.py
