# -*- coding: utf-8 -*-
"""
warnet_ledger/modules/accounts/routes.py

Rutas de sedes (lookup de precios para reservas).

Endpoints:
- POST /venues         (operador)
- GET  /venues/{id}

Autor: WarnetLedger
Fecha: 2026-10-04
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from warnet_ledger.core.db import commit_or_raise, get_db_session
from warnet_ledger.shared.auth_context import Identity, get_current_identity, require_operator
from warnet_ledger.shared.errors import NotFound

from .repositories import VenueRepository
from .schemas import VenueCreateRequest, VenueResponse

router = APIRouter(prefix="/venues", tags=["venues"])


@router.post("", response_model=VenueResponse, status_code=status.HTTP_201_CREATED)
async def create_venue(
    payload: VenueCreateRequest,
    identity: Identity = Depends(get_current_identity),
    session: AsyncSession = Depends(get_db_session),
) -> VenueResponse:
    require_operator(identity, "create venues")
    repo = VenueRepository()

    async def _work():
        return await repo.create(
            session,
            name=payload.name,
            regular_price_per_hour=payload.regular_price_per_hour,
            member_price_per_hour=payload.member_price_per_hour,
        )

    venue = await commit_or_raise(session, _work)
    return VenueResponse.model_validate(venue)


@router.get("/{venue_id}", response_model=VenueResponse)
async def get_venue(
    venue_id: int,
    identity: Identity = Depends(get_current_identity),
    session: AsyncSession = Depends(get_db_session),
) -> VenueResponse:
    venue = await VenueRepository().get(session, venue_id)
    if venue is None:
        raise NotFound("venue", venue_id)
    return VenueResponse.model_validate(venue)


__all__ = ["router"]
# Fin del archivo warnet_ledger/modules/accounts/routes.py
