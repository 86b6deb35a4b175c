# -*- coding: utf-8 -*-
"""
warnet_ledger/modules/time_wallet/routes.py

Rutas del wallet de minutos.

Endpoints:
- POST /time-wallets/credit             → creditTimeWallet (operador)
- POST /time-wallets/{id}/activate      → activateTimeWallet
- POST /time-wallets/{id}/deactivate    → deactivateTimeWallet
- POST /time-wallets/{id}/sync          → syncTimeWalletRemaining
- GET  /time-wallets?venue_id=&owner_id= → getTimeWallet
- GET  /time-wallets/mine               → wallets del usuario

Autor: WarnetLedger
Fecha: 2026-10-06
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from warnet_ledger.core.db import commit_or_raise, get_db_session
from warnet_ledger.shared.auth_context import Identity, get_current_identity, require_operator

from .schemas import (
    CreditMinutesRequest,
    SyncRemainingRequest,
    TimeWalletListResponse,
    TimeWalletResponse,
)
from .services import TimeWalletService

router = APIRouter(prefix="/time-wallets", tags=["time-wallets"])


def get_time_wallet_service() -> TimeWalletService:
    return TimeWalletService()


@router.post("/credit", response_model=TimeWalletResponse)
async def credit_time_wallet(
    payload: CreditMinutesRequest,
    identity: Identity = Depends(get_current_identity),
    session: AsyncSession = Depends(get_db_session),
    service: TimeWalletService = Depends(get_time_wallet_service),
):
    require_operator(identity, "credit time wallets")
    wallet = await commit_or_raise(
        session,
        lambda: service.credit_minutes(session, payload.owner_id, payload.venue_id, payload.minutes),
    )
    return TimeWalletResponse.from_wallet(wallet, service.clock())


@router.get("/mine", response_model=TimeWalletListResponse)
async def list_my_time_wallets(
    identity: Identity = Depends(get_current_identity),
    session: AsyncSession = Depends(get_db_session),
    service: TimeWalletService = Depends(get_time_wallet_service),
):
    wallets = await service.list_time_wallets(session, identity.user_id, identity)
    now = service.clock()
    return TimeWalletListResponse(
        owner_id=identity.user_id,
        items=[TimeWalletResponse.from_wallet(w, now) for w in wallets],
    )


@router.get("", response_model=TimeWalletResponse)
async def get_time_wallet(
    venue_id: int = Query(...),
    owner_id: Optional[int] = Query(default=None),
    identity: Identity = Depends(get_current_identity),
    session: AsyncSession = Depends(get_db_session),
    service: TimeWalletService = Depends(get_time_wallet_service),
):
    target = identity.user_id if owner_id is None else owner_id
    wallet = await service.get_time_wallet(session, target, venue_id, identity)
    return TimeWalletResponse.from_wallet(wallet, service.clock())


@router.post("/{wallet_id}/activate", response_model=TimeWalletResponse)
async def activate_time_wallet(
    wallet_id: int,
    identity: Identity = Depends(get_current_identity),
    session: AsyncSession = Depends(get_db_session),
    service: TimeWalletService = Depends(get_time_wallet_service),
):
    wallet = await commit_or_raise(session, lambda: service.activate(session, wallet_id, identity))
    return TimeWalletResponse.from_wallet(wallet, service.clock())


@router.post("/{wallet_id}/deactivate", response_model=TimeWalletResponse)
async def deactivate_time_wallet(
    wallet_id: int,
    identity: Identity = Depends(get_current_identity),
    session: AsyncSession = Depends(get_db_session),
    service: TimeWalletService = Depends(get_time_wallet_service),
):
    wallet = await commit_or_raise(session, lambda: service.deactivate(session, wallet_id, identity))
    return TimeWalletResponse.from_wallet(wallet, service.clock())


@router.post("/{wallet_id}/sync", response_model=TimeWalletResponse)
async def sync_time_wallet_remaining(
    wallet_id: int,
    payload: SyncRemainingRequest,
    identity: Identity = Depends(get_current_identity),
    session: AsyncSession = Depends(get_db_session),
    service: TimeWalletService = Depends(get_time_wallet_service),
):
    wallet = await commit_or_raise(
        session,
        lambda: service.sync_remaining(session, wallet_id, identity, payload.remaining_minutes),
    )
    return TimeWalletResponse.from_wallet(wallet, service.clock())


__all__ = ["router", "get_time_wallet_service"]
# Fin del archivo warnet_ledger/modules/time_wallet/routes.py
