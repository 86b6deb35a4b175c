# -*- coding: utf-8 -*-
"""
warnet_ledger/modules/wallet/routes.py

Rutas del wallet monetario y del flujo de aprobación.

Endpoints:
- POST /wallet/topups                      → requestTopup
- GET  /wallet/topups/pending              → cola del operador
- POST /wallet/topups/{id}/approve         → approveTopup (operador)
- POST /wallet/topups/{id}/reject          → rejectTopup (operador)
- POST /wallet/payments                    → debitForPayment
- POST /wallet/refunds                     → creditRefund (operador)
- GET  /wallet/balance                     → saldo actual
- GET  /wallet/transactions                → listTransactions
- GET  /wallet/transactions/{id}           → detalle
- GET  /wallet/ledger-check                → saldo vs ledger

Autor: WarnetLedger
Fecha: 2026-10-05
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from warnet_ledger.core.db import commit_or_raise, get_db_session
from warnet_ledger.core.settings import get_settings
from warnet_ledger.shared.auth_context import (
    Identity,
    get_current_identity,
    require_operator,
    require_owner_or_operator,
)

from .approval import TopupApprovalService
from .enums import TransactionKind, TransactionStatus
from .schemas import (
    BalanceResponse,
    LedgerCheckResponse,
    MoneyTransactionResponse,
    PaymentRequest,
    PendingTopupsResponse,
    RefundRequest,
    RejectTopupRequest,
    TopupRequest,
    TransactionListResponse,
)
from .services import MoneyWalletService

router = APIRouter(prefix="/wallet", tags=["wallet"])


def get_wallet_service() -> MoneyWalletService:
    return MoneyWalletService()


def get_approval_service() -> TopupApprovalService:
    return TopupApprovalService()


def _page(limit: Optional[int]) -> int:
    settings = get_settings()
    return min(limit or settings.page_size_default, settings.page_size_max)


@router.post("/topups", response_model=MoneyTransactionResponse, status_code=status.HTTP_201_CREATED)
async def request_topup(
    payload: TopupRequest,
    identity: Identity = Depends(get_current_identity),
    session: AsyncSession = Depends(get_db_session),
    service: MoneyWalletService = Depends(get_wallet_service),
):
    async def _work():
        return await service.topup(
            session,
            identity.user_id,
            payload.amount,
            proof_image=payload.proof_image,
            sender_name=payload.sender_name,
            description=payload.description,
        )

    tx = await commit_or_raise(session, _work)
    return MoneyTransactionResponse.model_validate(tx)


@router.get("/topups/pending", response_model=PendingTopupsResponse)
async def list_pending_topups(
    limit: Optional[int] = Query(default=None, ge=1),
    offset: int = Query(default=0, ge=0),
    identity: Identity = Depends(get_current_identity),
    session: AsyncSession = Depends(get_db_session),
    approvals: TopupApprovalService = Depends(get_approval_service),
):
    items, total = await approvals.list_pending(session, identity, limit=_page(limit), offset=offset)
    return PendingTopupsResponse(
        total=total,
        items=[MoneyTransactionResponse.model_validate(tx) for tx in items],
    )


@router.post("/topups/{tx_id}/approve", response_model=MoneyTransactionResponse)
async def approve_topup(
    tx_id: int,
    identity: Identity = Depends(get_current_identity),
    session: AsyncSession = Depends(get_db_session),
    approvals: TopupApprovalService = Depends(get_approval_service),
):
    tx = await commit_or_raise(session, lambda: approvals.approve(session, tx_id, identity))
    return MoneyTransactionResponse.model_validate(tx)


@router.post("/topups/{tx_id}/reject", response_model=MoneyTransactionResponse)
async def reject_topup(
    tx_id: int,
    payload: Optional[RejectTopupRequest] = None,
    identity: Identity = Depends(get_current_identity),
    session: AsyncSession = Depends(get_db_session),
    approvals: TopupApprovalService = Depends(get_approval_service),
):
    note = payload.note if payload else None
    tx = await commit_or_raise(session, lambda: approvals.reject(session, tx_id, identity, note))
    return MoneyTransactionResponse.model_validate(tx)


@router.post("/payments", response_model=MoneyTransactionResponse, status_code=status.HTTP_201_CREATED)
async def debit_for_payment(
    payload: PaymentRequest,
    identity: Identity = Depends(get_current_identity),
    session: AsyncSession = Depends(get_db_session),
    service: MoneyWalletService = Depends(get_wallet_service),
):
    tx = await commit_or_raise(
        session,
        lambda: service.payment(session, identity.user_id, payload.booking_id, payload.amount),
    )
    return MoneyTransactionResponse.model_validate(tx)


@router.post("/refunds", response_model=MoneyTransactionResponse, status_code=status.HTTP_201_CREATED)
async def credit_refund(
    payload: RefundRequest,
    identity: Identity = Depends(get_current_identity),
    session: AsyncSession = Depends(get_db_session),
    service: MoneyWalletService = Depends(get_wallet_service),
):
    require_operator(identity, "issue refunds")
    tx = await commit_or_raise(
        session,
        lambda: service.refund(session, payload.owner_id, payload.booking_id, payload.amount),
    )
    return MoneyTransactionResponse.model_validate(tx)


@router.get("/balance", response_model=BalanceResponse)
async def get_balance(
    owner_id: Optional[int] = Query(default=None),
    identity: Identity = Depends(get_current_identity),
    session: AsyncSession = Depends(get_db_session),
    service: MoneyWalletService = Depends(get_wallet_service),
):
    target = identity.user_id if owner_id is None else owner_id
    require_owner_or_operator(identity, target, "balance")
    balance = await service.get_balance(session, target)
    return BalanceResponse(owner_id=target, money_balance=balance)


@router.get("/transactions", response_model=TransactionListResponse)
async def list_transactions(
    owner_id: Optional[int] = Query(default=None),
    kind: Optional[TransactionKind] = Query(default=None),
    tx_status: Optional[TransactionStatus] = Query(default=None, alias="status"),
    limit: Optional[int] = Query(default=None, ge=1),
    offset: int = Query(default=0, ge=0),
    identity: Identity = Depends(get_current_identity),
    session: AsyncSession = Depends(get_db_session),
    service: MoneyWalletService = Depends(get_wallet_service),
):
    page = _page(limit)
    items = await service.list_transactions(
        session,
        identity,
        owner_id,
        kind=kind,
        status=tx_status,
        limit=page,
        offset=offset,
    )
    return TransactionListResponse(
        owner_id=identity.user_id if owner_id is None else owner_id,
        items=[MoneyTransactionResponse.model_validate(tx) for tx in items],
        limit=page,
        offset=offset,
    )


@router.get("/transactions/{tx_id}", response_model=MoneyTransactionResponse)
async def get_transaction(
    tx_id: int,
    identity: Identity = Depends(get_current_identity),
    session: AsyncSession = Depends(get_db_session),
    service: MoneyWalletService = Depends(get_wallet_service),
):
    tx = await service.get_transaction(session, tx_id, identity)
    return MoneyTransactionResponse.model_validate(tx)


@router.get("/ledger-check", response_model=LedgerCheckResponse)
async def ledger_check(
    owner_id: Optional[int] = Query(default=None),
    identity: Identity = Depends(get_current_identity),
    session: AsyncSession = Depends(get_db_session),
    service: MoneyWalletService = Depends(get_wallet_service),
):
    target = identity.user_id if owner_id is None else owner_id
    require_owner_or_operator(identity, target, "ledger")
    check = await service.verify_ledger(session, target)
    return LedgerCheckResponse(
        owner_id=check.owner_id,
        money_balance=check.money_balance,
        ledger_balance=check.ledger_balance,
        drift=check.drift,
        consistent=check.consistent,
    )


__all__ = ["router", "get_wallet_service", "get_approval_service"]
# Fin del archivo warnet_ledger/modules/wallet/routes.py
