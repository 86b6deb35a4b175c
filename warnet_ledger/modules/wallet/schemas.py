# -*- coding: utf-8 -*-
"""
warnet_ledger/modules/wallet/schemas.py

Esquemas Pydantic para el wallet monetario.

Los montos no se restringen aquí (gt=0): el núcleo valida y responde
VALIDATION_ERROR con el mismo formato que el resto de errores de dominio.

Autor: WarnetLedger
Fecha: 2026-10-05
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .enums import TransactionKind, TransactionStatus


class TopupRequest(BaseModel):
    amount: int = Field(description="Monto a recargar (Rupiah).")
    proof_image: Optional[str] = Field(default=None, description="Referencia a la prueba de transferencia.")
    sender_name: Optional[str] = Field(default=None, max_length=120)
    description: Optional[str] = None


class RejectTopupRequest(BaseModel):
    note: Optional[str] = Field(default=None, max_length=500)


class PaymentRequest(BaseModel):
    booking_id: Optional[int] = None
    amount: int


class RefundRequest(BaseModel):
    owner_id: int
    booking_id: Optional[int] = None
    amount: int


class MoneyTransactionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    owner_id: int
    kind: TransactionKind
    amount: int
    status: TransactionStatus
    related_booking_id: Optional[int] = None
    proof_image: Optional[str] = None
    sender_name: Optional[str] = None
    description: Optional[str] = None
    approved_by: Optional[int] = None
    approved_at: Optional[datetime] = None
    rejection_note: Optional[str] = None
    created_at: Optional[datetime] = None


class TransactionListResponse(BaseModel):
    owner_id: int
    items: List[MoneyTransactionResponse]
    limit: int
    offset: int


class PendingTopupsResponse(BaseModel):
    total: int
    items: List[MoneyTransactionResponse]


class BalanceResponse(BaseModel):
    owner_id: int
    money_balance: int


class LedgerCheckResponse(BaseModel):
    owner_id: int
    money_balance: int
    ledger_balance: int
    drift: int
    consistent: bool


__all__ = [
    "TopupRequest",
    "RejectTopupRequest",
    "PaymentRequest",
    "RefundRequest",
    "MoneyTransactionResponse",
    "TransactionListResponse",
    "PendingTopupsResponse",
    "BalanceResponse",
    "LedgerCheckResponse",
]
# Fin del archivo warnet_ledger/modules/wallet/schemas.py
