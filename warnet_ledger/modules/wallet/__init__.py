# -*- coding: utf-8 -*-
"""
warnet_ledger/modules/wallet/__init__.py

Wallet monetario: ledger inmutable, saldo materializado y flujo de
aprobación de recargas.

Autor: WarnetLedger
Fecha: 2026-10-05
"""

from .enums import TransactionKind, TransactionStatus
from .models import MoneyTransaction
from .repositories import MoneyTransactionRepository
from .services import MoneyWalletService, LedgerCheck
from .approval import TopupApprovalService

__all__ = [
    "TransactionKind",
    "TransactionStatus",
    "MoneyTransaction",
    "MoneyTransactionRepository",
    "MoneyWalletService",
    "LedgerCheck",
    "TopupApprovalService",
]
