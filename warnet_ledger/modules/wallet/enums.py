# -*- coding: utf-8 -*-
"""
warnet_ledger/modules/wallet/enums.py

Enums del ledger monetario.

Autor: WarnetLedger
Fecha: 2026-10-05
"""

from enum import Enum


class TransactionKind(str, Enum):
    """Tipo de movimiento en el ledger monetario."""
    TOPUP = "topup"      # Recarga (+), requiere aprobación de operador
    PAYMENT = "payment"  # Pago de reserva (-)
    REFUND = "refund"    # Reembolso de reserva (+)


class TransactionStatus(str, Enum):
    """
    Estado de una transacción.

    Solo TOPUP puede estar PENDING; PAYMENT y REFUND nacen COMPLETED.
    """
    PENDING = "pending"      # Recarga en espera de operador
    COMPLETED = "completed"  # Afecta money_balance
    FAILED = "failed"        # Recarga rechazada, sin efecto en saldo


__all__ = [
    "TransactionKind",
    "TransactionStatus",
]
# Fin del archivo warnet_ledger/modules/wallet/enums.py
