# -*- coding: utf-8 -*-
"""
warnet_ledger/modules/time_wallet/__init__.py

Wallet de minutos por (usuario, sede) con activación y decaimiento perezoso.

Autor: WarnetLedger
Fecha: 2026-10-06
"""

from .models import TimeWallet
from .repositories import TimeWalletRepository
from .services import TimeWalletService, effective_remaining

__all__ = ["TimeWallet", "TimeWalletRepository", "TimeWalletService", "effective_remaining"]
