# -*- coding: utf-8 -*-
"""
warnet_ledger/modules/__init__.py

Registro de modelos ORM: importar este paquete deja todas las tablas en
Base.metadata (lo usa create_all_tables en dev/test).

Autor: WarnetLedger
Fecha: 2026-10-07
"""

from .accounts.models import Account, Venue
from .wallet.models import MoneyTransaction
from .time_wallet.models import TimeWallet
from .bookings.models import Booking

__all__ = ["Account", "Venue", "MoneyTransaction", "TimeWallet", "Booking"]
