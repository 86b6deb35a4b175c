# -*- coding: utf-8 -*-
"""
warnet_ledger/modules/accounts/__init__.py

Cuentas (saldo monetario materializado) y sedes (lookup de precios).

Autor: WarnetLedger
Fecha: 2026-10-04
"""

from .models import Account, Venue
from .repositories import AccountRepository, VenueRepository

__all__ = ["Account", "Venue", "AccountRepository", "VenueRepository"]
