# -*- coding: utf-8 -*-
"""
warnet_ledger/routes/__init__.py

Ensamblador principal de ruteadores de la API del ledger.

Responsabilidades:
- Incluir el router de health (/health).
- Montar los routers de cada módulo (venues, wallet, time-wallets, bookings,
  operator).

Autor: WarnetLedger
Fecha: 2026-10-08
"""

import logging

from fastapi import APIRouter

from warnet_ledger.modules.accounts.routes import router as venues_router
from warnet_ledger.modules.bookings.routes import router as bookings_router
from warnet_ledger.modules.operator.routes import router as operator_router
from warnet_ledger.modules.time_wallet.routes import router as time_wallet_router
from warnet_ledger.modules.wallet.routes import router as wallet_router

from .health_routes import router as health_router

logger = logging.getLogger(__name__)

router = APIRouter()

# Health check sin prefijo adicional
router.include_router(health_router)

for _name, _module_router in (
    ("venues", venues_router),
    ("wallet", wallet_router),
    ("time_wallet", time_wallet_router),
    ("bookings", bookings_router),
    ("operator", operator_router),
):
    router.include_router(_module_router)
    logger.debug("Router '%s' mounted (prefix='%s')", _name, _module_router.prefix)

__all__ = ["router"]

# Fin del archivo warnet_ledger/routes/__init__.py
