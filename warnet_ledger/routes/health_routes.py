# -*- coding: utf-8 -*-
"""
warnet_ledger/routes/health_routes.py

Endpoint básico de health check del ledger.

Autor: WarnetLedger
Fecha: 2026-10-08
"""

from fastapi import APIRouter

from warnet_ledger import __version__
from warnet_ledger.core.db import check_database_health
from warnet_ledger.core.settings import get_settings
from warnet_ledger.shared.utils.time_utils import now_utc

router = APIRouter(tags=["health"])


@router.get(
    "/health",
    summary="Health check del ledger",
    description=(
        "Devuelve el estado básico del servicio, incluyendo "
        "verificación simple de conectividad a la base de datos."
    ),
)
async def health_check() -> dict:
    """
    Health check básico.

    Returns:
        dict: información mínima de estado de la aplicación.
    """
    settings = get_settings()

    db_ok = await check_database_health(timeout_s=2.0)

    return {
        "status": "ok" if db_ok else "degraded",
        "timestamp": now_utc().isoformat(),
        "environment": settings.python_env,
        "database": {
            "reachable": db_ok,
        },
        "service": {
            "name": "warnet-ledger",
            "version": __version__,
        },
    }

# Fin del archivo warnet_ledger/routes/health_routes.py
