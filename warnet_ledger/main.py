# -*- coding: utf-8 -*-
"""
warnet_ledger/main.py

Punto de entrada principal del ledger.

- Carga .env antes de resolver settings.
- Logging configurado desde settings (plain/pretty/json).
- create_all_tables en el arranque solo si DB_CREATE_ALL (dev/test).
- Manejo de errores: LedgerError → status tipado; no manejadas → JSON 500.
- Health principal /health delegado al paquete warnet_ledger.routes.

Autor: WarnetLedger
Fecha: 2026-10-08
"""

import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path

# ---------------------------------------------------------------------------
# Cargar .env ANTES de cualquier import que use os.getenv
# ---------------------------------------------------------------------------
from dotenv import load_dotenv

_ENV_PATH = Path(__file__).resolve().parents[1] / ".env"
_override_env = os.getenv("PYTHON_ENV", "development").strip().lower() == "development"
load_dotenv(dotenv_path=_ENV_PATH, override=_override_env)

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from warnet_ledger import __version__
from warnet_ledger.core.db import create_all_tables, engine
from warnet_ledger.core.logging import setup_logging
from warnet_ledger.core.settings import get_settings
from warnet_ledger.routes import router as api_router
from warnet_ledger.shared.middleware import register_exception_handlers

settings = get_settings()
setup_logging(level=settings.log_level, fmt=settings.log_format)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # ────────── STARTUP ──────────
    if settings.db_create_all:
        await create_all_tables()
        logger.info("Database schema ensured (create_all)")

    logger.info(
        "Warnet Ledger started: env=%s version=%s sqlite=%s",
        settings.python_env, __version__, settings.is_sqlite,
    )
    try:
        yield
    finally:
        # ────────── SHUTDOWN ──────────
        await engine.dispose()
        logger.info("Warnet Ledger stopped")


openapi_tags = [
    {"name": "venues", "description": "Sedes y tarifas por hora"},
    {"name": "wallet", "description": "Saldo monetario, recargas y aprobación"},
    {"name": "time-wallets", "description": "Minutos de miembro por sede"},
    {"name": "bookings", "description": "Reservas, pago, cancelación y sesiones"},
    {"name": "operator", "description": "Miembros y estadísticas por sede"},
    {"name": "health", "description": "Estado del servicio"},
]


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.app_name,
        description="Ledger de saldo y sesiones para warnet",
        version=__version__,
        lifespan=lifespan,
        openapi_tags=openapi_tags,
    )

    register_exception_handlers(app)

    origins = settings.get_cors_origins()
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        # Credenciales no son compatibles con wildcard
        allow_credentials=origins != ["*"],
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )
    logger.debug("CORS configured: origins=%s", origins)

    app.include_router(api_router)
    return app


app = create_app()


def run() -> None:
    uvicorn.run(
        "warnet_ledger.main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=settings.is_dev,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()

# Fin del archivo warnet_ledger/main.py
