# -*- coding: utf-8 -*-
"""
warnet_ledger/shared/database/__init__.py

Re-exporta utilidades comunes de base de datos.

Autor: WarnetLedger
Fecha: 2026-10-02
"""

from __future__ import annotations

from .base import Base, BigIntPK, NAMING_CONVENTION, str_enum
from .database import (
    engine,
    build_engine,
    build_sessionmaker,
    SessionLocal,
    get_async_session,
    create_all_tables,
    check_database_health,
)
from .transactions import commit_or_raise

__all__ = [
    "engine",
    "SessionLocal",
    "build_engine",
    "build_sessionmaker",
    "Base",
    "BigIntPK",
    "NAMING_CONVENTION",
    "str_enum",
    "get_async_session",
    "create_all_tables",
    "check_database_health",
    "commit_or_raise",
]

# Fin del archivo warnet_ledger/shared/database/__init__.py
