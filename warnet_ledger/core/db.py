# -*- coding: utf-8 -*-
"""
warnet_ledger/core/db.py

Fachada para la capa de acceso a datos basada en SQLAlchemy async:

- engine / SessionLocal / Base
- get_db_session (dependencia FastAPI)
- commit_or_raise()
- check_database_health()

Autor: WarnetLedger
Fecha: 2026-10-02
"""

from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession

from warnet_ledger.shared.database import (
    engine,
    SessionLocal,
    Base,
    get_async_session,
    create_all_tables,
    check_database_health,
    commit_or_raise,
)


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependencia FastAPI para obtener una sesión asíncrona de base de datos.

    Los routers dependen de esta función (y los tests la sobreescriben
    vía app.dependency_overrides).
    """
    async for session in get_async_session():
        yield session


__all__ = [
    "engine",
    "SessionLocal",
    "Base",
    "get_db_session",
    "create_all_tables",
    "check_database_health",
    "commit_or_raise",
]

# Fin del archivo warnet_ledger/core/db.py
