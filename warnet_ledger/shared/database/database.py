# -*- coding: utf-8 -*-
"""
warnet_ledger/shared/database/database.py

SQLAlchemy async (asyncpg en producción, aiosqlite en tests).

Provee:
- engine (create_async_engine)
- SessionLocal (async_sessionmaker)
- Dependencia FastAPI: get_async_session
- check_database_health()
- create_all_tables()

Notas:
- Timeouts a nivel de conexión (asyncpg: timeout, command_timeout).
- SQLite usa busy timeout para serializar escritores concurrentes.

Autor: WarnetLedger
Fecha: 2026-10-02
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, AsyncGenerator

from sqlalchemy import event, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from warnet_ledger.shared.config import get_settings
from warnet_ledger.shared.database.base import Base

logger = logging.getLogger(__name__)


def build_engine(url: str | None = None, *, echo: bool | None = None) -> AsyncEngine:
    """
    Construye el engine async según el dialecto.

    - PostgreSQL/asyncpg: pool configurable, timeouts y ssl.
    - SQLite/aiosqlite: sin argumentos de pool (SQLAlchemy elige el pool adecuado).
    """
    settings = get_settings()
    url = url or settings.database_url
    echo = settings.db_echo_sql if echo is None else echo

    kwargs: dict[str, Any] = {"echo": echo}
    if url.startswith("sqlite"):
        kwargs["connect_args"] = {"timeout": settings.db_command_timeout_s * 2}
    else:
        connect_args: dict[str, Any] = {
            "timeout": settings.db_pool_timeout,
            "command_timeout": settings.db_command_timeout_s,
        }
        if settings.db_sslmode and settings.db_sslmode != "disable":
            connect_args["ssl"] = settings.db_sslmode
        kwargs.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_timeout=settings.db_pool_timeout,
            pool_recycle=settings.db_pool_recycle,
            pool_pre_ping=settings.db_pool_pre_ping,
            connect_args=connect_args,
        )

    logger.info("[DB] engine for dialect=%s echo=%s", url.split(":", 1)[0], echo)
    eng = create_async_engine(url, **kwargs)
    if url.startswith("sqlite"):
        _install_sqlite_transaction_hooks(eng)
    return eng


def _install_sqlite_transaction_hooks(eng: AsyncEngine) -> None:
    """
    SQLite: el driver no emite BEGIN por sí mismo de forma fiable (SAVEPOINT
    roto). Se desactiva su manejo y se emite BEGIN IMMEDIATE, que toma el lock
    de escritura al inicio: los escritores concurrentes esperan (busy timeout)
    en vez de fallar por upgrade de lock.
    """

    @event.listens_for(eng.sync_engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(eng.sync_engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")


def build_sessionmaker(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=bind,
        expire_on_commit=False,
        class_=AsyncSession,
        autoflush=False,
    )


# ── Engine + Session factory (singleton de proceso)
engine = build_engine()
SessionLocal = build_sessionmaker(engine)


# ── Dependencias FastAPI
async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    async with SessionLocal() as session:
        try:
            yield session
        except SQLAlchemyError:
            # rollback para liberar cualquier transacción/lock
            await session.rollback()
            raise
        finally:
            if session.in_transaction():
                await session.rollback()


async def create_all_tables(bind: AsyncEngine | None = None) -> None:
    """Crea las tablas del metadata (dev/test). En producción se usan migraciones."""
    # Registrar modelos en Base.metadata
    import warnet_ledger.modules  # noqa: F401

    async with (bind or engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


# ── Health check
async def check_database_health(timeout_s: float = 3.0, sql: str = "SELECT 1") -> bool:
    """
    Verifica conectividad a la base de datos.

    Returns:
        True si la conexión es exitosa, False en caso contrario
    """
    try:
        async with asyncio.timeout(timeout_s):
            async with engine.connect() as conn:
                await conn.execute(text(sql))
        return True
    except (TimeoutError, SQLAlchemyError, OSError) as e:
        logger.warning("[DB] health check failed: %r", e)
        return False


__all__ = [
    "engine",
    "SessionLocal",
    "build_engine",
    "build_sessionmaker",
    "get_async_session",
    "create_all_tables",
    "check_database_health",
]
# Fin del archivo warnet_ledger/shared/database/database.py
