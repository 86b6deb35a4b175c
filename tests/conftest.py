# -*- coding: utf-8 -*-
"""
tests/conftest.py

Config global de tests del ledger.

- PYTHON_ENV=test antes de importar la app (SQLite en memoria para el
  engine de proceso; los tests usan su propio archivo SQLite por test).
- Engine/sesiones aisladas por test sobre un archivo SQLite temporal, de
  modo que dos sesiones concurrentes compiten por el mismo lock real.
- Reloj controlable para la lógica temporal perezosa.
- App FastAPI + cliente httpx (ASGITransport) con ciclo de vida vía
  asgi-lifespan y override de get_db_session.

Autor: WarnetLedger
Fecha: 2026-10-09
"""

import os

os.environ["PYTHON_ENV"] = "test"
os.environ.setdefault("LOG_LEVEL", "WARNING")

from collections.abc import AsyncIterator
from datetime import datetime, timedelta, timezone
from typing import Dict

import pytest
from asgi_lifespan import LifespanManager
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from warnet_ledger.core.db import get_db_session
from warnet_ledger.modules.accounts.repositories import VenueRepository
from warnet_ledger.shared.auth_context import Identity, Role
from warnet_ledger.shared.database import build_engine, build_sessionmaker, create_all_tables

T0 = datetime(2026, 10, 1, 12, 0, 0, tzinfo=timezone.utc)


class FakeClock:
    """Reloj manual: los servicios lo invocan como clock()."""

    def __init__(self, start: datetime = T0):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **delta) -> datetime:
        self.now = self.now + timedelta(**delta)
        return self.now


@pytest.fixture(scope="session")
def anyio_backend():
    """Permite a pytest-anyio usar asyncio en el scope de sesión."""
    return "asyncio"


@pytest.fixture
async def engine(tmp_path):
    """
    Motor ASYNC SQLite sobre archivo temporal (uno por test).
    Crea todas las tablas registradas en Base.metadata.
    """
    eng = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'ledger.db'}", echo=False)
    await create_all_tables(eng)
    try:
        yield eng
    finally:
        await eng.dispose()


@pytest.fixture
def session_factory(engine):
    return build_sessionmaker(engine)


@pytest.fixture
async def db_session(session_factory) -> AsyncIterator[AsyncSession]:
    async with session_factory() as session:
        try:
            yield session
        finally:
            if session.in_transaction():
                await session.rollback()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def patron() -> Identity:
    return Identity(user_id=101, role=Role.patron)


@pytest.fixture
def member() -> Identity:
    return Identity(user_id=202, role=Role.member)


@pytest.fixture
def operator() -> Identity:
    return Identity(user_id=900, role=Role.operator)


@pytest.fixture
async def venue(db_session):
    """Sede con tarifa regular 10000/h y de miembro 8000/h."""
    created = await VenueRepository().create(
        db_session,
        name="Warnet Sentosa",
        regular_price_per_hour=10000,
        member_price_per_hour=8000,
    )
    await db_session.commit()
    return created


# -----------------------------------------------------------------------------
# App FastAPI y cliente httpx
# -----------------------------------------------------------------------------
@pytest.fixture
def app(session_factory):
    """
    Aplicación principal con get_db_session apuntando al engine del test.
    """
    from warnet_ledger.main import app as fastapi_app

    async def _override_db() -> AsyncIterator[AsyncSession]:
        async with session_factory() as session:
            try:
                yield session
            finally:
                if session.in_transaction():
                    await session.rollback()

    fastapi_app.dependency_overrides[get_db_session] = _override_db
    try:
        yield fastapi_app
    finally:
        fastapi_app.dependency_overrides.clear()


@pytest.fixture
async def async_client(app) -> AsyncIterator[AsyncClient]:
    """
    Cliente HTTP asíncrono contra la app con ASGITransport y gestión de
    startup/shutdown mediante asgi-lifespan.
    """
    async with LifespanManager(app):
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://testserver") as client:
            yield client


def auth_headers(user_id: int, role: str = "patron") -> Dict[str, str]:
    return {"X-User-Id": str(user_id), "X-User-Role": role}


@pytest.fixture
def headers():
    return auth_headers

# Fin del archivo tests/conftest.py
