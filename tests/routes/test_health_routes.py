# -*- coding: utf-8 -*-
"""
tests/routes/test_health_routes.py

Health check del servicio.

Autor: WarnetLedger
Fecha: 2026-10-09
"""

from http import HTTPStatus

import pytest


@pytest.mark.anyio
async def test_health_reports_database(async_client):
    r = await async_client.get("/health")

    assert r.status_code == HTTPStatus.OK
    data = r.json()
    assert data["status"] == "ok"
    assert data["environment"] == "test"
    assert data["database"]["reachable"] is True
    assert data["service"]["name"] == "warnet-ledger"

# Fin del archivo tests/routes/test_health_routes.py
