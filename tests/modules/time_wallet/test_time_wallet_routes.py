# -*- coding: utf-8 -*-
"""
tests/modules/time_wallet/test_time_wallet_routes.py

Tests HTTP del wallet de minutos.

Autor: WarnetLedger
Fecha: 2026-10-09
"""

from http import HTTPStatus

import pytest


async def _create_venue(client, headers):
    r = await client.post(
        "/venues",
        json={"name": "Warnet Melati", "regular_price_per_hour": 10000, "member_price_per_hour": 7000},
        headers=headers(1, "operator"),
    )
    assert r.status_code == HTTPStatus.CREATED, r.text
    return r.json()


@pytest.mark.anyio
async def test_credit_requires_operator(async_client, headers):
    venue = await _create_venue(async_client, headers)
    payload = {"owner_id": 30, "venue_id": venue["id"], "minutes": 120}

    r = await async_client.post("/time-wallets/credit", json=payload, headers=headers(30, "member"))
    assert r.status_code == HTTPStatus.FORBIDDEN

    r = await async_client.post("/time-wallets/credit", json=payload, headers=headers(1, "operator"))
    assert r.status_code == HTTPStatus.OK
    body = r.json()
    assert body["remaining_minutes"] == pytest.approx(120)
    assert body["is_active"] is False


@pytest.mark.anyio
async def test_owner_activates_syncs_and_deactivates(async_client, headers):
    venue = await _create_venue(async_client, headers)
    r = await async_client.post(
        "/time-wallets/credit",
        json={"owner_id": 31, "venue_id": venue["id"], "minutes": 60},
        headers=headers(1, "operator"),
    )
    wallet_id = r.json()["id"]
    owner = headers(31, "member")

    r = await async_client.post(f"/time-wallets/{wallet_id}/activate", headers=owner)
    assert r.status_code == HTTPStatus.OK
    assert r.json()["is_active"] is True

    r = await async_client.post(f"/time-wallets/{wallet_id}/sync", json={"remaining_minutes": 42}, headers=owner)
    assert r.status_code == HTTPStatus.OK
    assert r.json()["remaining_minutes"] == pytest.approx(42)

    r = await async_client.post(f"/time-wallets/{wallet_id}/deactivate", headers=owner)
    assert r.status_code == HTTPStatus.OK
    body = r.json()
    assert body["is_active"] is False
    assert 0 <= body["remaining_minutes"] <= 42

    r = await async_client.get("/time-wallets", params={"venue_id": venue["id"]}, headers=owner)
    assert r.status_code == HTTPStatus.OK
    assert r.json()["id"] == wallet_id

    r = await async_client.get("/time-wallets/mine", headers=owner)
    assert [w["id"] for w in r.json()["items"]] == [wallet_id]


@pytest.mark.anyio
async def test_other_user_cannot_activate(async_client, headers):
    venue = await _create_venue(async_client, headers)
    r = await async_client.post(
        "/time-wallets/credit",
        json={"owner_id": 32, "venue_id": venue["id"], "minutes": 60},
        headers=headers(1, "operator"),
    )
    wallet_id = r.json()["id"]

    r = await async_client.post(f"/time-wallets/{wallet_id}/activate", headers=headers(33, "member"))

    assert r.status_code == HTTPStatus.FORBIDDEN


@pytest.mark.anyio
async def test_unknown_wallet_is_404(async_client, headers):
    r = await async_client.post("/time-wallets/999/activate", headers=headers(34, "member"))
    assert r.status_code == HTTPStatus.NOT_FOUND
    assert r.json()["detail"]["error_code"] == "NOT_FOUND"

# Fin del archivo tests/modules/time_wallet/test_time_wallet_routes.py
