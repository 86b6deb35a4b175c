# -*- coding: utf-8 -*-
"""
tests/modules/time_wallet/test_time_wallet_concurrency.py

Operaciones simultáneas sobre el mismo wallet de minutos:
- activate/deactivate intercalados descuentan el tiempo una sola vez
- dos créditos iniciales del mismo (owner, venue) dejan una sola fila

Autor: WarnetLedger
Fecha: 2026-10-19
"""

import asyncio

import pytest

from warnet_ledger.modules.time_wallet.services import TimeWalletService
from warnet_ledger.shared.errors import LedgerError


async def _run(session_factory, op):
    async with session_factory() as session:
        try:
            result = await op(session)
            await session.commit()
            return result
        except LedgerError:
            await session.rollback()
            raise


async def _active_wallet(db_session, clock, member, venue, minutes):
    service = TimeWalletService(clock=clock)
    wallet = await service.credit_minutes(db_session, member.user_id, venue.id, minutes)
    await service.activate(db_session, wallet.id, member)
    await db_session.commit()
    return wallet.id


@pytest.mark.anyio
async def test_concurrent_deactivates_decrement_once(session_factory, db_session, venue, member, clock):
    wallet_id = await _active_wallet(db_session, clock, member, venue, 60)
    clock.advance(minutes=10)
    service = TimeWalletService(clock=clock)

    results = await asyncio.gather(
        _run(session_factory, lambda s: service.deactivate(s, wallet_id, member)),
        _run(session_factory, lambda s: service.deactivate(s, wallet_id, member)),
        return_exceptions=True,
    )

    assert not [r for r in results if isinstance(r, Exception)]
    async with session_factory() as session:
        wallet = await service.get_time_wallet(session, member.user_id, venue.id, member)
        assert wallet.remaining_minutes == pytest.approx(50)
        assert wallet.is_active is False


@pytest.mark.anyio
async def test_interleaved_activate_deactivate_never_double_count(session_factory, db_session, venue, member, clock):
    wallet_id = await _active_wallet(db_session, clock, member, venue, 60)
    clock.advance(minutes=15)
    service = TimeWalletService(clock=clock)

    ops = [service.activate, service.deactivate] * 3
    results = await asyncio.gather(
        *[_run(session_factory, lambda s, op=op: op(s, wallet_id, member)) for op in ops],
        return_exceptions=True,
    )

    assert not [r for r in results if isinstance(r, Exception)]
    async with session_factory() as session:
        wallet = await service.get_time_wallet(session, member.user_id, venue.id, member)
        assert wallet.remaining_minutes == pytest.approx(45)


@pytest.mark.anyio
async def test_concurrent_first_credits_create_one_row(session_factory, venue, member, clock):
    service = TimeWalletService(clock=clock)

    results = await asyncio.gather(
        _run(session_factory, lambda s: service.credit_minutes(s, member.user_id, venue.id, 30)),
        _run(session_factory, lambda s: service.credit_minutes(s, member.user_id, venue.id, 30)),
        return_exceptions=True,
    )

    assert not [r for r in results if isinstance(r, Exception)]
    async with session_factory() as session:
        wallets = await service.list_time_wallets(session, member.user_id, member)
        assert len(wallets) == 1
        assert wallets[0].remaining_minutes == pytest.approx(60)
        assert wallets[0].is_active is False

# Fin del archivo tests/modules/time_wallet/test_time_wallet_concurrency.py
