# -*- coding: utf-8 -*-
"""
tests/modules/wallet/test_money_wallet_service.py

Pruebas del MoneyWalletService: recargas pendientes, débitos atómicos,
reembolsos y coherencia saldo vs ledger.

Autor: WarnetLedger
Fecha: 2026-10-09
"""

import pytest

from warnet_ledger.modules.wallet.approval import TopupApprovalService
from warnet_ledger.modules.wallet.enums import TransactionKind, TransactionStatus
from warnet_ledger.modules.wallet.services import MoneyWalletService
from warnet_ledger.shared.errors import Forbidden, InsufficientBalance, NotFound, ValidationError


async def _fund(session, owner_id, amount, operator):
    wallet = MoneyWalletService()
    tx = await wallet.topup(session, owner_id, amount, proof_image="receipt.jpg", sender_name="Budi")
    await TopupApprovalService().approve(session, tx.id, operator)
    await session.commit()


@pytest.mark.anyio
async def test_topup_is_pending_and_does_not_touch_balance(db_session, patron):
    service = MoneyWalletService()

    tx = await service.topup(
        db_session,
        patron.user_id,
        50000,
        proof_image="https://cdn.warnet.id/proof/1.jpg",
        sender_name="Budi Santoso",
    )
    await db_session.commit()

    assert tx.kind == TransactionKind.TOPUP
    assert tx.status == TransactionStatus.PENDING
    assert tx.amount == 50000
    assert tx.sender_name == "Budi Santoso"
    assert await service.get_balance(db_session, patron.user_id) == 0


@pytest.mark.anyio
@pytest.mark.parametrize("amount", [0, -10, 1.5])
async def test_topup_rejects_non_positive_or_fractional_amount(db_session, patron, amount):
    with pytest.raises(ValidationError):
        await MoneyWalletService().topup(
            db_session, patron.user_id, amount, proof_image="p.jpg", sender_name="Budi"
        )


@pytest.mark.anyio
@pytest.mark.parametrize("proof,sender", [(None, "Budi"), ("p.jpg", "   "), ("", "Budi")])
async def test_topup_requires_proof_and_sender(db_session, patron, proof, sender):
    with pytest.raises(ValidationError):
        await MoneyWalletService().topup(
            db_session, patron.user_id, 10000, proof_image=proof, sender_name=sender
        )


@pytest.mark.anyio
async def test_payment_debits_balance_and_records_negative_row(db_session, patron, operator):
    await _fund(db_session, patron.user_id, 100000, operator)
    service = MoneyWalletService()

    tx = await service.payment(db_session, patron.user_id, 77, 30000)
    await db_session.commit()

    assert tx.kind == TransactionKind.PAYMENT
    assert tx.status == TransactionStatus.COMPLETED
    assert tx.amount == -30000
    assert tx.related_booking_id == 77
    assert await service.get_balance(db_session, patron.user_id) == 70000


@pytest.mark.anyio
async def test_payment_with_insufficient_balance_changes_nothing(db_session, patron, operator):
    await _fund(db_session, patron.user_id, 20000, operator)
    service = MoneyWalletService()

    with pytest.raises(InsufficientBalance) as exc_info:
        await service.payment(db_session, patron.user_id, 1, 20001)
    await db_session.rollback()

    assert exc_info.value.available == 20000
    assert await service.get_balance(db_session, patron.user_id) == 20000
    payments = await service.list_transactions(db_session, patron, kind=TransactionKind.PAYMENT)
    assert payments == []


@pytest.mark.anyio
async def test_payment_for_exact_balance_leaves_zero(db_session, patron, operator):
    await _fund(db_session, patron.user_id, 15000, operator)
    service = MoneyWalletService()

    await service.payment(db_session, patron.user_id, None, 15000)
    await db_session.commit()

    assert await service.get_balance(db_session, patron.user_id) == 0


@pytest.mark.anyio
async def test_refund_booking_returns_net_charged_amount(db_session, patron, operator):
    await _fund(db_session, patron.user_id, 50000, operator)
    service = MoneyWalletService()
    await service.payment(db_session, patron.user_id, 9, 20000)

    refund = await service.refund_booking(db_session, patron.user_id, 9)
    await db_session.commit()

    assert refund.kind == TransactionKind.REFUND
    assert refund.amount == 20000
    assert refund.related_booking_id == 9
    assert await service.get_balance(db_session, patron.user_id) == 50000

    # Segundo reembolso: no queda nada neto por devolver
    assert await service.refund_booking(db_session, patron.user_id, 9) is None


@pytest.mark.anyio
async def test_ledger_stays_consistent_across_operations(db_session, patron, operator):
    await _fund(db_session, patron.user_id, 100000, operator)
    service = MoneyWalletService()
    await service.payment(db_session, patron.user_id, 1, 30000)
    await service.refund(db_session, patron.user_id, 1, 10000)
    # Recarga pendiente: no cuenta en el ledger ni en el saldo
    await service.topup(db_session, patron.user_id, 5000, proof_image="p.jpg", sender_name="Budi")
    await db_session.commit()

    check = await service.verify_ledger(db_session, patron.user_id)

    assert check.money_balance == 80000
    assert check.ledger_balance == 80000
    assert check.consistent is True
    assert check.drift == 0


@pytest.mark.anyio
async def test_transactions_are_private_to_owner(db_session, patron, member, operator):
    service = MoneyWalletService()
    tx = await service.topup(db_session, patron.user_id, 10000, proof_image="p.jpg", sender_name="Budi")
    await db_session.commit()

    assert (await service.get_transaction(db_session, tx.id, patron)).id == tx.id
    assert (await service.get_transaction(db_session, tx.id, operator)).id == tx.id
    with pytest.raises(Forbidden):
        await service.get_transaction(db_session, tx.id, member)
    with pytest.raises(Forbidden):
        await service.list_transactions(db_session, member, patron.user_id)
    with pytest.raises(NotFound):
        await service.get_transaction(db_session, 999999, operator)


@pytest.mark.anyio
async def test_list_transactions_filters_by_status(db_session, patron, operator):
    await _fund(db_session, patron.user_id, 10000, operator)
    service = MoneyWalletService()
    await service.topup(db_session, patron.user_id, 7000, proof_image="p.jpg", sender_name="Budi")
    await db_session.commit()

    pending = await service.list_transactions(db_session, patron, status=TransactionStatus.PENDING)
    completed = await service.list_transactions(db_session, patron, status=TransactionStatus.COMPLETED)

    assert [t.amount for t in pending] == [7000]
    assert [t.amount for t in completed] == [10000]

# Fin del archivo tests/modules/wallet/test_money_wallet_service.py
