# -*- coding: utf-8 -*-
"""
tests/modules/bookings/test_booking_service.py

Pruebas del BookingService:
- precio y duración mínima según membresía
- confirmación de pago (wallet o externo) y crédito de minutos
- ventana de cancelación con reembolso
- sesión activa, minutos restantes y expiración perezosa

Autor: WarnetLedger
Fecha: 2026-10-09
"""

from datetime import date, time, timedelta

import pytest

from warnet_ledger.modules.bookings.enums import BookingStatus, PaymentStatus
from warnet_ledger.modules.bookings.services import BookingService, remaining_minutes
from warnet_ledger.modules.time_wallet.services import TimeWalletService
from warnet_ledger.modules.wallet.approval import TopupApprovalService
from warnet_ledger.modules.wallet.enums import TransactionKind
from warnet_ledger.modules.wallet.services import MoneyWalletService
from warnet_ledger.shared.errors import (
    Conflict,
    Forbidden,
    InsufficientBalance,
    InvalidState,
    NotFound,
    ValidationError,
)
from warnet_ledger.shared.utils.time_utils import as_utc


async def _fund(session, owner_id, amount, operator):
    tx = await MoneyWalletService().topup(
        session, owner_id, amount, proof_image="receipt.jpg", sender_name="Dewi"
    )
    await TopupApprovalService().approve(session, tx.id, operator)
    await session.commit()


async def _book(service, session, requester, venue, hours=1, **kwargs):
    booking = await service.create(
        session,
        requester,
        venue_id=venue.id,
        resource_number=kwargs.pop("resource_number", 4),
        booking_date=date(2026, 10, 1),
        booking_time=time(13, 0),
        duration_hours=hours,
        **kwargs,
    )
    await session.commit()
    return booking


@pytest.fixture
def service(clock):
    return BookingService(clock=clock)


# ---------------------------------------------------------------------------
# create
# ---------------------------------------------------------------------------

@pytest.mark.anyio
async def test_create_uses_regular_rate_for_patron(db_session, service, venue, patron):
    booking = await _book(service, db_session, patron, venue, hours=3)

    assert booking.status == BookingStatus.PENDING
    assert booking.payment_status == PaymentStatus.PENDING
    assert booking.price_per_hour == 10000
    assert booking.total_price == 30000
    assert booking.is_member_booking is False
    assert booking.can_cancel_until is None


@pytest.mark.anyio
async def test_first_member_booking_requires_two_hours(db_session, service, venue, member, operator):
    with pytest.raises(ValidationError) as exc_info:
        await _book(service, db_session, member, venue, hours=1)
    await db_session.rollback()
    await db_session.refresh(venue)
    assert exc_info.value.context["minimum"] == 2

    booking = await _book(service, db_session, member, venue, hours=2)
    assert booking.is_member_booking is True
    assert booking.total_price == 16000

    # Tras el primer pago existe el wallet de minutos: 1 hora ya es válida
    await _fund(db_session, member.user_id, 16000, operator)
    await service.confirm_payment(db_session, booking.id, member)
    await db_session.commit()

    second = await _book(service, db_session, member, venue, hours=1)
    assert second.duration_hours == 1


@pytest.mark.anyio
@pytest.mark.parametrize("hours", [0, -1])
async def test_create_rejects_duration_below_minimum(db_session, service, venue, patron, hours):
    with pytest.raises(ValidationError):
        await _book(service, db_session, patron, venue, hours=hours)


@pytest.mark.anyio
async def test_create_rejects_invalid_resource_and_unknown_venue(db_session, service, venue, patron):
    with pytest.raises(ValidationError):
        await _book(service, db_session, patron, venue, resource_number=0)

    with pytest.raises(NotFound):
        await service.create(
            db_session,
            patron,
            venue_id=31337,
            resource_number=1,
            booking_date=date(2026, 10, 1),
            booking_time=time(9, 0),
            duration_hours=1,
        )


# ---------------------------------------------------------------------------
# confirm_payment / reject_payment
# ---------------------------------------------------------------------------

@pytest.mark.anyio
async def test_confirm_payment_debits_wallet_and_opens_window(db_session, service, venue, patron, operator, clock):
    await _fund(db_session, patron.user_id, 50000, operator)
    booking = await _book(service, db_session, patron, venue, hours=2)

    paid = await service.confirm_payment(db_session, booking.id, patron)
    await db_session.commit()

    assert paid.payment_status == PaymentStatus.PAID
    assert paid.status == BookingStatus.PENDING
    assert paid.paid_with_wallet is True
    assert as_utc(paid.can_cancel_until) == clock() + timedelta(seconds=120)

    wallet = MoneyWalletService()
    assert await wallet.get_balance(db_session, patron.user_id) == 30000
    payments = await wallet.list_transactions(db_session, patron, kind=TransactionKind.PAYMENT)
    assert [(p.amount, p.related_booking_id) for p in payments] == [(-20000, booking.id)]


@pytest.mark.anyio
async def test_confirm_member_booking_credits_minutes(db_session, service, venue, member, operator):
    await _fund(db_session, member.user_id, 16000, operator)
    booking = await _book(service, db_session, member, venue, hours=2)

    await service.confirm_payment(db_session, booking.id, member)
    await db_session.commit()

    wallet = await TimeWalletService().get_time_wallet(db_session, member.user_id, venue.id, member)
    assert wallet.remaining_minutes == pytest.approx(120)
    assert wallet.is_active is False


@pytest.mark.anyio
async def test_confirm_twice_is_invalid_state(db_session, service, venue, patron, operator):
    await _fund(db_session, patron.user_id, 50000, operator)
    booking = await _book(service, db_session, patron, venue)
    await service.confirm_payment(db_session, booking.id, patron)
    await db_session.commit()

    with pytest.raises(InvalidState):
        await service.confirm_payment(db_session, booking.id, patron)
    await db_session.rollback()

    assert await MoneyWalletService().get_balance(db_session, patron.user_id) == 40000


@pytest.mark.anyio
async def test_confirm_with_insufficient_balance_keeps_booking_unpaid(db_session, service, venue, patron):
    booking = await _book(service, db_session, patron, venue)
    booking_id = booking.id

    with pytest.raises(InsufficientBalance):
        await service.confirm_payment(db_session, booking_id, patron)
    await db_session.rollback()

    reloaded = await service.get_booking(db_session, booking_id, patron)
    assert reloaded.payment_status == PaymentStatus.PENDING
    assert reloaded.can_cancel_until is None


@pytest.mark.anyio
async def test_external_payment_is_operator_only(db_session, service, venue, patron, operator):
    booking = await _book(service, db_session, patron, venue)

    with pytest.raises(Forbidden):
        await service.confirm_payment(db_session, booking.id, patron, use_money_wallet=False)

    paid = await service.confirm_payment(db_session, booking.id, operator, use_money_wallet=False)
    await db_session.commit()

    assert paid.payment_status == PaymentStatus.PAID
    assert paid.paid_with_wallet is False
    assert await MoneyWalletService().get_balance(db_session, patron.user_id) == 0


@pytest.mark.anyio
async def test_other_user_cannot_pay_booking(db_session, service, venue, patron, member):
    booking = await _book(service, db_session, patron, venue)

    with pytest.raises(Forbidden):
        await service.confirm_payment(db_session, booking.id, member)


@pytest.mark.anyio
async def test_operator_rejects_pending_payment(db_session, service, venue, patron, operator):
    booking = await _book(service, db_session, patron, venue)

    with pytest.raises(Forbidden):
        await service.reject_payment(db_session, booking.id, patron)

    rejected = await service.reject_payment(db_session, booking.id, operator, "Transfer not received")
    await db_session.commit()

    assert rejected.payment_status == PaymentStatus.REJECTED
    assert rejected.status == BookingStatus.CANCELLED
    assert rejected.status_note == "Transfer not received"

    with pytest.raises(InvalidState):
        await service.confirm_payment(db_session, booking.id, operator, use_money_wallet=False)


# ---------------------------------------------------------------------------
# cancel
# ---------------------------------------------------------------------------

@pytest.mark.anyio
async def test_cancel_inside_window_refunds(db_session, service, venue, patron, operator, clock):
    await _fund(db_session, patron.user_id, 50000, operator)
    booking = await _book(service, db_session, patron, venue, hours=2)
    await service.confirm_payment(db_session, booking.id, patron)
    await db_session.commit()

    clock.advance(seconds=90)
    cancelled = await service.cancel(db_session, booking.id, patron)
    await db_session.commit()

    assert cancelled.status == BookingStatus.CANCELLED
    wallet = MoneyWalletService()
    assert await wallet.get_balance(db_session, patron.user_id) == 50000
    refunds = await wallet.list_transactions(db_session, patron, kind=TransactionKind.REFUND)
    assert [(r.amount, r.related_booking_id) for r in refunds] == [(20000, booking.id)]
    assert (await wallet.verify_ledger(db_session, patron.user_id)).consistent


@pytest.mark.anyio
async def test_cancel_after_window_is_conflict_and_changes_nothing(db_session, service, venue, patron, operator, clock):
    await _fund(db_session, patron.user_id, 100000, operator)
    booking = await _book(service, db_session, patron, venue, hours=3)
    booking_id = booking.id
    await service.confirm_payment(db_session, booking.id, patron)
    await db_session.commit()

    clock.advance(seconds=140)
    with pytest.raises(Conflict):
        await service.cancel(db_session, booking_id, patron)
    await db_session.rollback()

    reloaded = await service.get_booking(db_session, booking_id, patron)
    assert reloaded.status == BookingStatus.PENDING
    assert reloaded.payment_status == PaymentStatus.PAID
    assert await MoneyWalletService().get_balance(db_session, patron.user_id) == 70000


@pytest.mark.anyio
async def test_cancel_exactly_at_deadline_is_rejected(db_session, service, venue, patron, operator, clock):
    booking = await _book(service, db_session, patron, venue)
    await service.confirm_payment(db_session, booking.id, operator, use_money_wallet=False)
    await db_session.commit()

    clock.advance(seconds=120)
    with pytest.raises(Conflict):
        await service.cancel(db_session, booking.id, patron)


@pytest.mark.anyio
async def test_cancel_unpaid_or_by_stranger(db_session, service, venue, patron, member):
    booking = await _book(service, db_session, patron, venue)

    with pytest.raises(Forbidden):
        await service.cancel(db_session, booking.id, member)
    # Sin pago no hay ventana abierta
    with pytest.raises(Conflict):
        await service.cancel(db_session, booking.id, patron)


@pytest.mark.anyio
async def test_cancel_external_payment_issues_no_refund(db_session, service, venue, patron, operator):
    booking = await _book(service, db_session, patron, venue)
    await service.confirm_payment(db_session, booking.id, operator, use_money_wallet=False)
    await db_session.commit()

    await service.cancel(db_session, booking.id, patron)
    await db_session.commit()

    refunds = await MoneyWalletService().list_transactions(db_session, patron, kind=TransactionKind.REFUND)
    assert refunds == []


# ---------------------------------------------------------------------------
# Sesión
# ---------------------------------------------------------------------------

@pytest.mark.anyio
async def test_start_requires_payment(db_session, service, venue, patron):
    booking = await _book(service, db_session, patron, venue)

    with pytest.raises(InvalidState):
        await service.start_session(db_session, booking.id, patron)


@pytest.mark.anyio
async def test_session_remaining_and_lazy_expiry(db_session, service, venue, patron, operator, clock):
    booking = await _book(service, db_session, patron, venue, hours=1)
    await service.confirm_payment(db_session, booking.id, operator, use_money_wallet=False)
    await db_session.commit()

    started = await service.start_session(db_session, booking.id, patron)
    await db_session.commit()
    start_at = clock()
    assert started.status == BookingStatus.ACTIVE
    assert started.is_session_active is True
    assert remaining_minutes(started, clock()) == pytest.approx(60)

    clock.advance(minutes=25)
    again = await service.start_session(db_session, booking.id, patron)
    await db_session.commit()
    assert as_utc(again.session_start_time) == start_at
    assert remaining_minutes(again, clock()) == pytest.approx(35)

    clock.advance(minutes=40)
    assert remaining_minutes(again, clock()) == 0.0

    expired = await service.get_booking(db_session, booking.id, patron)
    await db_session.commit()
    assert expired.status == BookingStatus.COMPLETED
    assert expired.is_session_active is False
    assert as_utc(expired.session_end_time) == start_at + timedelta(hours=1)
    assert remaining_minutes(expired, clock()) is None


@pytest.mark.anyio
async def test_cancel_after_start_is_invalid_state(db_session, service, venue, patron, operator):
    booking = await _book(service, db_session, patron, venue)
    await service.confirm_payment(db_session, booking.id, operator, use_money_wallet=False)
    await service.start_session(db_session, booking.id, patron)
    await db_session.commit()

    with pytest.raises(InvalidState):
        await service.cancel(db_session, booking.id, patron)


@pytest.mark.anyio
async def test_complete_session_manually(db_session, service, venue, patron, operator, clock):
    booking = await _book(service, db_session, patron, venue, hours=2)
    await service.confirm_payment(db_session, booking.id, operator, use_money_wallet=False)
    await service.start_session(db_session, booking.id, patron)
    await db_session.commit()

    clock.advance(minutes=30)
    done = await service.complete_session(db_session, booking.id, operator)
    await db_session.commit()

    assert done.status == BookingStatus.COMPLETED
    assert as_utc(done.session_end_time) == clock()

    with pytest.raises(InvalidState):
        await service.complete_session(db_session, booking.id, patron)
    with pytest.raises(InvalidState):
        await service.start_session(db_session, booking.id, patron)


@pytest.mark.anyio
async def test_list_bookings_scoped_to_owner(db_session, service, venue, patron, member, operator):
    await _book(service, db_session, patron, venue)
    await _book(service, db_session, patron, venue, resource_number=5)

    mine = await service.list_bookings(db_session, patron)
    assert len(mine) == 2
    assert len(await service.list_bookings(db_session, operator, patron.user_id)) == 2
    assert await service.list_bookings(db_session, patron, status=BookingStatus.CANCELLED) == []
    with pytest.raises(Forbidden):
        await service.list_bookings(db_session, member, patron.user_id)


@pytest.mark.anyio
async def test_list_bookings_applies_lazy_expiry(db_session, service, venue, patron, operator, clock):
    booking = await _book(service, db_session, patron, venue, hours=1)
    await service.confirm_payment(db_session, booking.id, operator, use_money_wallet=False)
    await service.start_session(db_session, booking.id, patron)
    await db_session.commit()

    clock.advance(minutes=61)
    assert await service.list_bookings(db_session, patron, status=BookingStatus.ACTIVE) == []

    listed = await service.list_bookings(db_session, patron)
    await db_session.commit()
    assert [b.status for b in listed] == [BookingStatus.COMPLETED]
    assert listed[0].is_session_active is False


# ---------------------------------------------------------------------------
# Cancelación de reservas de miembro
# ---------------------------------------------------------------------------

@pytest.mark.anyio
async def test_member_cancel_takes_back_credited_minutes(db_session, service, venue, member, operator, clock):
    await _fund(db_session, member.user_id, 16000, operator)
    booking = await _book(service, db_session, member, venue, hours=2)
    await service.confirm_payment(db_session, booking.id, member)
    await db_session.commit()

    clock.advance(seconds=30)
    await service.cancel(db_session, booking.id, member)
    await db_session.commit()

    wallet = MoneyWalletService()
    assert await wallet.get_balance(db_session, member.user_id) == 16000
    minutes = await TimeWalletService().get_time_wallet(db_session, member.user_id, venue.id, member)
    assert minutes.remaining_minutes == pytest.approx(0)
    assert (await wallet.verify_ledger(db_session, member.user_id)).consistent


@pytest.mark.anyio
async def test_member_cancel_after_using_minutes_prorates_refund(db_session, service, venue, member, operator, clock):
    await _fund(db_session, member.user_id, 16000, operator)
    booking = await _book(service, db_session, member, venue, hours=2)
    await service.confirm_payment(db_session, booking.id, member)
    await db_session.commit()

    time_wallets = TimeWalletService(clock=clock)
    minutes = await time_wallets.get_time_wallet(db_session, member.user_id, venue.id, member)
    await time_wallets.activate(db_session, minutes.id, member)
    await db_session.commit()

    clock.advance(minutes=1)
    await service.cancel(db_session, booking.id, member)
    await db_session.commit()

    # 119 de 120 minutos recuperados → int(16000 * 119 / 120)
    wallet = MoneyWalletService()
    assert await wallet.get_balance(db_session, member.user_id) == 15866
    refunds = await wallet.list_transactions(db_session, member, kind=TransactionKind.REFUND)
    assert [r.amount for r in refunds] == [15866]
    assert minutes.remaining_minutes == pytest.approx(0)
    assert minutes.is_active is False
    assert (await wallet.verify_ledger(db_session, member.user_id)).consistent


@pytest.mark.anyio
async def test_member_cancel_keeps_minutes_from_earlier_bookings(db_session, service, venue, member, operator, clock):
    await _fund(db_session, member.user_id, 24000, operator)
    first = await _book(service, db_session, member, venue, hours=2)
    await service.confirm_payment(db_session, first.id, member)
    await db_session.commit()

    clock.advance(minutes=10)
    second = await _book(service, db_session, member, venue, hours=1)
    await service.confirm_payment(db_session, second.id, member)
    await db_session.commit()

    await service.cancel(db_session, second.id, member)
    await db_session.commit()

    minutes = await TimeWalletService().get_time_wallet(db_session, member.user_id, venue.id, member)
    assert minutes.remaining_minutes == pytest.approx(120)
    assert await MoneyWalletService().get_balance(db_session, member.user_id) == 8000

# Fin del archivo tests/modules/bookings/test_booking_service.py
