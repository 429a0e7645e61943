from datetime import datetime, UTC

import pytest

from bluemoon.db import schemas
from bluemoon.db.repositories import payments as payments_repo


def test_create_defaults_amount_and_date(db, admin, fee_factory, household_factory):
    fee = fee_factory(amount=250000)
    household = household_factory()
    before = datetime.now(UTC)

    payment = payments_repo.create_payment(
        db,
        schemas.PaymentCreate(fee=fee.id, household=household.id),
        fee=fee,
        collector_id=admin.id,
    )
    assert payment.amount == 250000
    assert payment.collector.id == admin.id
    assert payment.is_refunded is False
    assert payment.payment_date.replace(tzinfo=UTC) >= before.replace(microsecond=0)


def test_unique_index_rejects_second_live_payment(db, fee_factory, household_factory):
    fee = fee_factory()
    household = household_factory()
    payload = schemas.PaymentCreate(fee=fee.id, household=household.id)
    payments_repo.create_payment(db, payload, fee=fee, collector_id=None)

    with pytest.raises(payments_repo.DuplicatePaymentError):
        payments_repo.create_payment(db, payload, fee=fee, collector_id=None)
    # Session is usable after the rollback
    assert len(payments_repo.get_payments(db)) == 1


def test_refund_frees_the_pair(db, admin, fee_factory, household_factory):
    fee = fee_factory()
    household = household_factory()
    payload = schemas.PaymentCreate(fee=fee.id, household=household.id)
    first = payments_repo.create_payment(db, payload, fee=fee, collector_id=None)

    refunded = payments_repo.refund_payment(db, first, reason=None, refunded_by_id=admin.id)
    assert refunded.is_refunded is True
    assert refunded.refund_reason == payments_repo.DEFAULT_REFUND_REASON
    assert refunded.refunded_by.id == admin.id
    assert refunded.refund_date is not None

    second = payments_repo.create_payment(db, payload, fee=fee, collector_id=None)
    assert second.id != first.id
    assert payments_repo.get_live_payment(db, fee.id, household.id).id == second.id


def test_update_merges_only_present_fields(db, fee_factory, household_factory, payment_factory):
    payment = payment_factory(fee_factory(), household_factory(), payer_name="Le Van Cuong", note="cash")

    updated = payments_repo.update_payment(
        db, payment, schemas.PaymentUpdate(note="bank transfer"), actor_id=None
    )
    assert updated.note == "bank transfer"
    assert updated.payer_name == "Le Van Cuong"
    assert updated.is_refunded is False


def test_update_with_refund_flag_stamps_refund(db, accountant, fee_factory, household_factory, payment_factory):
    payment = payment_factory(fee_factory(), household_factory())
    updated = payments_repo.update_payment(
        db,
        payment,
        schemas.PaymentUpdate(is_refunded=True, refund_reason="Duplicate receipt"),
        actor_id=accountant.id,
    )
    assert updated.is_refunded is True
    assert updated.refund_reason == "Duplicate receipt"
    assert updated.refunded_by.id == accountant.id


def test_search_filters_combine(db, fee_factory, household_factory, payment_factory):
    fee = fee_factory()
    parking = fee_factory(name="Parking", type="parking", amount=100000)
    household = household_factory()
    payment_factory(fee, household, payer_name="Pham Thi Dung", payment_date=datetime(2025, 1, 10, tzinfo=UTC))
    payment_factory(parking, household, payer_name="Hoang Van Hai", payment_date=datetime(2025, 2, 10, tzinfo=UTC))

    assert len(payments_repo.search_payments(db)) == 2
    by_name = payments_repo.search_payments(db, payer_name="thi dung")
    assert [p.fee_id for p in by_name] == [fee.id]
    by_amount = payments_repo.search_payments(db, min_amount=200000)
    assert [p.fee_id for p in by_amount] == [fee.id]
    by_date = payments_repo.search_payments(db, start_date=datetime(2025, 2, 1, tzinfo=UTC))
    assert [p.fee_id for p in by_date] == [parking.id]
    assert payments_repo.search_payments(db, fee_ids=[]) == []


def test_search_payer_name_matches_wildcards_literally(db, fee_factory, household_factory, payment_factory):
    fee = fee_factory()
    literal = payment_factory(fee, household_factory(), payer_name="Tran_Binh")
    payment_factory(fee_factory(name="Other"), household_factory(), payer_name="TranXBinh")

    results = payments_repo.search_payments(db, payer_name="tran_b")
    assert [p.id for p in results] == [literal.id]
