import uuid
from datetime import datetime, timedelta, UTC
from types import SimpleNamespace

from bluemoon.db import models
from bluemoon.services.statistics_service import (
    StatisticsService,
    household_payment_status,
    payments_by_day,
    revenue_by_type,
    sum_amounts,
)


def _payment(amount, fee_type="mandatory", day=1):
    fee = SimpleNamespace(type=fee_type) if fee_type else None
    return SimpleNamespace(amount=amount, fee=fee, payment_date=datetime(2025, 6, day, 9, tzinfo=UTC))


def test_sum_amounts_empty_and_values():
    assert sum_amounts([]) == 0
    assert sum_amounts([_payment(100), _payment(250.5)]) == 350.5


def test_revenue_by_type_buckets_unknown_as_other():
    totals = revenue_by_type([
        _payment(100, "parking"),
        _payment(200, "parking"),
        _payment(50, None),
        _payment(500, "mandatory"),
    ])
    assert totals == {"parking": 300, "other": 50, "mandatory": 500}


def test_payments_by_day_counts_and_sums():
    days = payments_by_day([_payment(100, day=3), _payment(50, day=3), _payment(10, day=15)])
    assert days == {3: {"count": 2, "amount": 150}, 15: {"count": 1, "amount": 10}}


def test_household_payment_status_paid_and_unpaid():
    household = SimpleNamespace(id=uuid.uuid4())
    fee_a, fee_b = uuid.uuid4(), uuid.uuid4()

    unpaid = household_payment_status(household, {fee_a, fee_b}, {fee_a})
    assert unpaid["status"] == "Unpaid"
    assert (unpaid["paid_count"], unpaid["unpaid_count"], unpaid["total_fees"]) == (1, 1, 2)

    paid = household_payment_status(household, {fee_a, fee_b}, {fee_a, fee_b})
    assert paid["status"] == "Paid"
    assert paid["unpaid_count"] == 0


def test_household_with_no_due_fees_is_paid():
    status = household_payment_status(SimpleNamespace(id=uuid.uuid4()), set(), set())
    assert status["status"] == "Paid"
    assert status["total_fees"] == 0


def test_dashboard_counts_only_active_rows(db, household_factory, resident_factory, fee_factory):
    now = datetime(2025, 6, 15, 12, tzinfo=UTC)
    live = household_factory()
    household_factory(active=False)
    resident = resident_factory(live)
    resident_factory(live, full_name="Tran Thi Binh", active=False)
    fee_factory()
    fee_factory(name="Old fee", active=False)
    db.add(models.TemporaryResidence(resident_id=resident.id, start_date=now - timedelta(days=1), end_date=now + timedelta(days=1)))
    db.add(models.TemporaryAbsence(resident_id=resident.id, start_date=now - timedelta(days=30), end_date=now - timedelta(days=2)))
    db.commit()

    counts = StatisticsService(db, now=now).dashboard()["counts"]
    assert counts == {
        "households": 1,
        "residents": 1,
        "fees": 1,
        "temporary_residences": 1,
        "temporary_absences": 0,
    }


def test_dashboard_monthly_revenue_is_inclusive(db, household_factory, fee_factory, payment_factory):
    now = datetime(2025, 6, 15, 12, tzinfo=UTC)
    fee_a = fee_factory(name="A")
    fee_b = fee_factory(name="B", type="parking")
    fee_c = fee_factory(name="C")
    fee_d = fee_factory(name="D")
    household = household_factory()
    payment_factory(fee_a, household, amount=100, payment_date=datetime(2025, 6, 1, 0, 0, tzinfo=UTC))
    payment_factory(fee_b, household, amount=200, payment_date=datetime(2025, 6, 30, 23, 59, 59, tzinfo=UTC))
    payment_factory(fee_c, household, amount=400, payment_date=datetime(2025, 5, 31, 23, 59, 59, tzinfo=UTC))
    payment_factory(fee_d, household, amount=800, payment_date=datetime(2025, 6, 10, tzinfo=UTC), is_refunded=True)

    financials = StatisticsService(db, now=now).dashboard()["financials"]
    assert financials["monthly_revenue"] == 300
    assert financials["revenue_by_type"] == {"mandatory": 500, "parking": 200}


def test_payment_status_uses_due_mandatory_fees(db, household_factory, fee_factory, payment_factory):
    now = datetime(2025, 6, 15, tzinfo=UTC)
    due = fee_factory(name="Due", mandatory=True, due_date=now - timedelta(days=5))
    fee_factory(name="Not yet due", mandatory=True, due_date=now + timedelta(days=5))
    fee_factory(name="Optional", type="voluntary", due_date=now - timedelta(days=5))
    paid_household = household_factory()
    unpaid_household = household_factory()
    household_factory(active=False)
    payment_factory(due, paid_household)

    statuses = {s["household"].id: s for s in StatisticsService(db, now=now).payment_status()}
    assert len(statuses) == 2
    assert statuses[paid_household.id]["status"] == "Paid"
    assert statuses[unpaid_household.id]["status"] == "Unpaid"
    assert statuses[unpaid_household.id]["total_fees"] == 1


def test_monthly_report_orders_ascending(db, household_factory, fee_factory, payment_factory):
    fee = fee_factory()
    other_fee = fee_factory(name="Parking", type="parking", amount=100000)
    household = household_factory()
    payment_factory(fee, household, payment_date=datetime(2025, 3, 20, tzinfo=UTC))
    payment_factory(other_fee, household, payment_date=datetime(2025, 3, 2, tzinfo=UTC))

    report = StatisticsService(db, now=datetime(2025, 6, 1, tzinfo=UTC)).monthly_report(2025, 3)
    assert report["period"]["year"] == 2025 and report["period"]["month"] == 3
    assert [p.amount for p in report["payments"]] == [100000, 500000]
    assert report["summary"]["payment_count"] == 2
    assert report["summary"]["totals_by_type"] == {"parking": 100000, "mandatory": 500000}
    assert set(report["payments_by_day"]) == {2, 20}
