from datetime import datetime, timedelta, UTC

from bluemoon.db import models


def _h(user):
    return {"X-Auth-Request-Email": user.email}


def test_dashboard_shape_and_monthly_revenue(client, db, staff, fee_factory, household_factory, resident_factory, payment_factory):
    now = datetime.now(UTC)
    month_start = now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
    household = household_factory()
    resident = resident_factory(household)
    mandatory = fee_factory(name="Management", amount=500000)
    parking = fee_factory(name="Parking", type="parking", amount=100000)
    donation = fee_factory(name="Donation", type="contribution", amount=50000)
    payment_factory(mandatory, household, payment_date=month_start)
    payment_factory(parking, household, payment_date=month_start - timedelta(seconds=1))
    payment_factory(donation, household, payment_date=now, is_refunded=True)
    db.add(models.TemporaryAbsence(resident_id=resident.id, start_date=now - timedelta(days=1), end_date=now + timedelta(days=1)))
    db.commit()

    r = client.get("/api/statistics/dashboard", headers=_h(staff))
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["counts"] == {
        "households": 1,
        "residents": 1,
        "fees": 3,
        "temporaryResidences": 0,
        "temporaryAbsences": 1,
    }
    assert body["financials"]["monthlyRevenue"] == 500000
    assert body["financials"]["revenueByType"] == {"mandatory": 500000, "parking": 100000}
    assert len(body["recentPayments"]) == 3
    assert body["recentPayments"][0]["fee"]["name"] == "Donation"


def test_recent_payments_capped_at_five(client, admin, fee_factory, household_factory, payment_factory):
    fee = fee_factory()
    for _ in range(7):
        payment_factory(fee, household_factory())
    r = client.get("/api/statistics/dashboard", headers=_h(admin))
    assert len(r.json()["recentPayments"]) == 5


def test_payment_status(client, admin, fee_factory, household_factory, payment_factory, past_due):
    due = fee_factory(name="Management", mandatory=True, due_date=past_due)
    paid = household_factory(household_code="HK001")
    unpaid = household_factory(household_code="HK002")
    payment_factory(due, paid)

    r = client.get("/api/statistics/payment-status", headers=_h(admin))
    assert r.status_code == 200
    by_code = {row["household"]["householdCode"]: row for row in r.json()}
    assert by_code["HK001"] == {
        "household": {"id": str(paid.id), "householdCode": "HK001", "apartmentNumber": paid.apartment_number},
        "status": "Paid",
        "paidCount": 1,
        "unpaidCount": 0,
        "totalFees": 1,
    }
    assert by_code["HK002"]["status"] == "Unpaid"
    assert by_code["HK002"]["unpaidCount"] == 1


def test_monthly_report(client, admin, fee_factory, household_factory, payment_factory):
    fee = fee_factory(amount=200)
    other = fee_factory(name="Parking", type="parking", amount=50)
    household = household_factory()
    payment_factory(fee, household, payment_date=datetime(2024, 2, 29, 23, 0, tzinfo=UTC))
    payment_factory(other, household, payment_date=datetime(2024, 2, 3, tzinfo=UTC))
    payment_factory(fee, household_factory(), payment_date=datetime(2024, 3, 1, tzinfo=UTC))

    r = client.get("/api/statistics/monthly-report", params={"year": 2024, "month": 2}, headers=_h(admin))
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["period"]["year"] == 2024
    assert body["period"]["month"] == 2
    assert body["summary"] == {"totalRevenue": 250, "paymentCount": 2, "totalsByType": {"mandatory": 200, "parking": 50}}
    assert body["paymentsByDay"] == {"3": {"count": 1, "amount": 50}, "29": {"count": 1, "amount": 200}}
    assert [p["amount"] for p in body["payments"]] == [50, 200]


def test_monthly_report_defaults_to_current_month(client, admin):
    r = client.get("/api/statistics/monthly-report", headers=_h(admin))
    assert r.status_code == 200
    now = datetime.now(UTC)
    assert (r.json()["period"]["year"], r.json()["period"]["month"]) == (now.year, now.month)
    assert r.json()["payments"] == []


def test_monthly_report_rejects_bad_month(client, admin):
    r = client.get("/api/statistics/monthly-report", params={"month": 13}, headers=_h(admin))
    assert r.status_code == 400
