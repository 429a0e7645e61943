"""
Statistics service: dashboard figures, payment status and monthly reports.

Queries go through the repositories; the aggregation helpers below are pure
functions over already-fetched rows so they can be tested without a database.
"""

import logging
from datetime import datetime, UTC
from typing import Any, Dict, Iterable, List, Optional, Set

from sqlalchemy.orm import Session

from bluemoon.db import models
from bluemoon.db.repositories import fees as fees_repo
from bluemoon.db.repositories import households as households_repo
from bluemoon.db.repositories import payments as payments_repo
from bluemoon.db.repositories import residency as residency_repo
from bluemoon.db.repositories import residents as residents_repo
from bluemoon.utils.periods import as_utc, current_month_window, month_window

logger = logging.getLogger("bluemoon.services.statistics")

UNKNOWN_FEE_TYPE = "other"
RECENT_PAYMENTS_LIMIT = 5


def sum_amounts(payments: Iterable[models.Payment]) -> float:
    return float(sum(p.amount or 0 for p in payments))


def revenue_by_type(payments: Iterable[models.Payment]) -> Dict[str, float]:
    """Bucket payment amounts by fee type; payments without a fee land in 'other'."""
    totals: Dict[str, float] = {}
    for payment in payments:
        fee_type = payment.fee.type if payment.fee is not None and payment.fee.type else UNKNOWN_FEE_TYPE
        totals[fee_type] = totals.get(fee_type, 0.0) + float(payment.amount or 0)
    return totals


def payments_by_day(payments: Iterable[models.Payment]) -> Dict[int, Dict[str, Any]]:
    """Count and sum payments per day of month, in the order days first appear."""
    days: Dict[int, Dict[str, Any]] = {}
    for payment in payments:
        day = as_utc(payment.payment_date).day
        bucket = days.setdefault(day, {"count": 0, "amount": 0.0})
        bucket["count"] += 1
        bucket["amount"] += float(payment.amount or 0)
    return days


def household_payment_status(household: models.Household, due_fee_ids: Set, paid_fee_ids: Set) -> Dict[str, Any]:
    """Status of one household against the set of due mandatory fees."""
    paid = due_fee_ids & paid_fee_ids
    unpaid = due_fee_ids - paid_fee_ids
    return {
        "household": household,
        "status": "Paid" if not unpaid else "Unpaid",
        "paid_count": len(paid),
        "unpaid_count": len(unpaid),
        "total_fees": len(due_fee_ids),
    }


class StatisticsService:
    """Read-only aggregation over households, fees and payments."""

    def __init__(self, db: Session, now: Optional[datetime] = None):
        self.db = db
        self.now = now or datetime.now(UTC)

    def dashboard(self) -> Dict[str, Any]:
        counts = {
            "households": households_repo.count_active_households(self.db),
            "residents": residents_repo.count_active_residents(self.db),
            "fees": fees_repo.count_active_fees(self.db),
            "temporary_residences": residency_repo.count_active_records(self.db, models.TemporaryResidence, self.now),
            "temporary_absences": residency_repo.count_active_records(self.db, models.TemporaryAbsence, self.now),
        }

        month_start, month_end = current_month_window(self.now)
        monthly = payments_repo.get_live_payments(self.db, start=month_start, end=month_end)
        all_live = payments_repo.get_live_payments(self.db)

        return {
            "counts": counts,
            "financials": {
                "monthly_revenue": sum_amounts(monthly),
                "revenue_by_type": revenue_by_type(all_live),
            },
            "recent_payments": payments_repo.get_recent_payments(self.db, limit=RECENT_PAYMENTS_LIMIT),
        }

    def payment_status(self) -> List[Dict[str, Any]]:
        due_fees = fees_repo.get_due_mandatory_fees(self.db, self.now)
        due_fee_ids = {fee.id for fee in due_fees}
        paid_by_household: Dict[Any, Set] = {}
        for payment in payments_repo.get_live_payments_for_fees(self.db, due_fee_ids):
            paid_by_household.setdefault(payment.household_id, set()).add(payment.fee_id)

        return [
            household_payment_status(household, due_fee_ids, paid_by_household.get(household.id, set()))
            for household in households_repo.get_active_households(self.db)
        ]

    def monthly_report(self, year: Optional[int] = None, month: Optional[int] = None) -> Dict[str, Any]:
        year = year or self.now.year
        month = month or self.now.month
        start, end = month_window(year, month)
        payments = payments_repo.get_live_payments(self.db, start=start, end=end)
        logger.debug("Monthly report %04d-%02d covers %d payments", year, month, len(payments))

        return {
            "period": {"year": year, "month": month, "start_date": start, "end_date": end},
            "summary": {
                "total_revenue": sum_amounts(payments),
                "payment_count": len(payments),
                "totals_by_type": revenue_by_type(payments),
            },
            "payments_by_day": payments_by_day(payments),
            "payments": payments,
        }
