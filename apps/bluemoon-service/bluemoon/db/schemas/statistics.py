from datetime import datetime
from typing import Dict, List

from .base import APIModel
from .households import HouseholdSummary
from .payments import Payment


class DashboardCounts(APIModel):
    households: int
    residents: int
    fees: int
    temporary_residences: int
    temporary_absences: int


class DashboardFinancials(APIModel):
    monthly_revenue: float
    revenue_by_type: Dict[str, float]


class DashboardStats(APIModel):
    counts: DashboardCounts
    financials: DashboardFinancials
    recent_payments: List[Payment]


class HouseholdPaymentStatus(APIModel):
    household: HouseholdSummary
    status: str
    paid_count: int
    unpaid_count: int
    total_fees: int


class ReportPeriod(APIModel):
    year: int
    month: int
    start_date: datetime
    end_date: datetime


class ReportSummary(APIModel):
    total_revenue: float
    payment_count: int
    totals_by_type: Dict[str, float]


class DayTotals(APIModel):
    count: int
    amount: float


class MonthlyReport(APIModel):
    period: ReportPeriod
    summary: ReportSummary
    payments_by_day: Dict[int, DayTotals]
    payments: List[Payment]
