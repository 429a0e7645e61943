"""Business logic services package with public service helpers."""

from .statistics_service import (
    StatisticsService,
    sum_amounts,
    revenue_by_type,
    payments_by_day,
    household_payment_status,
)

__all__ = [
    "StatisticsService",
    "sum_amounts",
    "revenue_by_type",
    "payments_by_day",
    "household_payment_status",
]
