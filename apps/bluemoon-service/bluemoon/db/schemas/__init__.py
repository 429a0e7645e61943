"""
Domain-split Pydantic schemas with a single aggregator.

Every schema speaks camelCase JSON (see `base.APIModel`) and accepts
snake_case field names when populated from Python.
"""

from .base import APIModel
from .users import UserBase, UserCreate, User, UserSummary, LoginRequest, LoginResponse
from .fees import FeeType, FeeBase, FeeCreate, FeeUpdate, Fee, FeeSummary
from .households import (
    ResidentSummary,
    HouseholdHeadDetail,
    HouseholdSummary,
    HouseholdBase,
    HouseholdCreate,
    HouseholdUpdate,
    Household,
    HouseholdDetail,
)
from .residents import ResidentBase, ResidentCreate, ResidentUpdate, Resident
from .payments import PaymentCreate, PaymentUpdate, PaymentRefund, Payment
from .residency import (
    TemporaryResidenceCreate,
    TemporaryResidence,
    TemporaryAbsenceCreate,
    TemporaryAbsence,
)
from .audits import AuditLogBase, AuditLogCreate, AuditLog
from .statistics import (
    DashboardCounts,
    DashboardFinancials,
    DashboardStats,
    HouseholdPaymentStatus,
    ReportPeriod,
    ReportSummary,
    DayTotals,
    MonthlyReport,
)

__all__ = [
    "APIModel",
    # Users
    "UserBase",
    "UserCreate",
    "User",
    "UserSummary",
    "LoginRequest",
    "LoginResponse",
    # Fees
    "FeeType",
    "FeeBase",
    "FeeCreate",
    "FeeUpdate",
    "Fee",
    "FeeSummary",
    # Households
    "ResidentSummary",
    "HouseholdHeadDetail",
    "HouseholdSummary",
    "HouseholdBase",
    "HouseholdCreate",
    "HouseholdUpdate",
    "Household",
    "HouseholdDetail",
    # Residents
    "ResidentBase",
    "ResidentCreate",
    "ResidentUpdate",
    "Resident",
    # Payments
    "PaymentCreate",
    "PaymentUpdate",
    "PaymentRefund",
    "Payment",
    # Residency
    "TemporaryResidenceCreate",
    "TemporaryResidence",
    "TemporaryAbsenceCreate",
    "TemporaryAbsence",
    # Audits
    "AuditLogBase",
    "AuditLogCreate",
    "AuditLog",
    # Statistics
    "DashboardCounts",
    "DashboardFinancials",
    "DashboardStats",
    "HouseholdPaymentStatus",
    "ReportPeriod",
    "ReportSummary",
    "DayTotals",
    "MonthlyReport",
]
