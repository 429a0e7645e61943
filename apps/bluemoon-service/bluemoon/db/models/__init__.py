"""
Domain-split SQLAlchemy models with a single aggregator.

Exposes `Base`, `now_utc`, and all ORM classes.
"""

from .base import Base, now_utc  # re-export

from .users import User
from .households import Household, Resident
from .fees import Fee
from .payments import Payment
from .residency import TemporaryResidence, TemporaryAbsence
from .audit import AuditLog

__all__ = [
    # base
    "Base",
    "now_utc",
    # users
    "User",
    # households
    "Household",
    "Resident",
    # billing
    "Fee",
    "Payment",
    # residency
    "TemporaryResidence",
    "TemporaryAbsence",
    # audit
    "AuditLog",
]
