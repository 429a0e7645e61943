"""
Audit logging helpers and enums.

Centralized helpers to persist normalized audit records with consistent
schema; includes convenience wrappers per target type.
"""
from __future__ import annotations
import logging
import uuid
from enum import Enum
from typing import Any, Optional, Dict
from sqlalchemy.orm import Session

from bluemoon.db import schemas
from bluemoon.db.repositories import audits as audits_repo

logger = logging.getLogger("bluemoon.audit")


class AuditAction(str, Enum):
    # Fee
    FEE_CREATE = "fee_create"
    FEE_UPDATE = "fee_update"
    FEE_DEACTIVATE = "fee_deactivate"
    # Household
    HOUSEHOLD_CREATE = "household_create"
    HOUSEHOLD_UPDATE = "household_update"
    HOUSEHOLD_DEACTIVATE = "household_deactivate"
    # Resident
    RESIDENT_CREATE = "resident_create"
    RESIDENT_UPDATE = "resident_update"
    RESIDENT_DEACTIVATE = "resident_deactivate"
    # Payment
    PAYMENT_CREATE = "payment_create"
    PAYMENT_UPDATE = "payment_update"
    PAYMENT_REFUND = "payment_refund"
    # Residency records
    TEMPORARY_RESIDENCE_CREATE = "temporary_residence_create"
    TEMPORARY_RESIDENCE_DELETE = "temporary_residence_delete"
    TEMPORARY_ABSENCE_CREATE = "temporary_absence_create"
    TEMPORARY_ABSENCE_DELETE = "temporary_absence_delete"
    # Users
    USER_REGISTER = "user_register"


class AuditStatus(str, Enum):
    SUCCESS = "success"
    FAILURE = "failure"


def log(
    db: Session,
    *,
    action: AuditAction | str,
    status: AuditStatus | str = AuditStatus.SUCCESS,
    target_type: str,
    target_id: Optional[uuid.UUID] = None,
    actor_user_id: Optional[uuid.UUID],
    metadata: Optional[Dict[str, Any]] = None,
):
    """Central audit logging helper.

    Ensures consistent schema and a single place for enrichment.
    """
    # Persist plain string values, not Enum reprs ('AuditAction.XYZ')
    action_value = action.value if isinstance(action, AuditAction) else str(action)
    status_value = status.value if isinstance(status, AuditStatus) else str(status)
    audit_log = schemas.AuditLogCreate(
        action_type=action_value,
        status=status_value,
        target_type=target_type,
        target_id=target_id,
        metadata=metadata or {},
    )
    return audits_repo.create_audit_log(db, audit_log=audit_log, actor_user_id=actor_user_id)


def record(
    db: Session,
    *,
    action: AuditAction,
    target_type: str,
    target_id: Optional[uuid.UUID],
    actor_user_id: Optional[uuid.UUID],
    metadata: Optional[Dict[str, Any]] = None,
) -> None:
    """Write an audit entry without letting a failure surface to the caller.

    The business write has already been committed when this runs.
    """
    try:
        log(
            db,
            action=action,
            target_type=target_type,
            target_id=target_id,
            actor_user_id=actor_user_id,
            metadata=metadata,
        )
    except Exception:
        db.rollback()
        logger.warning("Failed to write audit entry %s for %s %s", action.value, target_type, target_id, exc_info=True)


__all__ = ["AuditAction", "AuditStatus", "log", "record"]
