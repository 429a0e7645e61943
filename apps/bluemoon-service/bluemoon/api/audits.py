"""
Audit log API endpoints.

Admins can page through the audit trail, newest first.
"""
from typing import Optional, List
import uuid

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from bluemoon.db import models, schemas
from bluemoon.db.database import get_db
from bluemoon.db.repositories import audits as audits_repo
from bluemoon.api.deps import require_roles
from bluemoon.utils.role_permissions import ADMIN_ROLES

router = APIRouter(prefix="/api/audits", tags=["audits"])


@router.get("", response_model=List[schemas.AuditLog])
def list_audit_logs(
    user_id: Optional[uuid.UUID] = Query(default=None, alias="userId"),
    action_type: Optional[str] = Query(default=None, alias="actionType"),
    target_type: Optional[str] = Query(default=None, alias="targetType"),
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=100, ge=1, le=500),
    db: Session = Depends(get_db),
    _admin: models.User = Depends(require_roles(*ADMIN_ROLES)),
):
    return audits_repo.get_audit_logs(
        db,
        user_id=user_id,
        action_type=action_type,
        target_type=target_type,
        skip=skip,
        limit=limit,
    )
