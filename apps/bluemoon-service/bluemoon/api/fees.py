"""
Fees API endpoints.

Listing and lookup are open to any signed-in user; writes are admin-only.
Deleting a fee only deactivates it.
"""
import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from bluemoon.audit import AuditAction, record as audit_record
from bluemoon.db import models, schemas
from bluemoon.db.database import get_db
from bluemoon.db.repositories import fees as fees_repo
from bluemoon.api.deps import get_current_user, require_roles
from bluemoon.utils.ids import parse_id
from bluemoon.utils.role_permissions import ADMIN_ROLES

logger = logging.getLogger("bluemoon.api.fees")

router = APIRouter(prefix="/api/fees", tags=["fees"], dependencies=[Depends(get_current_user)])


def load_fee(db: Session, fee_id: str) -> models.Fee:
    parsed = parse_id(fee_id)
    fee = fees_repo.get_fee(db, parsed) if parsed else None
    if fee is None:
        raise HTTPException(status_code=404, detail="Fee not found")
    return fee


@router.get("", response_model=List[schemas.Fee])
def list_fees(db: Session = Depends(get_db)):
    return fees_repo.get_fees(db)


@router.get("/type/{fee_type}", response_model=List[schemas.Fee])
def list_fees_by_type(fee_type: str, db: Session = Depends(get_db)):
    return fees_repo.get_active_fees_by_type(db, fee_type)


@router.get("/{fee_id}", response_model=schemas.Fee)
def get_fee(fee_id: str, db: Session = Depends(get_db)):
    return load_fee(db, fee_id)


@router.post("", response_model=schemas.Fee, status_code=status.HTTP_201_CREATED)
def create_fee(
    fee: schemas.FeeCreate,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(require_roles(*ADMIN_ROLES)),
):
    existing = fees_repo.find_duplicate(db, name=fee.name, fee_type=fee.type, due_date=fee.due_date)
    if existing:
        logger.info("Duplicate fee rejected: name=%s type=%s", fee.name, fee.type)
        raise HTTPException(status_code=400, detail="A fee with this name, type and due date already exists")

    created = fees_repo.create_fee(db, fee)
    audit_record(
        db,
        action=AuditAction.FEE_CREATE,
        target_type="fee",
        target_id=created.id,
        actor_user_id=current_user.id,
        metadata={"name": created.name},
    )
    return created


@router.put("/{fee_id}", response_model=schemas.Fee)
def update_fee(
    fee_id: str,
    fee: schemas.FeeUpdate,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(require_roles(*ADMIN_ROLES)),
):
    db_fee = load_fee(db, fee_id)
    updated = fees_repo.update_fee(db, db_fee, fee)
    audit_record(
        db,
        action=AuditAction.FEE_UPDATE,
        target_type="fee",
        target_id=updated.id,
        actor_user_id=current_user.id,
        metadata={"fields": sorted(fee.model_dump(exclude_unset=True, exclude_none=True))},
    )
    return updated


@router.delete("/{fee_id}")
def deactivate_fee(
    fee_id: str,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(require_roles(*ADMIN_ROLES)),
):
    db_fee = load_fee(db, fee_id)
    fees_repo.deactivate_fee(db, db_fee)
    audit_record(
        db,
        action=AuditAction.FEE_DEACTIVATE,
        target_type="fee",
        target_id=db_fee.id,
        actor_user_id=current_user.id,
    )
    return {"message": "Fee deactivated"}
