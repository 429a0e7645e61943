"""
Residents API endpoints.

Admins and managers maintain resident records; deletion deactivates.
"""
import uuid
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from bluemoon.audit import AuditAction, record as audit_record
from bluemoon.db import models, schemas
from bluemoon.db.database import get_db
from bluemoon.db.repositories import households as households_repo
from bluemoon.db.repositories import residents as residents_repo
from bluemoon.api.deps import get_current_user, require_roles
from bluemoon.utils.ids import parse_id
from bluemoon.utils.role_permissions import RESIDENT_WRITE_ROLES

router = APIRouter(prefix="/api/residents", tags=["residents"], dependencies=[Depends(get_current_user)])


def load_resident(db: Session, resident_id: str) -> models.Resident:
    parsed = parse_id(resident_id)
    resident = residents_repo.get_resident(db, parsed) if parsed else None
    if resident is None:
        raise HTTPException(status_code=404, detail="Resident not found")
    return resident


def _ensure_household(db: Session, household_id: Optional[uuid.UUID]) -> None:
    if household_id is not None and households_repo.get_household(db, household_id) is None:
        raise HTTPException(status_code=404, detail="Household not found")


@router.get("", response_model=List[schemas.Resident])
def list_residents(
    household: Optional[str] = Query(default=None),
    active: Optional[bool] = Query(default=None),
    db: Session = Depends(get_db),
):
    household_id = None
    if household:
        household_id = parse_id(household)
        if household_id is None:
            return []
    return residents_repo.get_residents(db, household_id=household_id, active=active)


@router.get("/{resident_id}", response_model=schemas.Resident)
def get_resident(resident_id: str, db: Session = Depends(get_db)):
    return load_resident(db, resident_id)


@router.post("", response_model=schemas.Resident, status_code=status.HTTP_201_CREATED)
def create_resident(
    resident: schemas.ResidentCreate,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(require_roles(*RESIDENT_WRITE_ROLES)),
):
    _ensure_household(db, resident.household)
    created = residents_repo.create_resident(db, resident)
    audit_record(
        db,
        action=AuditAction.RESIDENT_CREATE,
        target_type="resident",
        target_id=created.id,
        actor_user_id=current_user.id,
        metadata={"full_name": created.full_name},
    )
    return residents_repo.get_resident(db, created.id)


@router.put("/{resident_id}", response_model=schemas.Resident)
def update_resident(
    resident_id: str,
    resident: schemas.ResidentUpdate,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(require_roles(*RESIDENT_WRITE_ROLES)),
):
    db_resident = load_resident(db, resident_id)
    _ensure_household(db, resident.household)
    updated = residents_repo.update_resident(db, db_resident, resident)
    audit_record(
        db,
        action=AuditAction.RESIDENT_UPDATE,
        target_type="resident",
        target_id=updated.id,
        actor_user_id=current_user.id,
        metadata={"fields": sorted(resident.model_dump(exclude_unset=True, exclude_none=True))},
    )
    return residents_repo.get_resident(db, updated.id)


@router.delete("/{resident_id}")
def deactivate_resident(
    resident_id: str,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(require_roles(*RESIDENT_WRITE_ROLES)),
):
    db_resident = load_resident(db, resident_id)
    residents_repo.deactivate_resident(db, db_resident)
    audit_record(
        db,
        action=AuditAction.RESIDENT_DEACTIVATE,
        target_type="resident",
        target_id=db_resident.id,
        actor_user_id=current_user.id,
    )
    return {"message": "Resident deactivated"}
