"""
Households API endpoints.

Creation and deactivation are admin-only; admins and managers may edit.
"""
import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from bluemoon.audit import AuditAction, record as audit_record
from bluemoon.db import models, schemas
from bluemoon.db.database import get_db
from bluemoon.db.repositories import households as households_repo
from bluemoon.db.repositories import residents as residents_repo
from bluemoon.api.deps import get_current_user, require_roles
from bluemoon.utils.ids import parse_id
from bluemoon.utils.role_permissions import ADMIN_ROLES, HOUSEHOLD_WRITE_ROLES

logger = logging.getLogger("bluemoon.api.households")

router = APIRouter(prefix="/api/households", tags=["households"], dependencies=[Depends(get_current_user)])


def load_household(db: Session, household_id: str) -> models.Household:
    parsed = parse_id(household_id)
    household = households_repo.get_household(db, parsed) if parsed else None
    if household is None:
        raise HTTPException(status_code=404, detail="Household not found")
    return household


@router.get("", response_model=List[schemas.Household])
def list_households(db: Session = Depends(get_db)):
    return households_repo.get_households(db)


@router.get("/{household_id}", response_model=schemas.HouseholdDetail)
def get_household(household_id: str, db: Session = Depends(get_db)):
    return load_household(db, household_id)


@router.get("/{household_id}/residents", response_model=List[schemas.Resident])
def list_household_residents(household_id: str, db: Session = Depends(get_db)):
    household = load_household(db, household_id)
    return residents_repo.get_residents(db, household_id=household.id)


@router.post("", response_model=schemas.Household, status_code=status.HTTP_201_CREATED)
def create_household(
    household: schemas.HouseholdCreate,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(require_roles(*ADMIN_ROLES)),
):
    if households_repo.get_household_by_code(db, household.household_code):
        logger.info("Duplicate household code rejected: %s", household.household_code)
        raise HTTPException(status_code=400, detail="Household with this code already exists")

    try:
        created = households_repo.create_household(db, household)
    except households_repo.DuplicateHouseholdCodeError:
        raise HTTPException(status_code=400, detail="Household with this code already exists")
    audit_record(
        db,
        action=AuditAction.HOUSEHOLD_CREATE,
        target_type="household",
        target_id=created.id,
        actor_user_id=current_user.id,
        metadata={"household_code": created.household_code},
    )
    return created


@router.put("/{household_id}", response_model=schemas.Household)
def update_household(
    household_id: str,
    household: schemas.HouseholdUpdate,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(require_roles(*HOUSEHOLD_WRITE_ROLES)),
):
    db_household = load_household(db, household_id)

    new_code = household.household_code
    if new_code is not None and new_code != db_household.household_code:
        if households_repo.get_household_by_code(db, new_code):
            raise HTTPException(status_code=400, detail="Household code already in use")

    if household.household_head is not None:
        if residents_repo.get_resident(db, household.household_head) is None:
            raise HTTPException(status_code=404, detail="Resident not found for household head")

    try:
        updated = households_repo.update_household(db, db_household, household)
    except households_repo.DuplicateHouseholdCodeError:
        raise HTTPException(status_code=400, detail="Household code already in use")
    audit_record(
        db,
        action=AuditAction.HOUSEHOLD_UPDATE,
        target_type="household",
        target_id=updated.id,
        actor_user_id=current_user.id,
        metadata={"fields": sorted(household.model_dump(exclude_unset=True, exclude_none=True))},
    )
    return households_repo.get_household(db, updated.id)


@router.delete("/{household_id}")
def deactivate_household(
    household_id: str,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(require_roles(*ADMIN_ROLES)),
):
    db_household = load_household(db, household_id)
    households_repo.deactivate_household(db, db_household)
    audit_record(
        db,
        action=AuditAction.HOUSEHOLD_DEACTIVATE,
        target_type="household",
        target_id=db_household.id,
        actor_user_id=current_user.id,
    )
    return {"message": "Household deactivated"}
