"""
Temporary residence and absence API endpoints.

Two routers over the same record shape; admins and managers write.
"""
from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from bluemoon.audit import AuditAction, record as audit_record
from bluemoon.db import models, schemas
from bluemoon.db.database import get_db
from bluemoon.db.repositories import residency as residency_repo
from bluemoon.db.repositories import residents as residents_repo
from bluemoon.api.deps import get_current_user, require_roles
from bluemoon.utils.ids import parse_id
from bluemoon.utils.role_permissions import RESIDENT_WRITE_ROLES

residences_router = APIRouter(
    prefix="/api/temporary-residences",
    tags=["temporary-residences"],
    dependencies=[Depends(get_current_user)],
)
absences_router = APIRouter(
    prefix="/api/temporary-absences",
    tags=["temporary-absences"],
    dependencies=[Depends(get_current_user)],
)


def _load_record(db: Session, model, record_id: str, label: str):
    parsed = parse_id(record_id)
    db_record = residency_repo.get_record(db, model, parsed) if parsed else None
    if db_record is None:
        raise HTTPException(status_code=404, detail=f"{label} not found")
    return db_record


def _ensure_resident(db: Session, resident_id) -> None:
    if residents_repo.get_resident(db, resident_id) is None:
        raise HTTPException(status_code=404, detail="Resident not found")


# Temporary residences

@residences_router.get("", response_model=List[schemas.TemporaryResidence])
def list_temporary_residences(db: Session = Depends(get_db)):
    return residency_repo.get_records(db, models.TemporaryResidence)


@residences_router.get("/{record_id}", response_model=schemas.TemporaryResidence)
def get_temporary_residence(record_id: str, db: Session = Depends(get_db)):
    return _load_record(db, models.TemporaryResidence, record_id, "Temporary residence")


@residences_router.post("", response_model=schemas.TemporaryResidence, status_code=status.HTTP_201_CREATED)
def create_temporary_residence(
    record: schemas.TemporaryResidenceCreate,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(require_roles(*RESIDENT_WRITE_ROLES)),
):
    _ensure_resident(db, record.resident)
    created = residency_repo.create_record(db, models.TemporaryResidence, record)
    audit_record(
        db,
        action=AuditAction.TEMPORARY_RESIDENCE_CREATE,
        target_type="temporary_residence",
        target_id=created.id,
        actor_user_id=current_user.id,
    )
    return residency_repo.get_record(db, models.TemporaryResidence, created.id)


@residences_router.delete("/{record_id}")
def delete_temporary_residence(
    record_id: str,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(require_roles(*RESIDENT_WRITE_ROLES)),
):
    db_record = _load_record(db, models.TemporaryResidence, record_id, "Temporary residence")
    target_id = db_record.id
    residency_repo.delete_record(db, db_record)
    audit_record(
        db,
        action=AuditAction.TEMPORARY_RESIDENCE_DELETE,
        target_type="temporary_residence",
        target_id=target_id,
        actor_user_id=current_user.id,
    )
    return {"message": "Temporary residence removed"}


# Temporary absences

@absences_router.get("", response_model=List[schemas.TemporaryAbsence])
def list_temporary_absences(db: Session = Depends(get_db)):
    return residency_repo.get_records(db, models.TemporaryAbsence)


@absences_router.get("/{record_id}", response_model=schemas.TemporaryAbsence)
def get_temporary_absence(record_id: str, db: Session = Depends(get_db)):
    return _load_record(db, models.TemporaryAbsence, record_id, "Temporary absence")


@absences_router.post("", response_model=schemas.TemporaryAbsence, status_code=status.HTTP_201_CREATED)
def create_temporary_absence(
    record: schemas.TemporaryAbsenceCreate,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(require_roles(*RESIDENT_WRITE_ROLES)),
):
    _ensure_resident(db, record.resident)
    created = residency_repo.create_record(db, models.TemporaryAbsence, record)
    audit_record(
        db,
        action=AuditAction.TEMPORARY_ABSENCE_CREATE,
        target_type="temporary_absence",
        target_id=created.id,
        actor_user_id=current_user.id,
    )
    return residency_repo.get_record(db, models.TemporaryAbsence, created.id)


@absences_router.delete("/{record_id}")
def delete_temporary_absence(
    record_id: str,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(require_roles(*RESIDENT_WRITE_ROLES)),
):
    db_record = _load_record(db, models.TemporaryAbsence, record_id, "Temporary absence")
    target_id = db_record.id
    residency_repo.delete_record(db, db_record)
    audit_record(
        db,
        action=AuditAction.TEMPORARY_ABSENCE_DELETE,
        target_type="temporary_absence",
        target_id=target_id,
        actor_user_id=current_user.id,
    )
    return {"message": "Temporary absence removed"}
