"""
Resident repository functions.
"""
from __future__ import annotations

import uuid
from typing import Optional
from sqlalchemy.orm import Session, joinedload

from bluemoon.db import models, schemas


def get_resident(db: Session, resident_id: uuid.UUID) -> Optional[models.Resident]:
    return (
        db.query(models.Resident)
        .options(joinedload(models.Resident.household))
        .filter(models.Resident.id == resident_id)
        .first()
    )


def get_residents(db: Session, household_id: Optional[uuid.UUID] = None, active: Optional[bool] = None):
    q = db.query(models.Resident).options(joinedload(models.Resident.household))
    if household_id is not None:
        q = q.filter(models.Resident.household_id == household_id)
    if active is not None:
        q = q.filter(models.Resident.active.is_(active))
    return q.order_by(models.Resident.created_at.desc()).all()


def count_active_residents(db: Session) -> int:
    return db.query(models.Resident).filter(models.Resident.active.is_(True)).count()


def create_resident(db: Session, resident: schemas.ResidentCreate) -> models.Resident:
    data = resident.model_dump()
    household_id = data.pop('household', None)
    db_resident = models.Resident(**data, household_id=household_id)
    db.add(db_resident)
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(db_resident)
    return db_resident


def update_resident(db: Session, db_resident: models.Resident, resident: schemas.ResidentUpdate) -> models.Resident:
    update_data = resident.model_dump(exclude_unset=True, exclude_none=True)
    if 'household' in update_data:
        db_resident.household_id = update_data.pop('household')
    for key, value in update_data.items():
        setattr(db_resident, key, value)
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(db_resident)
    return db_resident


def deactivate_resident(db: Session, db_resident: models.Resident) -> models.Resident:
    db_resident.active = False
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(db_resident)
    return db_resident
