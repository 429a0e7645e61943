"""
Temporary residence and absence repository functions.

Both record kinds share the same shape, so the functions take the model
class and work for either.
"""
from __future__ import annotations

import uuid
from datetime import datetime
from typing import Optional, Type, Union
from sqlalchemy.orm import Session, joinedload

from bluemoon.db import models, schemas

ResidencyModel = Union[Type[models.TemporaryResidence], Type[models.TemporaryAbsence]]


def get_record(db: Session, model: ResidencyModel, record_id: uuid.UUID):
    return (
        db.query(model)
        .options(joinedload(model.resident))
        .filter(model.id == record_id)
        .first()
    )


def get_records(db: Session, model: ResidencyModel, resident_id: Optional[uuid.UUID] = None):
    q = db.query(model).options(joinedload(model.resident))
    if resident_id is not None:
        q = q.filter(model.resident_id == resident_id)
    return q.order_by(model.start_date.desc()).all()


def count_active_records(db: Session, model: ResidencyModel, now: datetime) -> int:
    """Records whose period contains ``now``."""
    return db.query(model).filter(model.start_date <= now, model.end_date >= now).count()


def create_record(
    db: Session,
    model: ResidencyModel,
    record: Union[schemas.TemporaryResidenceCreate, schemas.TemporaryAbsenceCreate],
):
    data = record.model_dump()
    resident_id = data.pop('resident')
    db_record = model(**data, resident_id=resident_id)
    db.add(db_record)
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    return get_record(db, model, db_record.id)


def delete_record(db: Session, db_record) -> None:
    db.delete(db_record)
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
