"""
Fee repository functions.

Fees are never removed; deactivation flips ``active`` so historical
payments keep their reference.
"""
from __future__ import annotations

import uuid
from datetime import datetime
from typing import Optional
from sqlalchemy.orm import Session

from bluemoon.db import models, schemas
from bluemoon.utils.search import LIKE_ESCAPE, contains_pattern


def get_fee(db: Session, fee_id: uuid.UUID) -> Optional[models.Fee]:
    return db.query(models.Fee).filter(models.Fee.id == fee_id).first()


def get_fees(db: Session):
    return db.query(models.Fee).order_by(models.Fee.created_at.desc()).all()


def get_active_fees_by_type(db: Session, fee_type: str):
    return (
        db.query(models.Fee)
        .filter(models.Fee.type == fee_type, models.Fee.active.is_(True))
        .order_by(models.Fee.created_at.desc())
        .all()
    )


def find_duplicate(db: Session, *, name: str, fee_type: str, due_date: Optional[datetime]) -> Optional[models.Fee]:
    """Return a fee with the same name, type and due date, if any.

    A missing due date only matches another missing due date.
    """
    q = db.query(models.Fee).filter(models.Fee.name == name, models.Fee.type == fee_type)
    if due_date is None:
        q = q.filter(models.Fee.due_date.is_(None))
    else:
        q = q.filter(models.Fee.due_date == due_date)
    return q.first()


def create_fee(db: Session, fee: schemas.FeeCreate) -> models.Fee:
    db_fee = models.Fee(**fee.model_dump())
    db.add(db_fee)
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(db_fee)
    return db_fee


def update_fee(db: Session, db_fee: models.Fee, fee: schemas.FeeUpdate) -> models.Fee:
    # Only fields present and non-null in the request overwrite stored values
    update_data = fee.model_dump(exclude_unset=True, exclude_none=True)
    for key, value in update_data.items():
        setattr(db_fee, key, value)
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(db_fee)
    return db_fee


def deactivate_fee(db: Session, db_fee: models.Fee) -> models.Fee:
    db_fee.active = False
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(db_fee)
    return db_fee


def count_active_fees(db: Session) -> int:
    return db.query(models.Fee).filter(models.Fee.active.is_(True)).count()


def get_due_mandatory_fees(db: Session, now: datetime):
    """Fees flagged mandatory, still active, whose due date has passed."""
    return (
        db.query(models.Fee)
        .filter(
            models.Fee.mandatory.is_(True),
            models.Fee.active.is_(True),
            models.Fee.due_date.isnot(None),
            models.Fee.due_date <= now,
        )
        .all()
    )


def find_fee_ids(db: Session, *, name: Optional[str] = None, fee_type: Optional[str] = None):
    """Resolve search criteria on fees to a list of ids."""
    q = db.query(models.Fee.id)
    if name:
        q = q.filter(models.Fee.name.ilike(contains_pattern(name), escape=LIKE_ESCAPE))
    if fee_type:
        q = q.filter(models.Fee.type == fee_type)
    return [row[0] for row in q.all()]
