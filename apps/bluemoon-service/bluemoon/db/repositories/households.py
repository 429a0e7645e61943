"""
Household repository functions.

Households reference their head resident; listing joins the head so the
API can embed a summary without a second round trip.
"""
from __future__ import annotations

import logging
import uuid
from typing import Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from bluemoon.db import models, schemas
from bluemoon.utils.search import LIKE_ESCAPE, contains_pattern

logger = logging.getLogger("bluemoon.repositories.households")


class DuplicateHouseholdCodeError(Exception):
    """Another household already uses this code."""


def _commit_household(db: Session, db_household: models.Household) -> None:
    household_code = db_household.household_code
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        logger.info("Household code already taken: %s", household_code)
        raise DuplicateHouseholdCodeError(str(exc.orig)) from exc
    except Exception:
        db.rollback()
        raise


def get_household(db: Session, household_id: uuid.UUID) -> Optional[models.Household]:
    return (
        db.query(models.Household)
        .options(joinedload(models.Household.household_head))
        .filter(models.Household.id == household_id)
        .first()
    )


def get_household_by_code(db: Session, household_code: str) -> Optional[models.Household]:
    return db.query(models.Household).filter(models.Household.household_code == household_code).first()


def get_households(db: Session):
    return (
        db.query(models.Household)
        .options(joinedload(models.Household.household_head))
        .order_by(models.Household.created_at.desc())
        .all()
    )


def get_active_households(db: Session):
    return (
        db.query(models.Household)
        .filter(models.Household.active.is_(True))
        .order_by(models.Household.household_code.asc())
        .all()
    )


def count_active_households(db: Session) -> int:
    return db.query(models.Household).filter(models.Household.active.is_(True)).count()


def create_household(db: Session, household: schemas.HouseholdCreate) -> models.Household:
    db_household = models.Household(**household.model_dump())
    db.add(db_household)
    _commit_household(db, db_household)
    db.refresh(db_household)
    return db_household


def update_household(db: Session, db_household: models.Household, household: schemas.HouseholdUpdate) -> models.Household:
    update_data = household.model_dump(exclude_unset=True, exclude_none=True)
    if 'household_head' in update_data:
        db_household.household_head_id = update_data.pop('household_head')
    for key, value in update_data.items():
        setattr(db_household, key, value)
    _commit_household(db, db_household)
    db.refresh(db_household)
    return db_household


def deactivate_household(db: Session, db_household: models.Household) -> models.Household:
    db_household.active = False
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(db_household)
    return db_household


def find_household_ids(db: Session, *, household_code: Optional[str] = None, apartment_number: Optional[str] = None):
    """Resolve case-insensitive substring filters on households to ids."""
    q = db.query(models.Household.id)
    if household_code:
        q = q.filter(models.Household.household_code.ilike(contains_pattern(household_code), escape=LIKE_ESCAPE))
    if apartment_number:
        q = q.filter(models.Household.apartment_number.ilike(contains_pattern(apartment_number), escape=LIKE_ESCAPE))
    return [row[0] for row in q.all()]
