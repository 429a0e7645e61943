"""
User repository functions.

Accounts are looked up by email (case-insensitive) for login and for the
identity header used by the auth dependency.
"""
from __future__ import annotations

import uuid
from typing import Optional
from sqlalchemy import func
from sqlalchemy.orm import Session

from bluemoon.db import models, schemas
from bluemoon.utils.passwords import hash_password, verify_password
from bluemoon.utils.role_permissions import ROLE_ADMIN, ROLE_STAFF, validate_role


def get_user(db: Session, user_id: uuid.UUID) -> Optional[models.User]:
    return db.query(models.User).filter(models.User.id == user_id).first()


def get_user_by_email(db: Session, email: str) -> Optional[models.User]:
    normalized = (email or "").strip().lower()
    return db.query(models.User).filter(func.lower(models.User.email) == normalized).first()


def get_users(db: Session, skip: int = 0, limit: int = 100):
    return db.query(models.User).order_by(models.User.created_at.asc()).offset(skip).limit(limit).all()


def get_first_admin(db: Session) -> Optional[models.User]:
    return (
        db.query(models.User)
        .filter(models.User.role == ROLE_ADMIN)
        .order_by(models.User.created_at.asc())
        .first()
    )


def get_any_user(db: Session) -> Optional[models.User]:
    return db.query(models.User).order_by(models.User.created_at.asc()).first()


def create_user(db: Session, user: schemas.UserCreate, role: str = ROLE_STAFF) -> models.User:
    validate_role(role)
    db_user = models.User(
        name=user.name.strip(),
        email=user.email.strip().lower(),
        password_hash=hash_password(user.password),
        role=role,
    )
    db.add(db_user)
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(db_user)
    return db_user


def authenticate(db: Session, email: str, password: str) -> Optional[models.User]:
    """Return the user when the password matches, otherwise None."""
    db_user = get_user_by_email(db, email)
    if db_user is None or not verify_password(password, db_user.password_hash):
        return None
    return db_user
