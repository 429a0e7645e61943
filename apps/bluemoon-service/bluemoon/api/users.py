"""
Users API endpoints.

Registration and login are public; the profile needs a resolved user and
the account list is admin-only.
"""
import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from bluemoon.audit import AuditAction, record as audit_record
from bluemoon.db import models, schemas
from bluemoon.db.database import get_db
from bluemoon.db.repositories import users as users_repo
from bluemoon.api.deps import get_current_user, require_roles
from bluemoon.utils.passwords import generate_session_token
from bluemoon.utils.role_permissions import ADMIN_ROLES

logger = logging.getLogger("bluemoon.api.users")

router = APIRouter(prefix="/api/users", tags=["users"])


@router.post("", response_model=schemas.LoginResponse, status_code=status.HTTP_201_CREATED)
def register_user(user: schemas.UserCreate, db: Session = Depends(get_db)):
    if users_repo.get_user_by_email(db, user.email):
        raise HTTPException(status_code=400, detail="User already exists")

    created = users_repo.create_user(db, user)
    audit_record(
        db,
        action=AuditAction.USER_REGISTER,
        target_type="user",
        target_id=created.id,
        actor_user_id=created.id,
        metadata={"email": created.email},
    )
    profile = schemas.User.model_validate(created).model_dump()
    return {**profile, "token": generate_session_token()}


@router.post("/login", response_model=schemas.LoginResponse)
def login(credentials: schemas.LoginRequest, db: Session = Depends(get_db)):
    user = users_repo.authenticate(db, credentials.email, credentials.password)
    if user is None:
        logger.info("Failed login for %s", credentials.email)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid email or password")
    profile = schemas.User.model_validate(user).model_dump()
    return {**profile, "token": generate_session_token()}


@router.get("/profile", response_model=schemas.User)
def get_profile(current_user: models.User = Depends(get_current_user)):
    return current_user


@router.get("", response_model=List[schemas.User])
def list_users(
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db),
    _admin: models.User = Depends(require_roles(*ADMIN_ROLES)),
):
    return users_repo.get_users(db, skip=skip, limit=limit)
