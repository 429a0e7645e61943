"""
API dependency helpers.

Resolves the acting user for a request and gates routes by role.

The identity dependency does not verify credentials. A trusted proxy may
name the user with ``X-Auth-Request-Email``; without it the request acts
as the first admin account (or any account when there is no admin).
"""
import logging
from typing import Optional

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.orm import Session

from bluemoon.db import models
from bluemoon.db.database import get_db
from bluemoon.db.repositories import users as users_repo
from bluemoon.utils.role_permissions import role_allowed

logger = logging.getLogger("bluemoon.auth")


def resolve_email_from_headers(
    x_auth_request_email: Optional[str] = None,
    x_forwarded_email: Optional[str] = None,
) -> Optional[str]:
    email = (x_auth_request_email or x_forwarded_email or "").strip().lower()
    return email or None


def get_current_user(
    db: Session = Depends(get_db),
    x_auth_request_email: Optional[str] = Header(default=None),
    x_forwarded_email: Optional[str] = Header(default=None),
) -> models.User:
    email = resolve_email_from_headers(x_auth_request_email, x_forwarded_email)
    if email:
        user = users_repo.get_user_by_email(db, email)
        if user is None:
            logger.info("Rejected request for unknown user %s", email)
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authorized")
        return user

    user = users_repo.get_first_admin(db) or users_repo.get_any_user(db)
    if user is None:
        logger.error("No users found; run scripts/setup_database.py to seed accounts")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="No users found in the system")
    return user


def require_roles(*roles: str):
    """Build a dependency that admits only users holding one of ``roles``."""
    allowed = frozenset(roles)

    def _check(current_user: models.User = Depends(get_current_user)) -> models.User:
        if not role_allowed(current_user.role, allowed):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Role {current_user.role} is not authorized to access this resource",
            )
        return current_user

    return _check
