"""
Role-based permission utilities for staff accounts.

Every user carries exactly one role. Routes declare which roles may call them
through the groups below, so changing who may do what happens here rather
than in each router.
"""

from typing import Dict, FrozenSet, Set
from enum import Enum


# Central role constants to ensure consistency across the codebase
ROLE_ADMIN = "admin"
ROLE_MANAGER = "manager"
ROLE_ACCOUNTANT = "accountant"
ROLE_STAFF = "staff"
ROLE_PERMISSIONS = {
    ROLE_ADMIN: {
        "can_manage_fees": True,
        "can_manage_households": True,
        "can_manage_residents": True,
        "can_collect_payments": True,
        "can_manage_users": True,
    },
    ROLE_MANAGER: {
        "can_manage_fees": False,
        "can_manage_households": True,
        "can_manage_residents": True,
        "can_collect_payments": False,
        "can_manage_users": False,
    },
    ROLE_ACCOUNTANT: {
        "can_manage_fees": False,
        "can_manage_households": False,
        "can_manage_residents": False,
        "can_collect_payments": True,
        "can_manage_users": False,
    },
    ROLE_STAFF: {
        "can_manage_fees": False,
        "can_manage_households": False,
        "can_manage_residents": False,
        "can_collect_payments": False,
        "can_manage_users": False,
    },
}

ALLOWED_ROLES = set(ROLE_PERMISSIONS.keys())

# Derived role groups
ADMIN_ROLES: FrozenSet[str] = frozenset({ROLE_ADMIN})
HOUSEHOLD_WRITE_ROLES: FrozenSet[str] = frozenset({ROLE_ADMIN, ROLE_MANAGER})
RESIDENT_WRITE_ROLES: FrozenSet[str] = frozenset({ROLE_ADMIN, ROLE_MANAGER})
PAYMENT_WRITE_ROLES: FrozenSet[str] = frozenset({ROLE_ADMIN, ROLE_ACCOUNTANT})


class RoleEnum(str, Enum):
    """Enum for user roles used in schemas and validation."""
    admin = ROLE_ADMIN
    manager = ROLE_MANAGER
    accountant = ROLE_ACCOUNTANT
    staff = ROLE_STAFF


def get_role_permissions(role: str) -> Dict[str, bool]:
    """
    Get the permissions for a given role.

    Args:
        role: The role name (admin, manager, accountant, staff)

    Returns:
        Dict of capability flags

    Raises:
        ValueError: If role is not recognized
    """
    if role not in ROLE_PERMISSIONS:
        raise ValueError(f"Unknown role: {role}. Allowed roles: {list(ROLE_PERMISSIONS.keys())}")

    return ROLE_PERMISSIONS[role].copy()


def get_allowed_roles() -> Set[str]:
    """Get the set of all allowed roles."""
    return ALLOWED_ROLES.copy()


def validate_role(role: str) -> None:
    """
    Validate that a role is allowed.

    Raises:
        ValueError: If role is not allowed
    """
    if role not in ALLOWED_ROLES:
        raise ValueError(f"Invalid role '{role}'. Allowed roles: {sorted(ALLOWED_ROLES)}")


def role_allowed(role: str, allowed: "Set[str] | FrozenSet[str]") -> bool:
    """Return True if the role is a member of the allow-list."""
    return role in allowed
