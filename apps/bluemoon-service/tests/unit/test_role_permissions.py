import pytest
from bluemoon.utils.role_permissions import (
    get_role_permissions,
    validate_role,
    get_allowed_roles,
    role_allowed,
    RoleEnum,
    ROLE_PERMISSIONS,
    ADMIN_ROLES,
    HOUSEHOLD_WRITE_ROLES,
    PAYMENT_WRITE_ROLES,
)


class TestRolePermissions:
    """Unit tests for the role-based permission tables."""

    def test_get_role_permissions_admin(self):
        """Admins hold every capability."""
        permissions = get_role_permissions("admin")
        assert all(permissions.values())

    def test_get_role_permissions_staff(self):
        """Staff accounts are read-only."""
        permissions = get_role_permissions("staff")
        assert not any(permissions.values())

    def test_get_role_permissions_accountant(self):
        """Accountants collect payments but do not manage households."""
        permissions = get_role_permissions("accountant")
        assert permissions["can_collect_payments"] is True
        assert permissions["can_manage_households"] is False

    def test_get_role_permissions_invalid_role(self):
        """Unknown roles raise ValueError."""
        with pytest.raises(ValueError, match="Unknown role: janitor"):
            get_role_permissions("janitor")

    def test_get_role_permissions_returns_copy(self):
        """Mutating the returned dict leaves the table untouched."""
        permissions = get_role_permissions("manager")
        permissions["can_manage_fees"] = True
        assert ROLE_PERMISSIONS["manager"]["can_manage_fees"] is False

    def test_validate_role(self):
        """Every enum member validates; anything else is rejected."""
        for role in RoleEnum:
            validate_role(role.value)
        with pytest.raises(ValueError, match="Invalid role 'owner'"):
            validate_role("owner")

    def test_allowed_roles_match_enum(self):
        assert get_allowed_roles() == {r.value for r in RoleEnum}

    def test_role_groups(self):
        assert role_allowed("admin", ADMIN_ROLES)
        assert not role_allowed("manager", ADMIN_ROLES)
        assert role_allowed("manager", HOUSEHOLD_WRITE_ROLES)
        assert role_allowed("accountant", PAYMENT_WRITE_ROLES)
        assert not role_allowed("staff", PAYMENT_WRITE_ROLES)
