"""
Tests for role capabilities.
"""

from types import SimpleNamespace

import pytest

from app.permissions_config.permissions import MANAGE_OPTIONS, get_role_capabilities, role_can, user_can


class TestRoleCapabilities:
    @pytest.mark.parametrize("role", ["admin", "superadmin"])
    def test_admins_can_manage_options(self, role):
        assert role_can(role, MANAGE_OPTIONS)

    @pytest.mark.parametrize("role", ["user", "editor", "manager"])
    def test_others_cannot_manage_options(self, role):
        assert not role_can(role, MANAGE_OPTIONS)

    def test_inherited_capabilities(self):
        assert "edit_posts" in get_role_capabilities("admin")
        assert "read" in get_role_capabilities("admin")

    def test_unknown_role(self):
        assert not role_can("ghost", "read")
        assert not role_can(None, "read")
        with pytest.raises(ValueError):
            get_role_capabilities("ghost")

    def test_user_can(self):
        admin = SimpleNamespace(role=SimpleNamespace(name="admin"))
        roleless = SimpleNamespace(role=None)

        assert user_can(admin, MANAGE_OPTIONS)
        assert not user_can(roleless, MANAGE_OPTIONS)
        assert not user_can(None, MANAGE_OPTIONS)
