"""Tests for shared/models.py."""

import pytest
from pydantic import ValidationError

from shared.models import AuthenticatedUser


class TestAuthenticatedUser:
    def test_defaults(self):
        user = AuthenticatedUser(id="user-1")

        assert user.email == ""
        assert user.role == "user"
        assert user.email_verified is False
        assert user.display_name is None

    def test_is_frozen(self):
        user = AuthenticatedUser(id="user-1", email="a@example.com")
        with pytest.raises(ValidationError):
            user.email = "b@example.com"

    def test_ignores_extra_fields(self):
        user = AuthenticatedUser(id="user-1", app_metadata={"provider": "email"})
        assert not hasattr(user, "app_metadata")
