"""Tests for the Supabase-backed auth service."""

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
from supabase_auth.types import User

from modules.auth.interfaces import IAuthService
from modules.auth.models import ProviderUser
from modules.auth.service import SupabaseAuthService, get_auth_service, reset_auth_service

PROVIDER_USER = {
    "id": "user-123",
    "email": "pastor@example.com",
    "role": "authenticated",
    "email_confirmed_at": "2026-01-01T00:00:00Z",
    "user_metadata": {"full_name": "Pastor Ade"},
    "app_metadata": {"provider": "email"},
}


@pytest.fixture
def client():
    return MagicMock()


@pytest.fixture
def service(client) -> SupabaseAuthService:
    return SupabaseAuthService(client)


class TestProviderUser:
    def test_maps_to_authenticated_user(self):
        user = ProviderUser.model_validate(PROVIDER_USER).to_authenticated_user()
        assert user.id == "user-123"
        assert user.role == "user"
        assert user.email_verified is True
        assert user.display_name == "Pastor Ade"

    def test_unconfirmed_email(self):
        user = ProviderUser(id="u", email=None).to_authenticated_user()
        assert user.email == ""
        assert user.email_verified is False


class TestSupabaseAuthService:
    def test_implements_interface(self, service):
        assert isinstance(service, IAuthService)

    @pytest.mark.asyncio
    async def test_valid_token(self, service, client):
        client.auth.get_user.return_value = SimpleNamespace(user=PROVIDER_USER)

        user = await service.get_user("good-token")

        assert user.id == "user-123"
        client.auth.get_user.assert_called_once_with("good-token")

    @pytest.mark.asyncio
    async def test_provider_model_is_dumped(self, service, client):
        provider_user = MagicMock()
        provider_user.model_dump.return_value = PROVIDER_USER
        client.auth.get_user.return_value = SimpleNamespace(user=provider_user)

        assert (await service.get_user("good-token")).email == "pastor@example.com"

    @pytest.mark.asyncio
    async def test_provider_error_is_unauthenticated(self, service, client):
        client.auth.get_user.side_effect = RuntimeError("invalid JWT")
        assert await service.get_user("bad-token") is None

    @pytest.mark.asyncio
    async def test_empty_result_is_unauthenticated(self, service, client):
        client.auth.get_user.return_value = SimpleNamespace(user=None)
        assert await service.get_user("token") is None

    @pytest.mark.asyncio
    async def test_empty_token(self, service, client):
        assert await service.get_user("") is None
        client.auth.get_user.assert_not_called()

    @pytest.mark.asyncio
    async def test_sdk_user_with_confirmation_timestamp(self, service, client):
        # supabase-py parses timestamps, so the dumped record carries datetimes
        sdk_user = User(
            id="user-456",
            app_metadata={"provider": "email"},
            user_metadata={"full_name": "Pastor Bisi"},
            aud="authenticated",
            created_at="2024-01-01T00:00:00Z",
            email="pastor@example.com",
            email_confirmed_at="2024-01-02T00:00:00Z",
        )
        client.auth.get_user.return_value = SimpleNamespace(user=sdk_user)

        user = await service.get_user("good-token")

        assert user is not None
        assert user.id == "user-456"
        assert user.email == "pastor@example.com"
        assert user.email_verified is True
        assert user.display_name == "Pastor Bisi"

    @pytest.mark.asyncio
    async def test_unreadable_user_record_is_unauthenticated(self, service, client):
        client.auth.get_user.return_value = SimpleNamespace(user={"email": "x@example.com"})
        assert await service.get_user("token") is None


def test_singleton():
    reset_auth_service()
    assert get_auth_service() is get_auth_service()
