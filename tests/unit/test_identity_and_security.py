"""IdentityService, token and password hashing tests."""

from datetime import timedelta
from unittest.mock import AsyncMock, MagicMock

import pytest

from taskdesk.application.services.identity_service import IdentityService
from taskdesk.domain.enums import Role
from taskdesk.domain.exceptions import AuthenticationException
from taskdesk.infrastructure.security.jwt import (
    TokenService,
    create_access_token,
    verify_token,
)
from taskdesk.infrastructure.security.password import get_password_hash, verify_password
from tests.factories import make_profile

MANAGER = make_profile("m1", Role.MANAGER)


def test_password_hash_roundtrip_and_long_passwords() -> None:
    hashed = get_password_hash("correct horse")
    assert verify_password("correct horse", hashed)
    assert not verify_password("wrong horse", hashed)
    long_a = "a" * 100
    assert not verify_password("a" * 80, get_password_hash(long_a))


def test_verify_password_with_malformed_hash() -> None:
    assert not verify_password("anything", "not-a-bcrypt-hash")


def test_token_carries_claims() -> None:
    token = create_access_token({"sub": "user-m1", "role": "manager"})
    payload = verify_token(token)
    assert payload["sub"] == "user-m1"
    assert payload["role"] == "manager"
    assert "exp" in payload


def test_expired_token_rejected() -> None:
    token = create_access_token({"sub": "user-m1"}, expires_delta=timedelta(seconds=-5))
    with pytest.raises(ValueError):
        verify_token(token)


def test_token_without_subject_rejected() -> None:
    with pytest.raises(ValueError):
        verify_token(create_access_token({"username": "boss"}))


def test_tampered_token_rejected() -> None:
    token = TokenService().create_access_token({"sub": "user-m1"})
    with pytest.raises(ValueError):
        TokenService().verify_token(token[:-2] + ("A" if token[-2] != "A" else "B") + token[-1])


async def test_login_returns_token_with_role_claims() -> None:
    repo = AsyncMock()
    repo.authenticate = AsyncMock(return_value=MANAGER)
    tokens = MagicMock()
    tokens.create_access_token = MagicMock(return_value="tok")

    token = await IdentityService(repo, tokens).login("m1", "pw")

    assert token == "tok"
    tokens.create_access_token.assert_called_once_with(
        {"sub": "user-m1", "username": "m1", "role": "manager"}
    )


async def test_login_with_bad_credentials() -> None:
    repo = AsyncMock()
    repo.authenticate = AsyncMock(return_value=None)
    with pytest.raises(AuthenticationException):
        await IdentityService(repo, MagicMock()).login("m1", "bad")


async def test_resolve_missing_token() -> None:
    with pytest.raises(AuthenticationException) as exc_info:
        await IdentityService(AsyncMock(), MagicMock()).resolve(None)
    assert exc_info.value.message == "Not authenticated"


async def test_resolve_invalid_token() -> None:
    tokens = MagicMock()
    tokens.verify_token = MagicMock(side_effect=ValueError("bad"))
    with pytest.raises(AuthenticationException):
        await IdentityService(AsyncMock(), tokens).resolve("garbage")


async def test_resolve_unknown_subject() -> None:
    repo = AsyncMock()
    repo.get_by_user_id = AsyncMock(return_value=None)
    tokens = MagicMock()
    tokens.verify_token = MagicMock(return_value={"sub": "gone"})
    with pytest.raises(AuthenticationException):
        await IdentityService(repo, tokens).resolve("tok")


async def test_resolve_returns_inactive_profile() -> None:
    """Inactive profiles resolve; the access policy is what denies them."""
    inactive = make_profile("e1", is_active=False)
    repo = AsyncMock()
    repo.get_by_user_id = AsyncMock(return_value=inactive)
    tokens = MagicMock()
    tokens.verify_token = MagicMock(return_value={"sub": "user-e1"})

    assert await IdentityService(repo, tokens).resolve("tok") == inactive
    repo.get_by_user_id.assert_awaited_once_with("user-e1")
