"""JWT access tokens: the token subject is the profile's user_id.

Uses taskdesk.core.config for secret, algorithm and default lifetime.
"""

from datetime import timedelta
from typing import Any, cast

from jose import JWTError, jwt

from taskdesk.core.config import get_settings
from taskdesk.shared.utils.datetime import utc_now


def create_access_token(
    data: dict[str, Any],
    expires_delta: timedelta | None = None,
) -> str:
    """Create a signed access token carrying data plus exp.

    Args:
        data: Claims to encode (sub, username, role).
        expires_delta: Optional TTL; else settings.access_token_expire_minutes.
    """
    settings = get_settings()
    to_encode = data.copy()
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.access_token_expire_minutes)
    to_encode["exp"] = utc_now() + expires_delta
    encoded = jwt.encode(
        to_encode,
        settings.secret_key.get_secret_value(),
        algorithm=settings.algorithm,
    )
    return cast(str, encoded)


def verify_token(token: str) -> dict[str, Any]:
    """Verify and decode a token; exp and sub are required.

    Raises:
        ValueError: Invalid signature, expired, or missing claims.
    """
    settings = get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.secret_key.get_secret_value(),
            algorithms=[settings.algorithm],
            options={"require_exp": True, "require_sub": True},
        )
    except JWTError as e:
        raise ValueError(f"Invalid token: {e!s}") from e
    if not payload.get("sub"):
        raise ValueError("Token missing required claim: sub")
    return payload


class TokenService:
    """ITokenService backed by python-jose."""

    def __init__(self, expires_delta: timedelta | None = None) -> None:
        self._expires_delta = expires_delta

    def create_access_token(self, data: dict[str, Any]) -> str:
        return create_access_token(data, self._expires_delta)

    def verify_token(self, token: str) -> dict[str, Any]:
        return verify_token(token)
