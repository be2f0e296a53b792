"""Credential hashing and bearer tokens."""

from taskdesk.infrastructure.security.jwt import (
    TokenService,
    create_access_token,
    verify_token,
)
from taskdesk.infrastructure.security.password import get_password_hash, verify_password

__all__ = [
    "TokenService",
    "create_access_token",
    "get_password_hash",
    "verify_password",
    "verify_token",
]
