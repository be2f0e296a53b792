"""Service interfaces (ports) for the application layer.

Protocols define contracts for security services (DIP).
"""

from __future__ import annotations

from typing import Any, Protocol


class ITokenService(Protocol):
    """Protocol for access token issue/verification."""

    def create_access_token(self, data: dict[str, Any]) -> str:
        """Return a signed token carrying the given claims."""

    def verify_token(self, token: str) -> dict[str, Any]:
        """Return the token claims. Raises ValueError if invalid or expired."""
