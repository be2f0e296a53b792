"""Identity service: credential login and bearer-token resolution to a profile."""

from __future__ import annotations

from typing import TYPE_CHECKING

from taskdesk.domain.exceptions import AuthenticationException
from taskdesk.shared.logging import get_logger

if TYPE_CHECKING:
    from taskdesk.application.dtos.profile import ProfileResult
    from taskdesk.application.interfaces.repositories import IProfileRepository
    from taskdesk.application.interfaces.services import ITokenService

logger = get_logger(__name__)


class IdentityService:
    """Maps credentials to profiles. Downstream code only ever sees the resolved ProfileResult."""

    def __init__(
        self, profile_repo: IProfileRepository, token_service: ITokenService
    ) -> None:
        self._profile_repo = profile_repo
        self._tokens = token_service

    async def login(self, username: str, password: str) -> str:
        """Return an access token for valid credentials of an active profile.

        Raises:
            AuthenticationException: Unknown username, wrong password or inactive profile.
        """
        profile = await self._profile_repo.authenticate(username, password)
        if profile is None:
            logger.info("Login failed for username %r", username)
            raise AuthenticationException("Invalid credentials")
        return self._tokens.create_access_token(
            {
                "sub": profile.user_id,
                "username": profile.username,
                "role": profile.role.value,
            }
        )

    async def resolve(self, token: str | None) -> ProfileResult:
        """Return the profile the token belongs to.

        Inactive profiles are still returned; the access policy denies them.

        Raises:
            AuthenticationException: Missing, invalid or expired token, or no profile
                for the token subject.
        """
        if not token:
            raise AuthenticationException("Not authenticated")
        try:
            payload = self._tokens.verify_token(token)
        except ValueError as e:
            raise AuthenticationException("Invalid or expired token") from e
        profile = await self._profile_repo.get_by_user_id(payload["sub"])
        if profile is None:
            raise AuthenticationException("No profile for this credential")
        return profile
