"""Identity dependencies: bearer token to resolved actor profile."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from taskdesk.api.v1.dependencies.db import get_profile_repo
from taskdesk.application.dtos.profile import ProfileResult
from taskdesk.application.services.identity_service import IdentityService
from taskdesk.infrastructure.persistence.repositories import ProfileRepository
from taskdesk.infrastructure.security.jwt import TokenService
from taskdesk.shared.context import set_current_actor

_http_bearer = HTTPBearer(auto_error=False)


def get_token_service() -> TokenService:
    return TokenService()


def get_identity_service(
    profile_repo: Annotated[ProfileRepository, Depends(get_profile_repo)],
    token_service: Annotated[TokenService, Depends(get_token_service)],
) -> IdentityService:
    return IdentityService(profile_repo, token_service)


async def get_current_actor(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_http_bearer)],
    identity: Annotated[IdentityService, Depends(get_identity_service)],
) -> ProfileResult:
    """Resolve the caller's profile; AuthenticationException (401) when it cannot be."""
    token = credentials.credentials if credentials else None
    actor = await identity.resolve(token)
    set_current_actor(actor.id)
    return actor


CurrentActor = Annotated[ProfileResult, Depends(get_current_actor)]
