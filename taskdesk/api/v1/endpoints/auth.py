"""Auth API: credential login and the caller's own profile."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from taskdesk.api.v1.dependencies import CurrentActor, get_identity_service
from taskdesk.application.services.identity_service import IdentityService
from taskdesk.core.limiter import limit_auth
from taskdesk.schemas.auth import LoginRequest, TokenResponse
from taskdesk.schemas.profile import ProfileResponse

router = APIRouter()


@router.post("/login", response_model=TokenResponse)
@limit_auth
async def login(
    request: Request,
    body: LoginRequest,
    identity: Annotated[IdentityService, Depends(get_identity_service)],
):
    """Exchange username and password for a bearer token. Inactive profiles are refused."""
    token = await identity.login(body.username, body.password)
    return TokenResponse(access_token=token)


@router.get("/me", response_model=ProfileResponse)
async def get_me(actor: CurrentActor):
    """Return the profile the bearer token resolves to (including inactive ones)."""
    return ProfileResponse.model_validate(actor)
