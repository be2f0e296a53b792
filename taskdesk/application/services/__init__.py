"""Application services: access policy, identity resolution, metrics."""

from taskdesk.application.services.access_policy import (
    DenyReason,
    Operation,
    PolicyDecision,
    PolicyTarget,
    authorize,
    require,
)
from taskdesk.application.services.identity_service import IdentityService

__all__ = [
    "DenyReason",
    "IdentityService",
    "Operation",
    "PolicyDecision",
    "PolicyTarget",
    "authorize",
    "require",
]
