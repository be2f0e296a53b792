"""Employee use cases: onboarding, listing, profile reads and manager edits."""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING

from taskdesk.application.dtos.profile import ProfileCreate, ProfileResult, ProfileUpdate
from taskdesk.application.services.access_policy import Operation, PolicyTarget, require
from taskdesk.domain.enums import Role
from taskdesk.domain.exceptions import ResourceNotFoundException, ValidationException
from taskdesk.shared.logging import get_logger

if TYPE_CHECKING:
    from taskdesk.application.interfaces.repositories import IProfileRepository

logger = get_logger(__name__)


def _require_text(value: str | None, field: str) -> str:
    if value is None or not value.strip():
        raise ValidationException(f"{field} is required", field=field)
    return value.strip()


class EmployeeService:
    """Profile operations for a resolved actor."""

    def __init__(self, profile_repo: IProfileRepository) -> None:
        self._profile_repo = profile_repo

    async def create_employee(
        self, actor: ProfileResult, data: ProfileCreate
    ) -> ProfileResult:
        """Onboard an employee profile with an initial credential (manager only).

        Raises:
            AuthorizationException: Actor is not an active manager.
            ValidationException: Missing username, password or full name.
            UsernameAlreadyExistsException: Username is taken.
        """
        require(actor, Operation.CREATE_EMPLOYEE, PolicyTarget.profile())
        data = replace(
            data,
            username=_require_text(data.username, "username"),
            full_name=_require_text(data.full_name, "full_name"),
            role=Role.EMPLOYEE,
        )
        if not data.password:
            raise ValidationException("password is required", field="password")
        profile = await self._profile_repo.create_profile(data)
        logger.info("Employee %s (%s) created by %s", profile.id, profile.username, actor.id)
        return profile

    async def list_employees(self, actor: ProfileResult) -> list[ProfileResult]:
        """Return employee profiles ordered by full name (manager only)."""
        require(actor, Operation.LIST_EMPLOYEES, PolicyTarget.profile())
        return await self._profile_repo.list_by_role(Role.EMPLOYEE)

    async def get_profile(self, actor: ProfileResult, profile_id: str) -> ProfileResult:
        """Return a profile (manager, or the profile owner)."""
        require(actor, Operation.READ_PROFILE, PolicyTarget.profile(profile_id))
        profile = await self._profile_repo.get_profile(profile_id)
        if profile is None:
            raise ResourceNotFoundException("profile", profile_id)
        return profile

    async def update_employee(
        self, actor: ProfileResult, profile_id: str, data: ProfileUpdate
    ) -> ProfileResult:
        """Change role, active flag or descriptive fields of a profile (manager only)."""
        require(actor, Operation.UPDATE_PROFILE, PolicyTarget.profile(profile_id))
        changes = data.changes()
        if not changes:
            raise ValidationException("No fields to update")
        for field in ("role", "is_active"):
            if field in changes and changes[field] is None:
                raise ValidationException(f"{field} cannot be cleared", field=field)
        if "full_name" in changes:
            changes["full_name"] = _require_text(changes["full_name"], "full_name")
        profile = await self._profile_repo.update_profile(profile_id, changes)
        if profile is None:
            raise ResourceNotFoundException("profile", profile_id)
        logger.info("Profile %s updated by %s: %s", profile_id, actor.id, sorted(changes))
        return profile
