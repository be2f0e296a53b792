"""DTOs for profile use cases (no dependency on ORM)."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from taskdesk.application.dtos.unset import UNSET, Unset, set_fields
from taskdesk.domain.enums import Role


@dataclass(frozen=True)
class ProfileResult:
    """Profile read-model. Immutable snapshot; used as the resolved actor. No password."""

    id: str
    user_id: str
    username: str
    full_name: str
    role: Role
    is_active: bool
    title: str | None = None
    position: str | None = None
    details: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def is_manager(self) -> bool:
        return self.role == Role.MANAGER


@dataclass(frozen=True)
class ProfileCreate:
    """Input for onboarding a profile (employee by default)."""

    username: str
    password: str
    full_name: str
    role: Role = Role.EMPLOYEE
    title: str | None = None
    position: str | None = None
    details: str | None = None


@dataclass(frozen=True)
class ProfileUpdate:
    """Manager edit of a profile. UNSET leaves a field unchanged; None clears it."""

    full_name: str | None | Unset = UNSET
    role: Role | None | Unset = UNSET
    is_active: bool | None | Unset = UNSET
    title: str | None | Unset = UNSET
    position: str | None | Unset = UNSET
    details: str | None | Unset = UNSET

    def changes(self) -> dict[str, object]:
        """Return the fields that were given, including explicit None."""
        return set_fields(self)
