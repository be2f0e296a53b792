"""Profile and employee API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from taskdesk.domain.enums import Role


class EmployeeCreateRequest(BaseModel):
    """Request body for onboarding an employee (manager only)."""

    username: str = Field(..., min_length=1, max_length=128)
    password: str = Field(..., min_length=8, description="Initial password (min 8 characters)")
    full_name: str = Field(..., min_length=1, max_length=255)
    title: str | None = Field(default=None, max_length=255)
    position: str | None = Field(default=None, max_length=255)
    details: str | None = None


class ProfileUpdateRequest(BaseModel):
    """Request body for a manager edit of a profile (partial)."""

    full_name: str | None = Field(default=None, min_length=1, max_length=255)
    role: Role | None = None
    is_active: bool | None = None
    title: str | None = Field(default=None, max_length=255)
    position: str | None = Field(default=None, max_length=255)
    details: str | None = None


class ProfileResponse(BaseModel):
    """Profile response (no credential)."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    username: str
    full_name: str
    role: Role
    is_active: bool
    title: str | None = None
    position: str | None = None
    details: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
