"""Employee API: onboarding, listing, profile reads/edits and per-employee metrics."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from taskdesk.api.v1.dependencies import (
    CurrentActor,
    get_employee_service,
    get_employee_service_for_write,
    get_metrics_service,
)
from taskdesk.application.dtos.profile import ProfileCreate, ProfileUpdate
from taskdesk.application.use_cases.analytics import MetricsService
from taskdesk.application.use_cases.employees import EmployeeService
from taskdesk.core.limiter import limit_writes
from taskdesk.schemas.metrics import EmployeeMetricsResponse
from taskdesk.schemas.profile import (
    EmployeeCreateRequest,
    ProfileResponse,
    ProfileUpdateRequest,
)

router = APIRouter()


@router.post("", response_model=ProfileResponse, status_code=201)
@limit_writes
async def create_employee(
    request: Request,
    body: EmployeeCreateRequest,
    actor: CurrentActor,
    service: Annotated[EmployeeService, Depends(get_employee_service_for_write)],
):
    """Create an employee profile with an initial password (manager only)."""
    profile = await service.create_employee(
        actor,
        ProfileCreate(
            username=body.username,
            password=body.password,
            full_name=body.full_name,
            title=body.title,
            position=body.position,
            details=body.details,
        ),
    )
    return ProfileResponse.model_validate(profile)


@router.get("", response_model=list[ProfileResponse])
async def list_employees(
    actor: CurrentActor,
    service: Annotated[EmployeeService, Depends(get_employee_service)],
):
    """List employee profiles ordered by full name (manager only)."""
    profiles = await service.list_employees(actor)
    return [ProfileResponse.model_validate(p) for p in profiles]


@router.get("/{profile_id}", response_model=ProfileResponse)
async def get_profile(
    profile_id: str,
    actor: CurrentActor,
    service: Annotated[EmployeeService, Depends(get_employee_service)],
):
    """Return a profile (manager, or the profile owner)."""
    return ProfileResponse.model_validate(await service.get_profile(actor, profile_id))


@router.patch("/{profile_id}", response_model=ProfileResponse)
@limit_writes
async def update_employee(
    request: Request,
    profile_id: str,
    body: ProfileUpdateRequest,
    actor: CurrentActor,
    service: Annotated[EmployeeService, Depends(get_employee_service_for_write)],
):
    """Change role, active flag or descriptive fields of a profile (manager only)."""
    profile = await service.update_employee(
        actor, profile_id, ProfileUpdate(**body.model_dump(exclude_unset=True))
    )
    return ProfileResponse.model_validate(profile)


@router.get("/{profile_id}/metrics", response_model=EmployeeMetricsResponse)
async def get_employee_metrics(
    profile_id: str,
    actor: CurrentActor,
    service: Annotated[MetricsService, Depends(get_metrics_service)],
):
    """Completion and on-time rates over one employee's tasks (manager, or that employee)."""
    result = await service.compute_employee_metrics(actor, profile_id)
    return EmployeeMetricsResponse.model_validate(result)
