"""Team metrics API (manager dashboard)."""

from typing import Annotated

from fastapi import APIRouter, Depends

from taskdesk.api.v1.dependencies import CurrentActor, get_metrics_service
from taskdesk.application.use_cases.analytics import MetricsService
from taskdesk.schemas.metrics import TeamMetricsResponse

router = APIRouter()


@router.get("/team", response_model=TeamMetricsResponse)
async def get_team_metrics(
    actor: CurrentActor,
    service: Annotated[MetricsService, Depends(get_metrics_service)],
):
    """Per-employee metrics ordered by full name plus totals (manager only)."""
    return TeamMetricsResponse.model_validate(await service.compute_team_metrics(actor))
