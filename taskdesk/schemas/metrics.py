"""Performance metrics API schemas."""

from pydantic import BaseModel, ConfigDict, Field


class EmployeeMetricsResponse(BaseModel):
    """Completion statistics for one employee. Rates are integer percentages."""

    model_config = ConfigDict(from_attributes=True)

    employee_id: str
    total: int
    completed: int
    in_progress: int
    not_started: int
    overdue: int
    completion_rate: int = Field(..., ge=0, le=100)
    on_time_rate: int = Field(..., ge=0, le=100)


class TeamMetricsResponse(BaseModel):
    """Totals across all tasks plus one entry per employee."""

    model_config = ConfigDict(from_attributes=True)

    total_tasks: int
    completed_tasks: int
    completion_rate: int = Field(..., ge=0, le=100)
    on_time_rate: int = Field(..., ge=0, le=100)
    employees: list[EmployeeMetricsResponse] = Field(default_factory=list)
