"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags.
"""

from fastapi import APIRouter

from taskdesk.api.v1.endpoints import auth, employees, metrics, tasks

api_router = APIRouter()

api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(employees.router, prefix="/employees", tags=["employees"])
api_router.include_router(tasks.router, prefix="/tasks", tags=["tasks"])
api_router.include_router(metrics.router, prefix="/metrics", tags=["metrics"])
