"""Repository dependencies (composition root).

Read routes get repositories on a plain session; write routes get them on a
session whose transaction commits when the request succeeds.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from taskdesk.infrastructure.persistence.database import get_db, get_db_transactional
from taskdesk.infrastructure.persistence.repositories import (
    ProfileRepository,
    TaskHistoryRepository,
    TaskRepository,
)


def get_profile_repo(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ProfileRepository:
    return ProfileRepository(db)


def get_profile_repo_for_write(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> ProfileRepository:
    return ProfileRepository(db)


def get_task_repo(db: Annotated[AsyncSession, Depends(get_db)]) -> TaskRepository:
    return TaskRepository(db)


def get_task_repo_for_write(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> TaskRepository:
    return TaskRepository(db)


def get_task_history_repo(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> TaskHistoryRepository:
    return TaskHistoryRepository(db)
