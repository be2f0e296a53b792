"""Base repository: shared get/create/update over one ORM model."""

from typing import Any, Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from taskdesk.infrastructure.persistence.database import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Generic ORM access for one model. Subclasses map rows to application DTOs.

    Writes flush but never commit; the session's transaction is owned by the
    caller (get_db_transactional or a script).
    """

    def __init__(self, db: AsyncSession, model: type[ModelType]) -> None:
        self.db = db
        self.model = model

    async def get_by_id(self, entity_id: str) -> ModelType | None:
        """Return a single record by primary key, or None."""
        model: Any = self.model
        result = await self.db.execute(select(self.model).where(model.id == entity_id))
        return result.scalar_one_or_none()

    async def create(self, obj: ModelType) -> ModelType:
        """Persist a new record and reload server-generated columns."""
        self.db.add(obj)
        await self.db.flush()
        await self.db.refresh(obj)
        return obj

    async def update(self, obj: ModelType, changes: dict[str, Any]) -> ModelType:
        """Apply changes to an attached record, flush and reload it."""
        for key, value in changes.items():
            if not hasattr(self.model, key):
                raise ValueError(f"{self.model.__name__} has no attribute {key!r}")
            setattr(obj, key, value)
        await self.db.flush()
        await self.db.refresh(obj)
        return obj
