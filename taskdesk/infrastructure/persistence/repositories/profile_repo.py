"""Profile repository: identity records and credential checks. Returns application DTOs."""

from __future__ import annotations

import asyncio
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from taskdesk.application.dtos.profile import ProfileCreate, ProfileResult
from taskdesk.domain.enums import Role
from taskdesk.domain.exceptions import UsernameAlreadyExistsException
from taskdesk.infrastructure.persistence.models.profile import Profile
from taskdesk.infrastructure.persistence.repositories.base import BaseRepository
from taskdesk.infrastructure.security.password import get_password_hash, verify_password
from taskdesk.shared.utils.datetime import ensure_utc

# Compared against when the username is unknown so both paths cost one bcrypt check.
_dummy_hash_cache: str | None = None


async def _get_dummy_hash() -> str:
    global _dummy_hash_cache
    if _dummy_hash_cache is None:
        _dummy_hash_cache = await asyncio.to_thread(
            get_password_hash, "not-a-real-password"
        )
    return _dummy_hash_cache


def _profile_to_result(p: Profile) -> ProfileResult:
    """Map ORM Profile to ProfileResult (no password hash)."""
    return ProfileResult(
        id=p.id,
        user_id=p.user_id,
        username=p.username,
        full_name=p.full_name,
        role=Role(p.role),
        is_active=p.is_active,
        title=p.title,
        position=p.position,
        details=p.details,
        created_at=ensure_utc(p.created_at),
        updated_at=ensure_utc(p.updated_at),
    )


class ProfileRepository(BaseRepository[Profile]):
    """Profile repository. authenticate, create_profile, update_profile, list_by_role."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Profile)

    async def get_profile(self, profile_id: str) -> ProfileResult | None:
        profile = await self.get_by_id(profile_id)
        return _profile_to_result(profile) if profile else None

    async def get_by_user_id(self, user_id: str) -> ProfileResult | None:
        result = await self.db.execute(select(Profile).where(Profile.user_id == user_id))
        profile = result.scalar_one_or_none()
        return _profile_to_result(profile) if profile else None

    async def get_by_username(self, username: str) -> ProfileResult | None:
        result = await self.db.execute(
            select(Profile).where(Profile.username == username)
        )
        profile = result.scalar_one_or_none()
        return _profile_to_result(profile) if profile else None

    async def authenticate(self, username: str, password: str) -> ProfileResult | None:
        result = await self.db.execute(
            select(Profile).where(Profile.username == username)
        )
        profile = result.scalar_one_or_none()
        if profile is None:
            dummy_hash = await _get_dummy_hash()
            await asyncio.to_thread(verify_password, password, dummy_hash)
            return None
        if not await asyncio.to_thread(
            verify_password, password, profile.hashed_password
        ):
            return None
        if not profile.is_active:
            return None
        return _profile_to_result(profile)

    async def create_profile(self, data: ProfileCreate) -> ProfileResult:
        """Create profile; raise UsernameAlreadyExistsException on unique violation."""
        if await self.get_by_username(data.username) is not None:
            raise UsernameAlreadyExistsException(data.username)
        hashed = await asyncio.to_thread(get_password_hash, data.password)
        profile = Profile(
            username=data.username,
            full_name=data.full_name,
            role=Role(data.role).value,
            title=data.title,
            position=data.position,
            details=data.details,
            is_active=True,
            hashed_password=hashed,
        )
        try:
            created = await self.create(profile)
        except IntegrityError:
            raise UsernameAlreadyExistsException(data.username) from None
        return _profile_to_result(created)

    async def update_profile(
        self, profile_id: str, changes: dict[str, object]
    ) -> ProfileResult | None:
        profile = await self.get_by_id(profile_id)
        if profile is None:
            return None
        values: dict[str, Any] = dict(changes)
        if "role" in values:
            values["role"] = Role(values["role"]).value
        updated = await self.update(profile, values)
        return _profile_to_result(updated)

    async def list_by_role(self, role: Role) -> list[ProfileResult]:
        result = await self.db.execute(
            select(Profile)
            .where(Profile.role == Role(role).value)
            .order_by(Profile.full_name, Profile.id)
        )
        return [_profile_to_result(p) for p in result.scalars().all()]
