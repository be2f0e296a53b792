"""Bootstrap script: creates the initial manager once."""

import pytest

from scripts.bootstrap_manager import bootstrap_manager
from taskdesk.domain.enums import Role
from taskdesk.infrastructure.persistence.repositories import ProfileRepository

pytestmark = pytest.mark.requires_db


async def test_bootstrap_manager_is_idempotent(db_session) -> None:
    repo = ProfileRepository(db_session)

    assert await bootstrap_manager(repo, "admin", "admin-pass-123", "Administrator")
    assert not await bootstrap_manager(repo, "admin", "other-pass-456", "Someone Else")

    managers = await repo.list_by_role(Role.MANAGER)
    assert [m.username for m in managers] == ["admin"]
    assert await repo.authenticate("admin", "admin-pass-123") is not None
