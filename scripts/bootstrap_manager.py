"""Create the initial manager profile. Idempotent: an existing username is left as is.

Usage:
    python -m scripts.bootstrap_manager [username] [password]
Defaults come from BOOTSTRAP_MANAGER_USERNAME / BOOTSTRAP_MANAGER_PASSWORD /
BOOTSTRAP_MANAGER_FULL_NAME. If no password is configured, a random one is printed.
"""

import asyncio
import secrets
import sys

from taskdesk.application.dtos.profile import ProfileCreate
from taskdesk.core.config import get_settings
from taskdesk.domain.enums import Role
from taskdesk.infrastructure.persistence import database
from taskdesk.infrastructure.persistence.repositories import ProfileRepository
from taskdesk.shared.logging import setup_logging


async def bootstrap_manager(
    repo: ProfileRepository, username: str, password: str, full_name: str
) -> bool:
    """Create a manager profile unless username exists. Returns True if created."""
    if await repo.get_by_username(username) is not None:
        return False
    await repo.create_profile(
        ProfileCreate(
            username=username,
            password=password,
            full_name=full_name,
            role=Role.MANAGER,
        )
    )
    return True


async def main() -> None:
    settings = get_settings()
    setup_logging()
    username = sys.argv[1] if len(sys.argv) > 1 else settings.bootstrap_manager_username
    if len(sys.argv) > 2:
        password = sys.argv[2]
        generated = False
    elif settings.bootstrap_manager_password is not None:
        password = settings.bootstrap_manager_password.get_secret_value()
        generated = False
    else:
        password = secrets.token_urlsafe(12)
        generated = True

    database._ensure_engine()
    if database.AsyncSessionLocal is None:
        print("AsyncSessionLocal not configured", file=sys.stderr)
        sys.exit(1)

    async with database.AsyncSessionLocal() as session:
        async with session.begin():
            created = await bootstrap_manager(
                ProfileRepository(session),
                username,
                password,
                settings.bootstrap_manager_full_name,
            )
    await database.engine.dispose()

    if not created:
        print(f"Manager {username!r} already exists; nothing to do.")
        return
    print(f"Created manager: {username}")
    if generated:
        print(f"Password: {password}")


if __name__ == "__main__":
    asyncio.run(main())
