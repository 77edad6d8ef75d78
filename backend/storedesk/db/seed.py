"""Seed the admin accounts.

Replaces every admin with one owner and a manager per branch:

┌──────────┬────────────────┬────────┐
│ Username │ Role           │ Branch │
├──────────┼────────────────┼────────┤
│ owner    │ owner          │   -    │
│ first    │ branch manager │ main   │
│ second   │ branch manager │ second │
│ third    │ branch manager │ third  │
└──────────┴────────────────┴────────┘

Run with ``python -m storedesk.db.seed``. Passwords come from
SEED_OWNER_PASSWORD / SEED_MANAGER_PASSWORD.
"""

import asyncio
import logging

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from storedesk.core.config import settings
from storedesk.core.logging_config import setup_logging
from storedesk.core.security import hash_password
from storedesk.db.base import SessionLocal, create_all
from storedesk.models.admin import Admin, RoleType

logger = logging.getLogger(__name__)

BRANCHES = ["main", "second", "third"]


def default_admins() -> list[dict]:
    admins = [
        {
            "name": "Store Owner",
            "username": "owner",
            "password": settings.SEED_OWNER_PASSWORD,
            "role": RoleType.OWNER,
            "branch": None,
        }
    ]
    for username, branch in zip(["first", "second", "third"], BRANCHES):
        admins.append(
            {
                "name": f"{username.title()} Branch Manager",
                "username": username,
                "password": settings.SEED_MANAGER_PASSWORD,
                "role": RoleType.BRANCH_MANAGER,
                "branch": branch,
            }
        )
    return admins


async def seed_admins(db: AsyncSession, admins: list[dict] | None = None) -> list[Admin]:
    """Delete all admins and insert the given (or default) set with hashed passwords."""
    await db.execute(delete(Admin))
    created = []
    for data in admins or default_admins():
        admin = Admin(
            name=data["name"],
            username=data["username"],
            hashed_password=hash_password(data["password"]),
            role=data["role"],
            branch=data.get("branch"),
        )
        db.add(admin)
        created.append(admin)
    await db.commit()
    return created


async def main() -> None:
    setup_logging()
    await create_all()
    async with SessionLocal() as db:
        admins = await seed_admins(db)
    logger.info("Seeded %d admins: %s", len(admins), ", ".join(a.username for a in admins))


if __name__ == "__main__":
    asyncio.run(main())
