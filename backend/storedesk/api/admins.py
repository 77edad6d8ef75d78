"""Admin account management (owner only)."""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from storedesk.core.deps import require_role
from storedesk.core.errors import Conflict, InvalidInput, NotFound
from storedesk.core.security import hash_password
from storedesk.db.base import get_db
from storedesk.models.admin import Admin, RoleType
from storedesk.schemas.auth import AdminCreate, AdminResponse, AdminUpdate, CurrentAdmin

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admins", tags=["admins"])

owner_only = require_role(RoleType.OWNER)


@router.get("", response_model=list[AdminResponse])
async def list_admins(
    current_admin: CurrentAdmin = Depends(owner_only),
    db: AsyncSession = Depends(get_db),
):
    result = await db.execute(select(Admin).order_by(Admin.username))
    return result.scalars().all()


@router.post("", response_model=AdminResponse, status_code=status.HTTP_201_CREATED)
async def create_admin(
    body: AdminCreate,
    current_admin: CurrentAdmin = Depends(owner_only),
    db: AsyncSession = Depends(get_db),
):
    existing = await db.execute(select(Admin).where(Admin.username == body.username))
    if existing.scalar_one_or_none():
        raise Conflict("Username already taken")

    admin = Admin(
        name=body.name,
        username=body.username,
        hashed_password=hash_password(body.password),
        role=body.role,
        branch=body.branch if body.role is RoleType.BRANCH_MANAGER else None,
    )
    db.add(admin)
    await db.commit()
    logger.info("Admin %s (%s) created by %s", admin.username, admin.role.value, current_admin.username)
    return admin


@router.patch("/{admin_id}", response_model=AdminResponse)
async def update_admin(
    admin_id: UUID,
    body: AdminUpdate,
    current_admin: CurrentAdmin = Depends(owner_only),
    db: AsyncSession = Depends(get_db),
):
    """Change an admin's password and/or branch. Other fields are immutable."""
    admin = await db.get(Admin, admin_id)
    if not admin:
        raise NotFound("Admin not found")

    if body.branch is not None:
        if admin.role is not RoleType.BRANCH_MANAGER:
            raise InvalidInput("Only branch managers have a branch")
        admin.branch = body.branch
    if body.password is not None:
        admin.hashed_password = hash_password(body.password)

    await db.commit()
    return admin
