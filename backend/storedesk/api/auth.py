"""Authentication endpoints: login + current admin profile."""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from storedesk.core.deps import get_current_admin
from storedesk.core.errors import NotFound, Unauthenticated
from storedesk.core.security import create_access_token, verify_password
from storedesk.db.base import get_db
from storedesk.models.admin import Admin
from storedesk.schemas.auth import AdminProfile, CurrentAdmin, LoginRequest, LoginResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=LoginResponse)
async def login(body: LoginRequest, db: AsyncSession = Depends(get_db)):
    """Authenticate via username + password, return a session token."""
    result = await db.execute(select(Admin).where(Admin.username == body.username))
    admin = result.scalar_one_or_none()

    if not admin or not verify_password(body.password, admin.hashed_password):
        logger.warning("Failed login for username %r", body.username)
        raise Unauthenticated("Invalid credentials")

    token = create_access_token(
        admin_id=admin.id,
        username=admin.username,
        role=admin.role.value,
        branch=admin.branch,
    )
    return LoginResponse(token=token, user=AdminProfile.model_validate(admin))


@router.get("/me", response_model=AdminProfile)
async def get_me(
    current_admin: CurrentAdmin = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db),
):
    """Return the full profile of the authenticated admin."""
    admin = await db.get(Admin, current_admin.id)
    if not admin:
        raise NotFound("Admin not found")
    return AdminProfile.model_validate(admin)
