"""Dependency injection: bearer-token authentication and role enforcement."""

import logging

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from storedesk.core.config import settings
from storedesk.core.errors import AuthError, Forbidden, Unauthenticated
from storedesk.core.security import decode_access_token
from storedesk.models.admin import RoleType
from storedesk.schemas.auth import CurrentAdmin

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_admin(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> CurrentAdmin:
    """Verify the bearer token and attach the admin to ``request.state``.

    Missing credential -> 401. Expired, malformed or badly signed token -> 403.
    """
    if credentials is None or not credentials.credentials:
        raise Unauthenticated()

    try:
        claims = decode_access_token(credentials.credentials)
    except AuthError as exc:
        logger.info("Rejected token on %s %s: %s", request.method, request.url.path, exc)
        raise Forbidden(str(exc)) from exc

    admin = CurrentAdmin(
        id=claims.sub,
        username=claims.username,
        role=claims.role,
        branch=claims.branch,
    )
    request.state.admin = admin
    return admin


def require_role(*allowed_roles: RoleType):
    """Dependency factory: checks the admin has one of the allowed roles."""
    allowed = {r.value for r in allowed_roles}

    async def checker(admin: CurrentAdmin = Depends(get_current_admin)) -> CurrentAdmin:
        if admin.role not in allowed:
            raise Forbidden(
                f"Role '{admin.role}' not allowed. Required: {', '.join(sorted(allowed))}"
            )
        return admin

    return checker


async def product_write_guard(request: Request) -> None:
    """Gate product mutations behind authentication when PROTECT_PRODUCT_WRITES is on."""
    if not settings.PROTECT_PRODUCT_WRITES:
        return
    credentials = await bearer_scheme(request)
    await get_current_admin(request, credentials)
