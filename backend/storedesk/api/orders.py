"""Order endpoints: role-scoped listing, lookups, status updates, backup/restore."""

from uuid import UUID

from fastapi import APIRouter, Depends, File, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from storedesk.api.downloads import json_attachment
from storedesk.core.deps import get_current_admin, require_role
from storedesk.db.base import get_db
from storedesk.models.admin import RoleType
from storedesk.schemas.auth import CurrentAdmin
from storedesk.schemas.backup import RestoreResult
from storedesk.schemas.order import OrderCreate, OrderResponse, StatusUpdate
from storedesk.services import backup, orders

router = APIRouter(prefix="/orders", tags=["orders"])


@router.get("", response_model=list[OrderResponse])
async def list_orders(
    current_admin: CurrentAdmin = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db),
):
    """Owners get every order; branch managers only their branch's."""
    return await orders.list_orders(db, current_admin)


@router.post("", response_model=OrderResponse, status_code=status.HTTP_201_CREATED)
async def create_order(body: OrderCreate, db: AsyncSession = Depends(get_db)):
    """Place a customer order."""
    order = await orders.create_order(db, body)
    return (await orders.to_responses(db, [order]))[0]


# Static paths are declared before /{order_id} so they are not parsed as ids
@router.get("/backup")
async def backup_orders(
    current_admin: CurrentAdmin = Depends(require_role(RoleType.OWNER)),
    db: AsyncSession = Depends(get_db),
):
    """Download every order as a JSON document."""
    return json_attachment("orders", await backup.backup_orders(db))


@router.post("/restore", response_model=RestoreResult)
async def restore_orders(
    file: UploadFile = File(...),
    current_admin: CurrentAdmin = Depends(require_role(RoleType.OWNER)),
    db: AsyncSession = Depends(get_db),
):
    """Replace all orders with the uploaded backup. A snapshot of the old set is kept."""
    return await backup.restore_orders(db, await file.read())


@router.get("/by-number/{order_number}", response_model=OrderResponse)
async def get_order_by_number(
    order_number: str,
    current_admin: CurrentAdmin = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db),
):
    order = await orders.get_order_by_number(db, current_admin, order_number)
    return (await orders.to_responses(db, [order]))[0]


@router.put("/by-number/{order_number}/status", response_model=OrderResponse)
async def update_status_by_number(
    order_number: str,
    body: StatusUpdate,
    current_admin: CurrentAdmin = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db),
):
    order = await orders.update_status_by_number(db, current_admin, order_number, body.status)
    return (await orders.to_responses(db, [order]))[0]


@router.get("/{order_id}", response_model=OrderResponse)
async def get_order(
    order_id: UUID,
    current_admin: CurrentAdmin = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db),
):
    order = await orders.get_order(db, current_admin, order_id)
    return (await orders.to_responses(db, [order]))[0]


@router.put("/{order_id}/status", response_model=OrderResponse)
async def update_status(
    order_id: UUID,
    body: StatusUpdate,
    current_admin: CurrentAdmin = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db),
):
    order = await orders.update_status(db, current_admin, order_id, body.status)
    return (await orders.to_responses(db, [order]))[0]
