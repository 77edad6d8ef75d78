"""Order lifecycle: role-scoped listing, lookups, status updates, checkout."""

import logging
import secrets
from datetime import datetime, timezone
from decimal import Decimal
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from storedesk.core.config import settings
from storedesk.core.errors import Conflict, InvalidInput, InvalidStatus, NotFound
from storedesk.models.order import Order, OrderItem, OrderStatus
from storedesk.models.product import Product
from storedesk.schemas.auth import CurrentAdmin
from storedesk.schemas.order import OrderCreate, OrderResponse
from storedesk.services.visibility import policy_for

logger = logging.getLogger(__name__)

ORDER_NUMBER_ATTEMPTS = 3


def generate_order_number() -> str:
    """Order number: ORD-<UTC timestamp>-<4 hex chars>."""
    return f"ORD-{datetime.now(timezone.utc).strftime('%Y%m%d%H%M%S')}-{secrets.token_hex(2).upper()}"


def parse_status(value: str) -> OrderStatus:
    try:
        return OrderStatus(value)
    except ValueError:
        raise InvalidStatus(value, OrderStatus.values()) from None


async def _load_products(db: AsyncSession, orders: list[Order]) -> dict[UUID, Product]:
    product_ids = {item.product_id for order in orders for item in order.items}
    if not product_ids:
        return {}
    result = await db.execute(select(Product).where(Product.id.in_(product_ids)))
    return {p.id: p for p in result.scalars().all()}


async def to_responses(db: AsyncSession, orders: list[Order]) -> list[OrderResponse]:
    """Serialize orders with item products resolved; dangling references stay unresolved."""
    products = await _load_products(db, orders)
    return [OrderResponse.from_order(o, products) for o in orders]


async def list_orders(db: AsyncSession, admin: CurrentAdmin) -> list[OrderResponse]:
    policy = policy_for(admin)
    query = policy.scope(select(Order)).order_by(Order.created_at.desc())
    result = await db.execute(query)
    orders = list(result.scalars().all())
    return await to_responses(db, orders)


async def _find_visible(db: AsyncSession, admin: CurrentAdmin, *criteria) -> Order:
    policy = policy_for(admin)
    result = await db.execute(policy.scope(select(Order).where(*criteria)))
    order = result.scalar_one_or_none()
    if not order:
        raise NotFound("Order not found")
    return order


async def get_order(db: AsyncSession, admin: CurrentAdmin, order_id: UUID) -> Order:
    return await _find_visible(db, admin, Order.id == order_id)


async def get_order_by_number(db: AsyncSession, admin: CurrentAdmin, order_number: str) -> Order:
    return await _find_visible(db, admin, Order.order_number == order_number)


async def _apply_status(db: AsyncSession, order: Order, new_status: OrderStatus) -> Order:
    if settings.ENFORCE_STATUS_TRANSITIONS and not order.status.can_transition_to(new_status):
        raise Conflict(
            f"Cannot change status from '{order.status.value}' to '{new_status.value}'"
        )
    previous = order.status
    order.status = new_status
    await db.commit()
    logger.info(
        "Order %s status %s -> %s", order.order_number, previous.value, new_status.value
    )
    return order


async def update_status(
    db: AsyncSession, admin: CurrentAdmin, order_id: UUID, status: str
) -> Order:
    new_status = parse_status(status)
    order = await get_order(db, admin, order_id)
    return await _apply_status(db, order, new_status)


async def update_status_by_number(
    db: AsyncSession, admin: CurrentAdmin, order_number: str, status: str
) -> Order:
    new_status = parse_status(status)
    order = await get_order_by_number(db, admin, order_number)
    return await _apply_status(db, order, new_status)


def _check_variant(product: Product, variant: str, branch: str) -> None:
    """Raise InvalidInput unless the branch stocks an available variant by that name."""
    listed = (product.branches or {}).get(branch)
    if listed is None:
        raise InvalidInput(f"'{product.name}' is not sold at branch '{branch}'")
    match = next((v for v in listed if v.get("name") == variant), None)
    if match is None:
        raise InvalidInput(f"'{product.name}' has no variant '{variant}' at branch '{branch}'")
    if not match.get("available", True):
        raise InvalidInput(f"'{product.name}' variant '{variant}' is unavailable at branch '{branch}'")


async def create_order(db: AsyncSession, body: OrderCreate) -> Order:
    """Customer checkout.

    Items must exist in the catalog, share one branch and name a variant that
    branch has available. Prices come from the catalog, never the request.
    """
    branches = {item.branch for item in body.items}
    branch = body.branch or body.items[0].branch
    if branches != {branch}:
        raise InvalidInput(
            f"All items must belong to branch '{branch}', got: {', '.join(sorted(branches))}"
        )

    product_ids = {item.product_id for item in body.items}
    result = await db.execute(select(Product).where(Product.id.in_(product_ids)))
    products = {p.id: p for p in result.scalars().all()}

    missing_ids = product_ids - set(products)
    if missing_ids:
        raise NotFound(f"Products not found: {', '.join(sorted(str(i) for i in missing_ids))}")

    total = Decimal("0.00")
    lines = []
    for item_data in body.items:
        product = products[item_data.product_id]
        _check_variant(product, item_data.variant, item_data.branch)
        unit_price = product.price
        total += unit_price * item_data.quantity
        lines.append((item_data, unit_price))

    # Order numbers carry only 16 random bits per second; regenerate on a clash
    for attempt in range(1, ORDER_NUMBER_ATTEMPTS + 1):
        order_number = generate_order_number()
        order = Order(
            order_number=order_number,
            status=OrderStatus.RECEIVED,
            customer_name=body.customer.name,
            customer_contact=body.customer.contact,
            total=total,
            branch=branch,
            items=[
                OrderItem(
                    position=position,
                    product_id=item_data.product_id,
                    variant=item_data.variant,
                    quantity=item_data.quantity,
                    price=unit_price,
                    branch=item_data.branch,
                )
                for position, (item_data, unit_price) in enumerate(lines)
            ],
        )
        db.add(order)
        try:
            await db.commit()
        except IntegrityError:
            await db.rollback()
            if attempt == ORDER_NUMBER_ATTEMPTS:
                raise
            logger.warning("Order number %s already taken, retrying", order_number)
            continue
        break

    logger.info("Order %s created for branch %s (total %s)", order_number, branch, total)
    return order
