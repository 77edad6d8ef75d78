"""Backup and restore of the product and order collections.

Restore replaces a whole collection. The flow is:

1. parse and validate the uploaded document in full; any problem raises
   ``InvalidInput`` before the database is touched;
2. take the collection's lock so concurrent restores run one at a time;
3. write a snapshot of the current contents to ``BACKUP_DIR``;
4. delete and insert inside one transaction, rolling back on any error.

The lock is per process. With several workers the single transaction is what
keeps a half-applied restore from being committed.
"""

import asyncio
import json
import logging
from datetime import datetime, timezone
from decimal import Decimal
from pathlib import Path

from pydantic import TypeAdapter, ValidationError
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from storedesk.core.config import settings
from storedesk.core.errors import InvalidInput
from storedesk.models.order import Order, OrderItem
from storedesk.models.product import Product
from storedesk.schemas.backup import (
    OrderItemRecord,
    OrderRecord,
    ProductRecord,
    RestoreResult,
    order_records,
    product_records,
)
from storedesk.schemas.order import CustomerInfo

logger = logging.getLogger(__name__)

_restore_locks: dict[str, asyncio.Lock] = {
    "products": asyncio.Lock(),
    "orders": asyncio.Lock(),
}


def restore_lock(collection: str) -> asyncio.Lock:
    return _restore_locks[collection]


# ── Backup ─────────────────────────────────────────

def product_to_record(product: Product) -> ProductRecord:
    return ProductRecord(
        id=product.id,
        name=product.name,
        category=product.category,
        image=product.image,
        price=product.price,
        branches=product.branches or {},
    )


def order_branch(order: Order) -> str | None:
    """Order-level branch, falling back to the first item's branch.

    The fallback is lossy when an order's items span several branches: only
    the first item's branch is reported.
    """
    if order.branch:
        return order.branch
    return order.items[0].branch if order.items else None


def order_to_record(order: Order) -> OrderRecord:
    return OrderRecord(
        id=order.id,
        order_number=order.order_number,
        status=order.status,
        customer=CustomerInfo(name=order.customer_name, contact=order.customer_contact),
        items=[
            OrderItemRecord(
                product_id=item.product_id,
                variant=item.variant,
                quantity=item.quantity,
                price=item.price,
                branch=item.branch,
            )
            for item in order.items
        ],
        total=order.total,
        branch=order_branch(order),
        created_at=order.created_at,
    )


async def backup_products(db: AsyncSession) -> list[dict]:
    result = await db.execute(select(Product).order_by(Product.name, Product.id))
    return [product_to_record(p).model_dump(mode="json") for p in result.scalars().all()]


async def backup_orders(db: AsyncSession) -> list[dict]:
    result = await db.execute(select(Order).order_by(Order.created_at, Order.id))
    return [order_to_record(o).model_dump(mode="json") for o in result.scalars().all()]


# ── Restore ────────────────────────────────────────

def parse_backup(raw: bytes, adapter: TypeAdapter, collection: str) -> list:
    """Validate a whole backup document. Raises InvalidInput without side effects."""
    if not raw or not raw.strip():
        raise InvalidInput(f"{collection} backup file is empty")
    try:
        records = adapter.validate_json(raw)
    except ValidationError as exc:
        first = exc.errors()[0]
        location = ".".join(str(part) for part in first.get("loc", ()))
        raise InvalidInput(
            f"Invalid {collection} backup ({exc.error_count()} errors; first at '{location}': {first['msg']})"
        ) from exc
    if not records:
        raise InvalidInput(f"{collection} backup contains no records")
    ids = [r.id for r in records]
    if len(set(ids)) != len(ids):
        raise InvalidInput(f"{collection} backup contains duplicate ids")
    return records


def write_snapshot(collection: str, records: list[dict]) -> Path:
    backup_dir = Path(settings.BACKUP_DIR)
    backup_dir.mkdir(parents=True, exist_ok=True)
    stamp = datetime.now(timezone.utc).strftime("%Y%m%d%H%M%S%f")
    path = backup_dir / f"{collection}-pre-restore-{stamp}.json"
    with open(path, "w", encoding="utf-8") as f:
        json.dump(records, f, indent=2)
    return path


async def _replace(db: AsyncSession, collection: str, current: list[dict], wipe, new_rows: list) -> RestoreResult:
    snapshot = write_snapshot(collection, current)
    logger.info("Pre-restore snapshot of %d %s written to %s", len(current), collection, snapshot)

    # Drop loaded instances so re-inserted ids do not collide in the identity map
    db.expunge_all()
    try:
        for statement in wipe:
            await db.execute(statement)
        db.add_all(new_rows)
        await db.commit()
    except Exception:
        await db.rollback()
        logger.exception("Restore of %s failed; previous contents kept", collection)
        raise

    logger.warning("Restored %s: replaced %d records with %d", collection, len(current), len(new_rows))
    return RestoreResult(restored=len(new_rows), snapshot=str(snapshot))


async def restore_products(db: AsyncSession, raw: bytes) -> RestoreResult:
    records: list[ProductRecord] = parse_backup(raw, product_records, "products")
    rows = [
        Product(
            id=r.id,
            name=r.name,
            category=r.category,
            image=r.image,
            price=Decimal(str(r.price)),
            branches={b: [v.model_dump() for v in variants] for b, variants in r.branches.items()},
        )
        for r in records
    ]
    async with restore_lock("products"):
        current = await backup_products(db)
        return await _replace(db, "products", current, [delete(Product)], rows)


async def restore_orders(db: AsyncSession, raw: bytes) -> RestoreResult:
    records: list[OrderRecord] = parse_backup(raw, order_records, "orders")
    numbers = [r.order_number for r in records]
    if len(set(numbers)) != len(numbers):
        raise InvalidInput("orders backup contains duplicate order numbers")

    rows = []
    for r in records:
        order = Order(
            id=r.id,
            order_number=r.order_number,
            status=r.status,
            customer_name=r.customer.name,
            customer_contact=r.customer.contact,
            total=Decimal(str(r.total)),
            branch=r.branch,
            items=[
                OrderItem(
                    position=position,
                    product_id=item.product_id,
                    variant=item.variant,
                    quantity=item.quantity,
                    price=Decimal(str(item.price)),
                    branch=item.branch,
                )
                for position, item in enumerate(r.items)
            ],
        )
        if r.created_at is not None:
            order.created_at = r.created_at
        rows.append(order)

    async with restore_lock("orders"):
        current = await backup_orders(db)
        return await _replace(db, "orders", current, [delete(OrderItem), delete(Order)], rows)
