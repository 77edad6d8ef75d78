"""Backup & restore: round-trips, validation before deletion, transactional replace."""

import asyncio
import json
import uuid
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from sqlalchemy import func, select

from storedesk.core.config import settings
from storedesk.core.errors import InvalidInput
from storedesk.models.order import Order, OrderItem
from storedesk.models.product import Product
from storedesk.schemas.backup import OrderRecord
from storedesk.services import backup


async def _count(db, model) -> int:
    return (await db.execute(select(func.count()).select_from(model))).scalar_one()


def _as_set(records: list[dict]) -> set[str]:
    return {json.dumps(r, sort_keys=True) for r in records}


# ── Products ─────────────────────────────────────

@pytest.mark.asyncio
async def test_product_round_trip(db, seeded):
    before = await backup.backup_products(db)
    assert len(before) == 2

    # Mutate the store so the restore has something to undo
    db.add(Product(name="Extra", category="pod", image="x.png", price=1, branches={}))
    await db.commit()

    result = await backup.restore_products(db, json.dumps(before).encode())
    after = await backup.backup_products(db)

    assert result.restored == 2
    assert _as_set(after) == _as_set(before)


@pytest.mark.asyncio
async def test_product_backup_keeps_variant_order(db, seeded):
    records = await backup.backup_products(db)
    mango = next(r for r in records if r["name"] == "Mango Ice")
    assert [v["name"] for v in mango["branches"]["north"]] == ["mango", "mango-lime"]
    assert mango["branches"]["north"][1]["available"] is False
    assert mango["price"] == 12.5


@pytest.mark.asyncio
async def test_restore_writes_pre_restore_snapshot(db, seeded):
    before = await backup.backup_products(db)
    replacement = [dict(before[0], id=str(uuid.uuid4()), name="Replacement")]

    result = await backup.restore_products(db, json.dumps(replacement).encode())

    snapshot = Path(result.snapshot)
    assert snapshot.parent == Path(settings.BACKUP_DIR)
    assert _as_set(json.loads(snapshot.read_text())) == _as_set(before)
    assert await _count(db, Product) == 1


@pytest.mark.parametrize(
    "raw",
    [
        b"",
        b"   \n",
        b"{not json",
        b"{}",
        b"[]",
        b'[{"name": "missing fields"}]',
    ],
)
@pytest.mark.asyncio
async def test_bad_product_document_leaves_catalog_intact(db, seeded, raw):
    before = await backup.backup_products(db)
    with pytest.raises(InvalidInput):
        await backup.restore_products(db, raw)
    assert _as_set(await backup.backup_products(db)) == _as_set(before)


@pytest.mark.asyncio
async def test_duplicate_ids_rejected(db, seeded):
    records = await backup.backup_products(db)
    with pytest.raises(InvalidInput):
        await backup.restore_products(db, json.dumps([records[0], records[0]]).encode())
    assert await _count(db, Product) == 2


@pytest.mark.asyncio
async def test_failure_after_delete_rolls_back(db, seeded, monkeypatch):
    before = await backup.backup_products(db)
    replacement = [dict(before[0], id=str(uuid.uuid4()))]

    def boom(rows):
        raise RuntimeError("insert failed")

    monkeypatch.setattr(db, "add_all", boom)
    with pytest.raises(RuntimeError):
        await backup.restore_products(db, json.dumps(replacement).encode())

    db.expunge_all()
    assert _as_set(await backup.backup_products(db)) == _as_set(before)


@pytest.mark.asyncio
async def test_concurrent_restores_do_not_interleave(session_factory, seeded):
    async with session_factory() as s:
        base = (await backup.backup_products(s))[0]

    def doc(label: str, n: int) -> bytes:
        return json.dumps(
            [dict(base, id=str(uuid.uuid4()), name=f"{label}-{i}") for i in range(n)]
        ).encode()

    async def run(raw: bytes):
        async with session_factory() as s:
            return await backup.restore_products(s, raw)

    await asyncio.gather(run(doc("a", 3)), run(doc("b", 5)))

    async with session_factory() as s:
        names = {r["name"] for r in await backup.backup_products(s)}
    prefixes = {n.split("-")[0] for n in names}
    assert len(prefixes) == 1
    assert len(names) in (3, 5)


# ── Orders ───────────────────────────────────────

@pytest.mark.asyncio
async def test_order_backup_carries_branch(db, seeded):
    records = await backup.backup_orders(db)
    assert {r["order_number"]: r["branch"] for r in records} == {
        "ORD-1001": "north",
        "ORD-1002": "south",
        "ORD-1003": "north",
    }
    assert all(r["status"] == "Order Received" for r in records)


def test_order_branch_falls_back_to_first_item():
    order = MagicMock(spec=Order)
    order.branch = None
    first, second = MagicMock(spec=OrderItem), MagicMock(spec=OrderItem)
    first.branch, second.branch = "south", "north"
    order.items = [first, second]

    # Only the first item's branch survives
    assert backup.order_branch(order) == "south"


def test_order_record_without_branch_uses_first_item():
    record = OrderRecord.model_validate(
        {
            "id": str(uuid.uuid4()),
            "order_number": "ORD-2001",
            "customer": {"name": "A", "contact": "B"},
            "items": [
                {"product_id": str(uuid.uuid4()), "variant": "v", "quantity": 1, "price": 1, "branch": "third"},
                {"product_id": str(uuid.uuid4()), "variant": "v", "quantity": 1, "price": 1, "branch": "main"},
            ],
            "total": 2,
        }
    )
    assert record.branch == "third"


@pytest.mark.asyncio
async def test_order_round_trip(db, seeded):
    # Reload from the database so timestamps compare in stored form
    db.expunge_all()
    before = await backup.backup_orders(db)
    result = await backup.restore_orders(db, json.dumps(before).encode())
    assert result.restored == 3

    db.expunge_all()
    assert _as_set(await backup.backup_orders(db)) == _as_set(before)
    assert await _count(db, OrderItem) == 3


@pytest.mark.parametrize("raw", [b"", b"garbage", b"[]", b'[{"order_number": "ORD-1"}]'])
@pytest.mark.asyncio
async def test_corrupt_order_restore_keeps_orders(db, seeded, raw):
    with pytest.raises(InvalidInput):
        await backup.restore_orders(db, raw)
    assert await _count(db, Order) == 3
    assert await _count(db, OrderItem) == 3


@pytest.mark.asyncio
async def test_duplicate_order_numbers_rejected(db, seeded):
    records = await backup.backup_orders(db)
    clone = dict(records[0], id=str(uuid.uuid4()))
    with pytest.raises(InvalidInput):
        await backup.restore_orders(db, json.dumps([records[0], clone]).encode())
    assert await _count(db, Order) == 3
