"""Shared fixtures: in-memory SQLite database, seeded data, async HTTP client."""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import uuid
from decimal import Decimal

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from storedesk.core.config import settings
from storedesk.core.security import create_access_token, hash_password
from storedesk.db.base import create_all, get_db
from storedesk.main import app
from storedesk.models import Admin, Order, OrderItem, OrderStatus, Product, RoleType

# bcrypt is slow; hash each seed password once per session
_HASHES: dict[str, str] = {}


def _hashed(plain: str) -> str:
    if plain not in _HASHES:
        _HASHES[plain] = hash_password(plain)
    return _HASHES[plain]


def auth(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def token_for(admin: Admin) -> str:
    return create_access_token(
        admin_id=admin.id, username=admin.username, role=admin.role.value, branch=admin.branch
    )


@pytest.fixture(autouse=True)
def _tmp_dirs(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "BACKUP_DIR", str(tmp_path / "backups"))
    monkeypatch.setattr(settings, "UPLOAD_DIR", str(tmp_path / "uploads"))


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await create_all(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, expire_on_commit=False, autoflush=False)


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
async def seeded(db):
    """Owner, two branch managers, two products, three orders across north/south."""
    owner = Admin(
        name="Owner", username="owner", hashed_password=_hashed("secret"), role=RoleType.OWNER
    )
    mgr = Admin(
        name="North Manager",
        username="mgr",
        hashed_password=_hashed("pw"),
        role=RoleType.BRANCH_MANAGER,
        branch="north",
    )
    south_mgr = Admin(
        name="South Manager",
        username="smgr",
        hashed_password=_hashed("pw"),
        role=RoleType.BRANCH_MANAGER,
        branch="south",
    )
    mango = Product(
        id=uuid.uuid4(),
        name="Mango Ice",
        category="disposable",
        image="http://localhost/uploads/mango.png",
        price=Decimal("12.50"),
        branches={
            "north": [{"name": "mango", "available": True}, {"name": "mango-lime", "available": False}],
            "south": [{"name": "mango", "available": True}],
        },
    )
    grape = Product(
        id=uuid.uuid4(),
        name="Grape Pod",
        category="pod",
        image="http://localhost/uploads/grape.png",
        price=Decimal("8.00"),
        branches={"north": [{"name": "grape", "available": True}]},
    )

    def order(number: str, branch: str, product: Product, quantity: int) -> Order:
        return Order(
            order_number=number,
            status=OrderStatus.RECEIVED,
            customer_name=f"Customer {number}",
            customer_contact="0917-000-0000",
            total=product.price * quantity,
            branch=branch,
            items=[
                OrderItem(
                    position=0,
                    product_id=product.id,
                    variant=product.branches[branch][0]["name"],
                    quantity=quantity,
                    price=product.price,
                    branch=branch,
                )
            ],
        )

    orders = [
        order("ORD-1001", "north", mango, 2),
        order("ORD-1002", "south", mango, 1),
        order("ORD-1003", "north", grape, 3),
    ]
    db.add_all([owner, mgr, south_mgr, mango, grape, *orders])
    await db.commit()
    return {
        "owner": owner,
        "mgr": mgr,
        "south_mgr": south_mgr,
        "products": {"mango": mango, "grape": grape},
        "orders": {o.order_number: o for o in orders},
    }


@pytest.fixture
def owner_token(seeded):
    return token_for(seeded["owner"])


@pytest.fixture
def mgr_token(seeded):
    return token_for(seeded["mgr"])
