"""Unit tests for Product Management API."""

from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock
import uuid

import pytest

from storedesk.core.errors import NotFound
from storedesk.models.product import Product


@pytest.mark.asyncio
async def test_get_product_not_found():
    """Getting non-existent product should raise NotFound."""
    from storedesk.api.products import get_product

    mock_db = AsyncMock()
    mock_db.get.return_value = None

    with pytest.raises(NotFound) as exc_info:
        await get_product(product_id=uuid.uuid4(), db=mock_db)

    assert exc_info.value.status_code == 404


@pytest.mark.asyncio
async def test_create_product_stores_variants_as_json():
    """Variant models are flattened to plain dicts before they hit the JSON column."""
    from storedesk.api.products import create_product
    from storedesk.schemas.product import ProductCreate

    mock_db = AsyncMock()
    mock_db.add = MagicMock()

    data = ProductCreate(
        name="Strawberry Ice",
        category="disposable",
        image="http://localhost:5002/uploads/straw.png",
        price=9.99,
        branches={"main": [{"name": "strawberry"}, {"name": "straw-kiwi", "available": False}]},
    )

    product = await create_product(data, mock_db)

    mock_db.add.assert_called_once_with(product)
    mock_db.commit.assert_awaited_once()
    assert product.price == Decimal("9.99")
    assert product.branches == {
        "main": [
            {"name": "strawberry", "available": True},
            {"name": "straw-kiwi", "available": False},
        ]
    }


@pytest.mark.asyncio
async def test_update_product_only_touches_sent_fields():
    """Partial update should leave unsent fields alone."""
    from storedesk.api.products import update_product
    from storedesk.schemas.product import ProductUpdate

    product = Product(
        id=uuid.uuid4(),
        name="Grape Pod",
        category="pod",
        image="grape.png",
        price=Decimal("8.00"),
        branches={"main": [{"name": "grape", "available": True}]},
    )
    mock_db = AsyncMock()
    mock_db.get.return_value = product

    result = await update_product(product.id, ProductUpdate(price=7.5), mock_db)

    assert result.price == Decimal("7.5")
    assert result.name == "Grape Pod"
    assert result.branches == {"main": [{"name": "grape", "available": True}]}
    mock_db.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_delete_product_not_found():
    from storedesk.api.products import delete_product

    mock_db = AsyncMock()
    mock_db.get.return_value = None

    with pytest.raises(NotFound):
        await delete_product(product_id=uuid.uuid4(), db=mock_db)

    mock_db.delete.assert_not_called()
    mock_db.commit.assert_not_called()
