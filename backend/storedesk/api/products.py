"""Product catalog endpoints, plus catalog backup/restore."""

import logging
from decimal import Decimal
from uuid import UUID

from fastapi import APIRouter, Depends, File, UploadFile, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from storedesk.api.downloads import json_attachment
from storedesk.core.deps import product_write_guard
from storedesk.core.errors import NotFound
from storedesk.db.base import get_db
from storedesk.models.product import Product
from storedesk.schemas.backup import RestoreResult
from storedesk.schemas.product import ProductCreate, ProductResponse, ProductUpdate
from storedesk.services import backup

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/products", tags=["products"])

# Writes are open unless PROTECT_PRODUCT_WRITES is set
write_guard = [Depends(product_write_guard)]


def _branches_json(branches) -> dict:
    return {name: [v.model_dump() for v in variants] for name, variants in branches.items()}


async def _get_or_404(db: AsyncSession, product_id: UUID) -> Product:
    product = await db.get(Product, product_id)
    if not product:
        raise NotFound("Product not found")
    return product


@router.get("", response_model=list[ProductResponse])
async def list_products(category: str | None = None, db: AsyncSession = Depends(get_db)):
    query = select(Product).order_by(Product.name)
    if category:
        query = query.where(Product.category == category)
    result = await db.execute(query)
    return result.scalars().all()


@router.post(
    "", response_model=ProductResponse, status_code=status.HTTP_201_CREATED, dependencies=write_guard
)
async def create_product(data: ProductCreate, db: AsyncSession = Depends(get_db)):
    product = Product(
        name=data.name,
        category=data.category,
        image=data.image,
        price=Decimal(str(data.price)),
        branches=_branches_json(data.branches),
    )
    db.add(product)
    await db.commit()
    logger.info("Product %s created: %s", product.id, product.name)
    return product


@router.get("/backup")
async def backup_products(db: AsyncSession = Depends(get_db)):
    """Download the whole catalog as a JSON document."""
    return json_attachment("products", await backup.backup_products(db))


@router.post("/restore", response_model=RestoreResult, dependencies=write_guard)
async def restore_products(file: UploadFile = File(...), db: AsyncSession = Depends(get_db)):
    """Replace the catalog with the uploaded backup. A snapshot of the old catalog is kept."""
    return await backup.restore_products(db, await file.read())


@router.get("/{product_id}", response_model=ProductResponse)
async def get_product(product_id: UUID, db: AsyncSession = Depends(get_db)):
    return await _get_or_404(db, product_id)


@router.put("/{product_id}", response_model=ProductResponse, dependencies=write_guard)
async def update_product(product_id: UUID, data: ProductUpdate, db: AsyncSession = Depends(get_db)):
    product = await _get_or_404(db, product_id)

    update_data = data.model_dump(exclude_unset=True, exclude_none=True)
    if "price" in update_data:
        update_data["price"] = Decimal(str(update_data["price"]))
    if "branches" in update_data:
        update_data["branches"] = _branches_json(data.branches)

    for key, value in update_data.items():
        setattr(product, key, value)

    await db.commit()
    return product


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT, dependencies=write_guard)
async def delete_product(product_id: UUID, db: AsyncSession = Depends(get_db)):
    """Delete a product. Orders keep their dangling reference to it."""
    product = await _get_or_404(db, product_id)
    await db.delete(product)
    await db.commit()
    logger.info("Product %s deleted", product_id)
