"""Backup document records.

A backup file is a JSON array of these records. Restore validates the whole
array before touching the database.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, TypeAdapter, model_validator

from storedesk.models.order import OrderStatus
from storedesk.schemas.order import CustomerInfo
from storedesk.schemas.product import ProductBase


class ProductRecord(ProductBase):
    id: UUID


class OrderItemRecord(BaseModel):
    product_id: UUID
    variant: str = Field(..., min_length=1)
    quantity: int = Field(..., ge=1)
    price: float = Field(..., ge=0)
    branch: str = Field(..., min_length=1)


class OrderRecord(BaseModel):
    id: UUID
    order_number: str = Field(..., min_length=1)
    status: OrderStatus = OrderStatus.RECEIVED
    customer: CustomerInfo
    items: list[OrderItemRecord] = Field(..., min_length=1)
    total: float = Field(..., ge=0)
    branch: str | None = None
    created_at: datetime | None = None

    @model_validator(mode="after")
    def fill_branch_from_first_item(self) -> "OrderRecord":
        # Lossy for documents whose items span several branches
        if not self.branch:
            self.branch = self.items[0].branch
        return self


class RestoreResult(BaseModel):
    restored: int
    snapshot: str | None = None


product_records = TypeAdapter(list[ProductRecord])
order_records = TypeAdapter(list[OrderRecord])
