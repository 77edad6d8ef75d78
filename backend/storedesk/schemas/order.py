"""Order schemas for API request/response."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from storedesk.models.order import Order, OrderStatus
from storedesk.models.product import Product
from storedesk.schemas.product import ProductSummary


class CustomerInfo(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    contact: str = Field(..., min_length=1, max_length=100)


class OrderItemCreate(BaseModel):
    product_id: UUID
    variant: str = Field(..., min_length=1, max_length=255)
    quantity: int = Field(..., ge=1)
    branch: str = Field(..., min_length=1, max_length=100)


class OrderCreate(BaseModel):
    customer: CustomerInfo
    items: list[OrderItemCreate] = Field(..., min_length=1)
    # Defaults to the items' branch
    branch: str | None = Field(None, min_length=1, max_length=100)


class StatusUpdate(BaseModel):
    # Plain string: membership is checked by the service so bad values give 400, not 422
    status: str


class OrderItemResponse(BaseModel):
    product_id: UUID
    # None when the referenced product no longer exists
    product: ProductSummary | None = None
    variant: str
    quantity: int
    price: float
    branch: str


class OrderResponse(BaseModel):
    id: UUID
    order_number: str
    status: OrderStatus
    customer: CustomerInfo
    items: list[OrderItemResponse]
    total: float
    branch: str
    created_at: datetime

    @classmethod
    def from_order(cls, order: Order, products: dict[UUID, Product] | None = None) -> "OrderResponse":
        products = products or {}
        items = []
        for item in order.items:
            product = products.get(item.product_id)
            items.append(
                OrderItemResponse(
                    product_id=item.product_id,
                    product=ProductSummary.model_validate(product) if product else None,
                    variant=item.variant,
                    quantity=item.quantity,
                    price=item.price,
                    branch=item.branch,
                )
            )
        return cls(
            id=order.id,
            order_number=order.order_number,
            status=order.status,
            customer=CustomerInfo(name=order.customer_name, contact=order.customer_contact),
            items=items,
            total=order.total,
            branch=order.branch,
            created_at=order.created_at,
        )
