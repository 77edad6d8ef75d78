"""Order & OrderItem models."""

import enum
import uuid
from decimal import Decimal

from sqlalchemy import Enum, ForeignKey, Index, Integer, Numeric, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from storedesk.db.base import Base
from storedesk.models.mixins import TimestampMixin, UUIDPrimaryKeyMixin


class OrderStatus(str, enum.Enum):
    RECEIVED = "Order Received"
    PREPARING = "Preparing"
    READY = "Ready for Pickup"
    PICKED_UP = "Picked Up"
    CANCELED = "Canceled"

    @classmethod
    def values(cls) -> list[str]:
        return [s.value for s in cls]

    @property
    def is_terminal(self) -> bool:
        return self in (OrderStatus.PICKED_UP, OrderStatus.CANCELED)

    def can_transition_to(self, new: "OrderStatus") -> bool:
        """Forward-only pipeline; Canceled from any non-terminal state."""
        if self.is_terminal:
            return False
        if new is OrderStatus.CANCELED:
            return True
        pipeline = [OrderStatus.RECEIVED, OrderStatus.PREPARING, OrderStatus.READY, OrderStatus.PICKED_UP]
        return pipeline.index(new) > pipeline.index(self)


_status_enum = Enum(
    OrderStatus,
    values_callable=lambda e: [m.value for m in e],
    native_enum=False,
    length=30,
)


class Order(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "orders"
    __table_args__ = (
        Index("ix_orders_branch_created", "branch", "created_at"),
    )

    order_number: Mapped[str] = mapped_column(String(50), unique=True, nullable=False, index=True)
    status: Mapped[OrderStatus] = mapped_column(
        _status_enum, default=OrderStatus.RECEIVED, nullable=False, index=True
    )
    customer_name: Mapped[str] = mapped_column(String(255), nullable=False)
    customer_contact: Mapped[str] = mapped_column(String(100), nullable=False)
    total: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    branch: Mapped[str] = mapped_column(String(100), nullable=False)

    items = relationship(
        "OrderItem",
        back_populates="order",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="OrderItem.position",
    )

    def __repr__(self) -> str:
        return f"<Order {self.order_number} status={self.status.value}>"


class OrderItem(UUIDPrimaryKeyMixin, Base):
    __tablename__ = "order_items"

    position: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    variant: Mapped[str] = mapped_column(String(255), nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    branch: Mapped[str] = mapped_column(String(100), nullable=False)

    order_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True
    )
    # Non-owning reference: products may be deleted while orders keep pointing at them
    product_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False, index=True)

    order = relationship("Order", back_populates="items")

    def __repr__(self) -> str:
        return f"<OrderItem product={self.product_id} qty={self.quantity}>"
