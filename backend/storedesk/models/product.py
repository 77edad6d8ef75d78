"""Product model."""

from decimal import Decimal

from sqlalchemy import JSON, Numeric, String
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from storedesk.db.base import Base
from storedesk.models.mixins import UUIDPrimaryKeyMixin


class Product(UUIDPrimaryKeyMixin, Base):
    __tablename__ = "products"

    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    category: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    image: Mapped[str] = mapped_column(String(500), nullable=False)
    price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)

    # branch name -> [{"name": variant, "available": bool}, ...], order preserved
    branches: Mapped[dict] = mapped_column(
        JSON().with_variant(JSONB, "postgresql"), default=dict, nullable=False
    )

    def __repr__(self) -> str:
        return f"<Product {self.name}>"
