from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class Variant(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    available: bool = True


# branch name -> ordered variant availability
BranchAvailability = dict[str, list[Variant]]


class ProductBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    category: str = Field(..., min_length=1, max_length=100)
    image: str = Field(..., max_length=500)
    price: float = Field(..., ge=0)
    branches: BranchAvailability = Field(default_factory=dict)


class ProductCreate(ProductBase):
    pass


class ProductUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    category: str | None = Field(None, min_length=1, max_length=100)
    image: str | None = Field(None, max_length=500)
    price: float | None = Field(None, ge=0)
    branches: BranchAvailability | None = None


class ProductResponse(ProductBase):
    model_config = ConfigDict(from_attributes=True)

    id: UUID


class ProductSummary(BaseModel):
    """Display fields resolved onto order items."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    price: float
