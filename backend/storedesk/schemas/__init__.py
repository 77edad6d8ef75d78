from storedesk.schemas.auth import (
    LoginRequest, LoginResponse, AdminProfile, CurrentAdmin,
    AdminCreate, AdminUpdate, AdminResponse,
)
from storedesk.schemas.product import (
    Variant, ProductCreate, ProductUpdate, ProductResponse, ProductSummary,
)
from storedesk.schemas.order import (
    CustomerInfo, OrderItemCreate, OrderCreate, StatusUpdate,
    OrderItemResponse, OrderResponse,
)
from storedesk.schemas.content import (
    AnnouncementUpdate, AnnouncementResponse,
    SliderImageCreate, SliderImageResponse, UploadResponse,
)
from storedesk.schemas.backup import (
    ProductRecord, OrderItemRecord, OrderRecord, RestoreResult,
)

__all__ = [
    "LoginRequest", "LoginResponse", "AdminProfile", "CurrentAdmin",
    "AdminCreate", "AdminUpdate", "AdminResponse",
    "Variant", "ProductCreate", "ProductUpdate", "ProductResponse", "ProductSummary",
    "CustomerInfo", "OrderItemCreate", "OrderCreate", "StatusUpdate",
    "OrderItemResponse", "OrderResponse",
    "AnnouncementUpdate", "AnnouncementResponse",
    "SliderImageCreate", "SliderImageResponse", "UploadResponse",
    "ProductRecord", "OrderItemRecord", "OrderRecord", "RestoreResult",
]
