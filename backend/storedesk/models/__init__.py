"""SQLAlchemy models for StoreDesk."""

from storedesk.models.admin import Admin, RoleType
from storedesk.models.product import Product
from storedesk.models.order import Order, OrderItem, OrderStatus
from storedesk.models.announcement import Announcement
from storedesk.models.slider_image import SliderImage

__all__ = [
    "Admin",
    "RoleType",
    "Product",
    "Order",
    "OrderItem",
    "OrderStatus",
    "Announcement",
    "SliderImage",
]
