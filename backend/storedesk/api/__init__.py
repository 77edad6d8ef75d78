from fastapi import APIRouter

from storedesk.core.config import settings
from .admins import router as admins_router
from .auth import router as auth_router
from .content import router as content_router
from .orders import router as orders_router
from .products import router as products_router
from .uploads import router as uploads_router

api_router = APIRouter(prefix=settings.API_PREFIX)
api_router.include_router(auth_router)
api_router.include_router(admins_router)
api_router.include_router(orders_router)
api_router.include_router(products_router)
api_router.include_router(uploads_router)
api_router.include_router(content_router)
