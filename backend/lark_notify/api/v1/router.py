from fastapi import APIRouter

from lark_notify.api.v1.endpoints.health import router as health_router
from lark_notify.api.v1.endpoints.notifications import router as notifications_router

api_router = APIRouter()
api_router.include_router(health_router, tags=["health"])
api_router.include_router(notifications_router, prefix="/notifications", tags=["notifications"])
