from fastapi import APIRouter

from ._health import router as health_router
from ._logs import router as logs_router
from ._services import router as services_router

router = APIRouter(prefix="/api")

router.include_router(services_router)
router.include_router(logs_router)
router.include_router(health_router)
