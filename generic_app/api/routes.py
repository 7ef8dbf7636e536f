from fastapi import APIRouter
from generic_app.api.routes_health import router as health_router
from generic_app.api.routes_entities import router as entities_router

router = APIRouter()
router.include_router(health_router, tags=["health"])
router.include_router(entities_router, tags=["entities"])
