"""V1 API router — aggregates all v1 endpoint routers."""

from fastapi import APIRouter

from oda.presentation.api.v1.endpoints.health import router as health_router
from oda.presentation.api.v1.endpoints.prompt import router as prompt_router
from oda.presentation.api.v1.endpoints.utilization import router as utilization_router

router = APIRouter(prefix="/v1")
router.include_router(health_router)
router.include_router(prompt_router)
router.include_router(utilization_router)
