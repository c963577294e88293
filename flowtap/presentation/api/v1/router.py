"""V1 API router — aggregates all v1 endpoint routers."""

from fastapi import APIRouter

from flowtap.presentation.api.v1.endpoints.health import router as health_router
from flowtap.presentation.api.v1.endpoints.notifications import router as notifications_router
from flowtap.presentation.api.v1.endpoints.reports import router as reports_router
from flowtap.presentation.api.v1.endpoints.resource_actions import router as resource_actions_router
from flowtap.presentation.api.v1.endpoints.resources import router as resources_router
from flowtap.presentation.api.v1.endpoints.settings import router as settings_router
from flowtap.presentation.api.v1.endpoints.stores import router as stores_router

router = APIRouter(prefix="/v1")
router.include_router(health_router)
router.include_router(stores_router)
router.include_router(resource_actions_router)
router.include_router(resources_router)
router.include_router(reports_router)
router.include_router(settings_router)
router.include_router(notifications_router)
