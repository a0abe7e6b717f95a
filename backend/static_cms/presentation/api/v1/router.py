"""V1 API router — aggregates all v1 endpoint routers."""

from fastapi import APIRouter

from static_cms.presentation.api.v1.endpoints.health import router as health_router
from static_cms.presentation.api.v1.endpoints.articles import router as articles_router
from static_cms.presentation.api.v1.endpoints.build import router as build_router
from static_cms.presentation.api.v1.endpoints.build_logs import router as build_logs_router
from static_cms.presentation.api.v1.endpoints.sitemap import router as sitemap_router
from static_cms.presentation.api.v1.endpoints.templates import router as templates_router

router = APIRouter(prefix="/v1")
router.include_router(health_router)
router.include_router(build_logs_router)
router.include_router(build_router)
router.include_router(sitemap_router)
router.include_router(templates_router)
router.include_router(articles_router)
