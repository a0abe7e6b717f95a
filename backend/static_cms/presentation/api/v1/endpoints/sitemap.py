"""Sitemap endpoints — generate TXT, XML and HTML sitemaps."""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from static_cms.application.schemas import ApiResponse, SitemapAllResult, SitemapResult
from static_cms.application.services import SitemapService
from static_cms.infrastructure.dependencies import get_sitemap_service
from static_cms.presentation.api.responses import HANDLED_ERRORS, error_response, ok

router = APIRouter(prefix="/sitemap", tags=["Sitemap"])


@router.post("/txt", response_model=ApiResponse[SitemapResult])
async def generate_txt(
    service: SitemapService = Depends(get_sitemap_service),
) -> ApiResponse | JSONResponse:
    try:
        result = await service.generate_txt()
    except HANDLED_ERRORS as e:
        return error_response(e)
    return ok(SitemapResult(**result), "TXT sitemap generated")


@router.post("/xml", response_model=ApiResponse[SitemapResult])
async def generate_xml(
    service: SitemapService = Depends(get_sitemap_service),
) -> ApiResponse | JSONResponse:
    try:
        result = await service.generate_xml()
    except HANDLED_ERRORS as e:
        return error_response(e)
    return ok(SitemapResult(**result), "XML sitemap generated")


@router.post("/html", response_model=ApiResponse[SitemapResult])
async def generate_html(
    service: SitemapService = Depends(get_sitemap_service),
) -> ApiResponse | JSONResponse:
    try:
        result = await service.generate_html()
    except HANDLED_ERRORS as e:
        return error_response(e)
    return ok(SitemapResult(**result), "HTML sitemap generated")


@router.post("/all", response_model=ApiResponse[SitemapAllResult])
async def generate_all(
    service: SitemapService = Depends(get_sitemap_service),
) -> ApiResponse | JSONResponse:
    try:
        results = await service.generate_all()
    except HANDLED_ERRORS as e:
        return error_response(e)
    return ok(SitemapAllResult.model_validate(results), "All sitemaps generated")
