"""Static build endpoints — manual triggers for every build scope."""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from static_cms.application.schemas import (
    ApiResponse,
    ArticleListBuildResponse,
    BuildAllResponse,
    PagesBuildResponse,
    TagsBuildResponse,
)
from static_cms.application.services import StaticBuildService
from static_cms.domain.entities import BuildType
from static_cms.infrastructure.dependencies import get_static_build_service
from static_cms.presentation.api.responses import HANDLED_ERRORS, error_response, ok

router = APIRouter(prefix="/build", tags=["Build"])


@router.post("/index", response_model=ApiResponse[dict])
async def build_index(
    service: StaticBuildService = Depends(get_static_build_service),
) -> ApiResponse | JSONResponse:
    """Regenerate ``index.html``."""
    try:
        await service.build_index()
    except HANDLED_ERRORS as e:
        return error_response(e)
    return ok({}, "Home page generated")


@router.post("/articles", response_model=ApiResponse[ArticleListBuildResponse])
async def build_article_list(
    service: StaticBuildService = Depends(get_static_build_service),
) -> ApiResponse | JSONResponse:
    """Regenerate every page of the article list."""
    try:
        pages = await service.build_article_list()
    except HANDLED_ERRORS as e:
        return error_response(e)
    return ok(ArticleListBuildResponse(pages=pages), f"Generated {pages} article list pages")


@router.post("/article/{article_id}", response_model=ApiResponse[dict])
async def build_article(
    article_id: int,
    build_type: BuildType = BuildType.MANUAL,
    service: StaticBuildService = Depends(get_static_build_service),
) -> ApiResponse | JSONResponse:
    try:
        await service.build_article(article_id, build_type)
    except HANDLED_ERRORS as e:
        return error_response(e)
    return ok({}, f"Article {article_id} generated")


@router.post("/category/{category_id}", response_model=ApiResponse[dict])
async def build_category(
    category_id: int,
    service: StaticBuildService = Depends(get_static_build_service),
) -> ApiResponse | JSONResponse:
    try:
        await service.build_category(category_id)
    except HANDLED_ERRORS as e:
        return error_response(e)
    return ok({}, f"Category {category_id} generated")


@router.post("/tag/{tag_id}", response_model=ApiResponse[dict])
async def build_tag(
    tag_id: int,
    service: StaticBuildService = Depends(get_static_build_service),
) -> ApiResponse | JSONResponse:
    try:
        await service.build_tag(tag_id)
    except HANDLED_ERRORS as e:
        return error_response(e)
    return ok({}, f"Tag {tag_id} generated")


@router.post("/tags", response_model=ApiResponse[TagsBuildResponse])
async def build_all_tags(
    service: StaticBuildService = Depends(get_static_build_service),
) -> ApiResponse | JSONResponse:
    """Build every enabled tag; failures are counted, not raised."""
    try:
        result = await service.build_all_tags()
    except HANDLED_ERRORS as e:
        return error_response(e)
    return ok(
        TagsBuildResponse(tags=result.built, failed=result.failed),
        f"Generated {result.built} tag pages, {result.failed} failed",
    )


@router.post("/page/{page_id}", response_model=ApiResponse[dict])
async def build_page(
    page_id: int,
    service: StaticBuildService = Depends(get_static_build_service),
) -> ApiResponse | JSONResponse:
    try:
        await service.build_page(page_id)
    except HANDLED_ERRORS as e:
        return error_response(e)
    return ok({}, f"Page {page_id} generated")


@router.post("/pages", response_model=ApiResponse[PagesBuildResponse])
async def build_all_pages(
    service: StaticBuildService = Depends(get_static_build_service),
) -> ApiResponse | JSONResponse:
    try:
        result = await service.build_all_pages()
    except HANDLED_ERRORS as e:
        return error_response(e)
    return ok(
        PagesBuildResponse(pages=result.built, failed=result.failed),
        f"Generated {result.built} pages, {result.failed} failed",
    )


@router.post("/all", response_model=ApiResponse[BuildAllResponse])
async def build_all(
    service: StaticBuildService = Depends(get_static_build_service),
) -> ApiResponse | JSONResponse:
    """Rebuild the entire static site."""
    try:
        summary = await service.build_all()
    except HANDLED_ERRORS as e:
        return error_response(e)
    message = "Full site generated"
    if summary.failed:
        message = f"Full site generated with {summary.failed} failures"
    return ok(BuildAllResponse.model_validate(summary, from_attributes=True), message)
