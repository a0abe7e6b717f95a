"""Article lifecycle endpoints — publish, take offline, delete."""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from static_cms.application.schemas import ApiResponse, ArticleStatusResponse
from static_cms.application.services import ArticleLifecycleService
from static_cms.infrastructure.dependencies import (
    get_article_lifecycle_service,
    get_recycle_bin_enabled,
)
from static_cms.presentation.api.responses import HANDLED_ERRORS, error_response, ok

router = APIRouter(prefix="/articles", tags=["Articles"])


@router.post("/{article_id}/publish", response_model=ApiResponse[ArticleStatusResponse])
async def publish_article(
    article_id: int,
    service: ArticleLifecycleService = Depends(get_article_lifecycle_service),
) -> ApiResponse | JSONResponse:
    """Publish an article; its static page is rebuilt in the background."""
    try:
        article = await service.publish(article_id)
    except HANDLED_ERRORS as e:
        return error_response(e)
    return ok(ArticleStatusResponse.model_validate(article, from_attributes=True), "Article published")


@router.post("/{article_id}/offline", response_model=ApiResponse[ArticleStatusResponse])
async def offline_article(
    article_id: int,
    service: ArticleLifecycleService = Depends(get_article_lifecycle_service),
) -> ApiResponse | JSONResponse:
    try:
        article = await service.offline(article_id)
    except HANDLED_ERRORS as e:
        return error_response(e)
    return ok(ArticleStatusResponse.model_validate(article, from_attributes=True), "Article taken offline")


@router.delete("/{article_id}", response_model=ApiResponse[dict])
async def delete_article(
    article_id: int,
    recycle_bin_enabled: bool = Depends(get_recycle_bin_enabled),
    service: ArticleLifecycleService = Depends(get_article_lifecycle_service),
) -> ApiResponse | JSONResponse:
    """Move an article to the recycle bin, or purge it when the bin is disabled."""
    try:
        await service.delete(article_id, recycle_bin_enabled)
    except HANDLED_ERRORS as e:
        return error_response(e)
    return ok({}, "Article moved to recycle bin" if recycle_bin_enabled else "Article deleted")
