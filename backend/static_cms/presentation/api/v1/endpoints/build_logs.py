"""Build log endpoints — query and purge build records."""

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from static_cms.application.schemas import (
    ApiResponse,
    BatchDeleteRequest,
    BuildLogResponse,
    ClearLogsRequest,
    CountResponse,
    PaginatedData,
)
from static_cms.application.services import BuildLogService
from static_cms.domain.entities import BuildScope, BuildStatus
from static_cms.infrastructure.dependencies import get_build_log_service
from static_cms.presentation.api.responses import HANDLED_ERRORS, error_response, ok

router = APIRouter(prefix="/build/logs", tags=["Build Logs"])


@router.get("", response_model=ApiResponse[PaginatedData[BuildLogResponse]])
async def list_logs(
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100, alias="pageSize"),
    scope: BuildScope | None = Query(None, alias="type", description="Filter by build scope"),
    status: BuildStatus | None = None,
    service: BuildLogService = Depends(get_build_log_service),
) -> ApiResponse:
    """Paginated build records, newest first."""
    items, total = await service.list_logs(page=page, page_size=page_size, scope=scope, status=status)
    data = PaginatedData[BuildLogResponse].build(
        [BuildLogResponse.model_validate(log, from_attributes=True) for log in items],
        total=total,
        page=page,
        page_size=page_size,
    )
    return ok(data)


@router.post("/batch-delete", response_model=ApiResponse[CountResponse])
async def batch_delete_logs(
    body: BatchDeleteRequest,
    service: BuildLogService = Depends(get_build_log_service),
) -> ApiResponse | JSONResponse:
    try:
        count = await service.batch_delete(body.ids)
    except HANDLED_ERRORS as e:
        return error_response(e)
    return ok(CountResponse(count=count), f"Deleted {count} records")


@router.post("/clear", response_model=ApiResponse[CountResponse])
async def clear_logs(
    body: ClearLogsRequest,
    service: BuildLogService = Depends(get_build_log_service),
) -> ApiResponse | JSONResponse:
    """Delete records older than ``days`` days (at least 7)."""
    try:
        count = await service.clear_logs(body.days)
    except HANDLED_ERRORS as e:
        return error_response(e)
    return ok(CountResponse(count=count), f"Cleared {count} records")
