"""Theme management endpoints."""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from static_cms.application.schemas import (
    ApiResponse,
    SwitchThemeRequest,
    TemplateResponse,
    ThemeResponse,
)
from static_cms.application.services import ThemeService
from static_cms.infrastructure.dependencies import get_theme_service
from static_cms.presentation.api.responses import HANDLED_ERRORS, error_response, ok

router = APIRouter(prefix="/templates", tags=["Templates"])


@router.get("/themes", response_model=ApiResponse[list[ThemeResponse]])
async def list_themes(
    service: ThemeService = Depends(get_theme_service),
) -> ApiResponse:
    """Scan the themes directory."""
    themes = service.list_themes()
    return ok([ThemeResponse.model_validate(t, from_attributes=True) for t in themes])


@router.get("/current-theme", response_model=ApiResponse[ThemeResponse])
async def current_theme(
    service: ThemeService = Depends(get_theme_service),
) -> ApiResponse:
    theme = await service.current_theme()
    return ok(ThemeResponse.model_validate(theme, from_attributes=True))


@router.get("", response_model=ApiResponse[list[TemplateResponse]])
async def list_templates(
    theme_key: str | None = None,
    service: ThemeService = Depends(get_theme_service),
) -> ApiResponse | JSONResponse:
    """Selectable templates of a theme (the active one by default)."""
    try:
        templates = await service.list_templates(theme_key)
    except HANDLED_ERRORS as e:
        return error_response(e)
    return ok([TemplateResponse(**t) for t in templates])


@router.post("/switch-theme", response_model=ApiResponse[dict])
async def switch_theme(
    body: SwitchThemeRequest,
    service: ThemeService = Depends(get_theme_service),
) -> ApiResponse | JSONResponse:
    try:
        theme = await service.switch_theme(body.theme_key)
    except HANDLED_ERRORS as e:
        return error_response(e)
    return ok({}, f"Active theme switched to '{theme.key}'")
