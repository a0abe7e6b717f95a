from .article import ArticleStatusResponse
from .build import (
    ArticleListBuildResponse,
    BatchDeleteRequest,
    BuildAllResponse,
    BuildLogResponse,
    ClearLogsRequest,
    CountResponse,
    PagesBuildResponse,
    TagsBuildResponse,
)
from .common import ApiResponse, PaginatedData
from .sitemap import SitemapAllResult, SitemapResult
from .theme import SwitchThemeRequest, TemplateResponse, ThemeResponse

__all__ = [
    "ApiResponse",
    "ArticleListBuildResponse",
    "ArticleStatusResponse",
    "BatchDeleteRequest",
    "BuildAllResponse",
    "BuildLogResponse",
    "ClearLogsRequest",
    "CountResponse",
    "PagesBuildResponse",
    "PaginatedData",
    "SitemapAllResult",
    "SitemapResult",
    "SwitchThemeRequest",
    "TagsBuildResponse",
    "TemplateResponse",
    "ThemeResponse",
]
