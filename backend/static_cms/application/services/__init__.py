from .article_lifecycle_service import ArticleLifecycleService
from .auto_build_dispatcher import AutoBuildDispatcher
from .build_log_service import BuildLogService
from .sitemap_service import SitemapService
from .static_build_service import StaticBuildService
from .static_paths import UrlBuilder
from .theme_resolver import ThemeResolver
from .theme_service import ThemeService

__all__ = [
    "ArticleLifecycleService",
    "AutoBuildDispatcher",
    "BuildLogService",
    "SitemapService",
    "StaticBuildService",
    "ThemeResolver",
    "ThemeService",
    "UrlBuilder",
]
