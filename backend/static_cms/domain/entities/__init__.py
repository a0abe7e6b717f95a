from .article import (
    Article,
    ArticleCategoryLink,
    ArticleLifecycle,
    ArticleLink,
    ArticleStatus,
    CategoryRef,
    TagRef,
)
from .taxonomy import Category, Page, PublishStatus, Tag
from .build import (
    BuildAllSummary,
    BuildLog,
    BuildOutcome,
    BuildScope,
    BuildStatus,
    BuildType,
    BulkBuildResult,
)
from .site import SiteConfig, TemplateKey, ThemeInfo

__all__ = [
    "Article",
    "ArticleCategoryLink",
    "ArticleLifecycle",
    "ArticleLink",
    "ArticleStatus",
    "CategoryRef",
    "TagRef",
    "Category",
    "Page",
    "PublishStatus",
    "Tag",
    "BuildAllSummary",
    "BuildLog",
    "BuildOutcome",
    "BuildScope",
    "BuildStatus",
    "BuildType",
    "BulkBuildResult",
    "SiteConfig",
    "TemplateKey",
    "ThemeInfo",
]
