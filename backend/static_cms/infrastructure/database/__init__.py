from .base import Base
from .session import engine, async_session_factory, get_db_session
from .models import (
    ArticleCategoryModel,
    ArticleModel,
    ArticleTagModel,
    CategoryModel,
    ConfigModel,
    PageModel,
    StaticBuildLogModel,
    TagModel,
)

__all__ = [
    "Base",
    "engine",
    "async_session_factory",
    "get_db_session",
    "ArticleCategoryModel",
    "ArticleModel",
    "ArticleTagModel",
    "CategoryModel",
    "ConfigModel",
    "PageModel",
    "StaticBuildLogModel",
    "TagModel",
]
