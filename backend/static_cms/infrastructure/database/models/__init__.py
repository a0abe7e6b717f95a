from .article import ArticleCategoryModel, ArticleModel, ArticleTagModel
from .build_log import StaticBuildLogModel
from .config import ConfigModel
from .taxonomy import CategoryModel, PageModel, TagModel

__all__ = [
    "ArticleCategoryModel",
    "ArticleModel",
    "ArticleTagModel",
    "StaticBuildLogModel",
    "ConfigModel",
    "CategoryModel",
    "PageModel",
    "TagModel",
]
