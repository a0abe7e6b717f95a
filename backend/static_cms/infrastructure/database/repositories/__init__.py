from .article_repository import SQLAlchemyArticleRepository
from .build_log_repository import SQLAlchemyBuildLogRepository
from .config_repository import SQLAlchemyConfigStore, SQLAlchemyTemplateAssignmentRepository
from .content_repository import SQLAlchemyContentRepository

__all__ = [
    "SQLAlchemyArticleRepository",
    "SQLAlchemyBuildLogRepository",
    "SQLAlchemyConfigStore",
    "SQLAlchemyTemplateAssignmentRepository",
    "SQLAlchemyContentRepository",
]
