from .article_repository import ArticleRepository
from .build_log_repository import BuildLogRepository
from .config_store import ConfigStore
from .content_repository import ContentRepository
from .static_file_writer import StaticFileWriter
from .template_assignment_repository import TemplateAssignmentRepository
from .template_renderer import TemplateRenderer, ThemeCatalog

__all__ = [
    "ArticleRepository",
    "BuildLogRepository",
    "ConfigStore",
    "ContentRepository",
    "StaticFileWriter",
    "TemplateAssignmentRepository",
    "TemplateRenderer",
    "ThemeCatalog",
]
