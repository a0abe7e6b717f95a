from .jinja_renderer import JinjaTemplateRenderer
from .theme_catalog import FileSystemThemeCatalog

__all__ = [
    "JinjaTemplateRenderer",
    "FileSystemThemeCatalog",
]
