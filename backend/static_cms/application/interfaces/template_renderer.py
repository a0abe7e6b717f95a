"""Rendering ports — the theme catalog and the template engine."""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

from static_cms.domain.entities import TemplateKey, ThemeInfo


class ThemeCatalog(ABC):
    """Port describing the installed themes."""

    @abstractmethod
    def has_theme(self, theme: str) -> bool:
        ...

    @abstractmethod
    def list_themes(self) -> list[ThemeInfo]:
        ...

    @abstractmethod
    def get_theme(self, theme: str) -> ThemeInfo | None:
        ...

    @abstractmethod
    def has_template(self, theme: str, template: str) -> bool:
        ...


class TemplateRenderer(ABC):
    """Port for the templating capability: render(key, context) -> str."""

    @abstractmethod
    def render(self, key: TemplateKey, context: Mapping[str, Any]) -> str:
        """Render a template.

        Raises:
            TemplateNotFoundError: the template does not exist in the theme.
            TemplateRenderError: the template failed while rendering.
        """
        ...
