"""Application service for theme management — listing, inspecting and switching themes."""

import logging
from typing import Any

from static_cms.application.interfaces import (
    ConfigStore,
    TemplateAssignmentRepository,
    ThemeCatalog,
)
from static_cms.domain.entities import ThemeInfo
from static_cms.domain.exceptions import ThemeNotFoundError, ThemeSwitchError

logger = logging.getLogger(__name__)

THEME_CONFIG_KEY = "current_template_theme"
INDEX_TEMPLATE_CONFIG_KEY = "index_template"
DEFAULT_THEME = "default"


class ThemeService:
    """Reads the installed themes and switches the active one."""

    def __init__(
        self,
        catalog: ThemeCatalog,
        config_store: ConfigStore,
        assignments: TemplateAssignmentRepository,
    ):
        self._catalog = catalog
        self._config = config_store
        self._assignments = assignments

    def list_themes(self) -> list[ThemeInfo]:
        return self._catalog.list_themes()

    async def current_theme_key(self) -> str:
        return await self._config.get(THEME_CONFIG_KEY, DEFAULT_THEME) or DEFAULT_THEME

    async def current_theme(self) -> ThemeInfo:
        """Info of the active theme; a configured but missing theme still reports its key."""
        key = await self.current_theme_key()
        info = self._catalog.get_theme(key)
        if info is None:
            logger.warning("Active theme '%s' is not installed", key)
            return ThemeInfo(key=key, name=key.capitalize())
        return info

    async def list_templates(self, theme_key: str | None = None) -> list[dict[str, Any]]:
        """Selectable templates of ``theme_key`` (defaults to the active theme)."""
        key = theme_key or await self.current_theme_key()
        info = self._catalog.get_theme(key)
        if info is None:
            raise ThemeNotFoundError(key)
        return [
            {
                "template_key": name,
                "name": name,
                "file": f"{name}.html",
                "theme": key,
            }
            for name in info.templates
        ]

    async def switch_theme(self, theme_key: str) -> ThemeInfo:
        """Make ``theme_key`` the active theme and reset per-entity template choices.

        Category and page template overrides from the previous theme are
        unlikely to exist in the new one, so they are pointed back at the
        theme's defaults when it ships them.
        """
        theme_key = (theme_key or "").strip()
        if not theme_key:
            raise ThemeSwitchError("No theme given")
        info = self._catalog.get_theme(theme_key)
        if info is None:
            raise ThemeSwitchError(f"Theme '{theme_key}' does not exist")

        await self._config.set(THEME_CONFIG_KEY, theme_key)
        if self._catalog.has_template(theme_key, "index"):
            await self._config.set(INDEX_TEMPLATE_CONFIG_KEY, "index")
        if self._catalog.has_template(theme_key, "category"):
            touched = await self._assignments.reset_category_templates("category")
            logger.info("Reset template of %d categories", touched)
        if self._catalog.has_template(theme_key, "page"):
            touched = await self._assignments.reset_page_templates("page")
            logger.info("Reset template of %d pages", touched)

        logger.info("Switched active theme to '%s'", theme_key)
        return info
