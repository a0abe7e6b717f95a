"""Filesystem theme catalog — one directory per theme under the themes root.

Layout:
    <themes_dir>/<theme>/theme.json     — optional metadata
    <themes_dir>/<theme>/<template>.html — selectable templates
    <themes_dir>/<theme>/layout.html    — shared base template (not selectable)
"""

import json
import logging
from pathlib import Path

from static_cms.application.interfaces import ThemeCatalog
from static_cms.domain.entities import ThemeInfo

logger = logging.getLogger(__name__)

_METADATA_FILE = "theme.json"
_LAYOUT_TEMPLATE = "layout"
_METADATA_FIELDS = ("name", "description", "author", "version", "preview")


class FileSystemThemeCatalog(ThemeCatalog):
    """Infrastructure adapter listing the themes installed on disk."""

    def __init__(self, themes_dir: str | Path):
        self._root = Path(themes_dir)

    @property
    def root(self) -> Path:
        return self._root

    def has_theme(self, theme: str) -> bool:
        if not theme or theme.startswith(".") or "/" in theme or "\\" in theme:
            return False
        return (self._root / theme).is_dir()

    def has_template(self, theme: str, template: str) -> bool:
        return self.has_theme(theme) and (self._root / theme / f"{template}.html").is_file()

    def list_themes(self) -> list[ThemeInfo]:
        if not self._root.is_dir():
            logger.warning("Themes directory %s does not exist", self._root)
            return []
        return [
            self._load(entry)
            for entry in sorted(self._root.iterdir())
            if entry.is_dir() and not entry.name.startswith(".")
        ]

    def get_theme(self, theme: str) -> ThemeInfo | None:
        if not self.has_theme(theme):
            return None
        return self._load(self._root / theme)

    def _load(self, theme_dir: Path) -> ThemeInfo:
        info = ThemeInfo(key=theme_dir.name, name=theme_dir.name.capitalize())

        metadata_path = theme_dir / _METADATA_FILE
        if metadata_path.is_file():
            try:
                metadata = json.loads(metadata_path.read_text("utf-8"))
            except (OSError, ValueError) as exc:
                logger.warning("Ignoring unreadable %s: %s", metadata_path, exc)
                metadata = {}
            if isinstance(metadata, dict):
                for key in _METADATA_FIELDS:
                    value = metadata.get(key)
                    if isinstance(value, str):
                        setattr(info, key, value)

        info.templates = sorted(
            path.stem
            for path in theme_dir.glob("*.html")
            if path.is_file() and path.stem != _LAYOUT_TEMPLATE
        )
        return info
