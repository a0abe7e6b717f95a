"""Maps logical template names onto templates of the active theme."""

import re

from static_cms.application.interfaces import ThemeCatalog
from static_cms.domain.entities import TemplateKey
from static_cms.domain.exceptions import TemplateNotFoundError, ThemeNotFoundError

_TEMPLATE_NAME_RE = re.compile(r"^[A-Za-z0-9_\-]+$")


class ThemeResolver:
    """Resolves ``(template_name, active_theme)`` to a TemplateKey.

    A missing theme is an operator misconfiguration and fails loudly; there
    is no fallback to another theme. The only I/O is the
    catalog's existence check.
    """

    def __init__(self, catalog: ThemeCatalog):
        self._catalog = catalog

    def resolve(self, template_name: str, active_theme: str) -> TemplateKey:
        if not self._catalog.has_theme(active_theme):
            raise ThemeNotFoundError(active_theme)
        name = (template_name or "").strip()
        if name.endswith(".html"):
            name = name[: -len(".html")]
        if not _TEMPLATE_NAME_RE.match(name):
            raise TemplateNotFoundError(active_theme, template_name)
        return TemplateKey(theme=active_theme, name=name)
