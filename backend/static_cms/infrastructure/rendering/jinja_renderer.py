"""Jinja2 implementation of the TemplateRenderer port."""

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from jinja2 import (
    Environment,
    FileSystemLoader,
    StrictUndefined,
    TemplateNotFound,
    select_autoescape,
)
from jinja2 import TemplateError as JinjaTemplateError

from static_cms.application.interfaces import TemplateRenderer
from static_cms.domain.entities import TemplateKey
from static_cms.domain.exceptions import TemplateNotFoundError, TemplateRenderError

logger = logging.getLogger(__name__)


class JinjaTemplateRenderer(TemplateRenderer):
    """Renders theme templates with one Jinja environment per theme.

    Each theme directory is its own loader root, so ``{% extends "layout.html" %}``
    always resolves inside the theme being rendered. Environments are created
    lazily and never mutated afterwards.
    """

    def __init__(self, themes_dir: str | Path, strict: bool = False):
        self._root = Path(themes_dir)
        self._strict = strict
        self._environments: dict[str, Environment] = {}

    def _environment(self, theme: str) -> Environment:
        env = self._environments.get(theme)
        if env is None:
            options: dict[str, Any] = {}
            if self._strict:
                options["undefined"] = StrictUndefined
            env = Environment(
                loader=FileSystemLoader(str(self._root / theme)),
                autoescape=select_autoescape(["html", "xml"]),
                keep_trailing_newline=True,
                **options,
            )
            self._environments[theme] = env
        return env

    def render(self, key: TemplateKey, context: Mapping[str, Any]) -> str:
        env = self._environment(key.theme)
        try:
            template = env.get_template(key.filename)
        except TemplateNotFound as exc:
            raise TemplateNotFoundError(key.theme, key.name) from exc
        except JinjaTemplateError as exc:
            raise TemplateRenderError(str(key), str(exc)) from exc

        try:
            html = template.render(**context)
        except TemplateNotFound as exc:
            # a missing parent/include inside the theme
            raise TemplateNotFoundError(key.theme, exc.name or key.name) from exc
        except Exception as exc:
            # filters and globals can raise arbitrary errors mid-render
            raise TemplateRenderError(str(key), str(exc)) from exc

        logger.debug("Rendered %s (%d chars)", key, len(html))
        return html
