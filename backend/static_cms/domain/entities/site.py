"""Site configuration snapshot and theme descriptors."""

from collections.abc import Mapping
from dataclasses import dataclass, field


@dataclass(frozen=True)
class SiteConfig:
    """Immutable snapshot of the site settings, taken once per build invocation."""

    site_name: str = "CMS"
    site_logo: str = ""
    site_favicon: str = ""
    site_url: str = ""
    site_copyright: str = ""
    site_icp: str = ""
    site_police: str = ""
    seo_title: str = ""
    seo_keywords: str = ""
    seo_description: str = ""
    thirdparty_code_pc: str = ""
    index_template: str = "index"
    current_template_theme: str = "default"

    @classmethod
    def from_mapping(cls, values: Mapping[str, str | None]) -> "SiteConfig":
        """Build a snapshot from raw config-store values, ignoring unknown keys.

        Empty values fall back to the field default so a blank
        ``current_template_theme`` never resolves to an empty theme name.
        """
        defaults = cls()
        kwargs = {}
        for name in cls.__dataclass_fields__:
            raw = values.get(name)
            kwargs[name] = raw if raw else getattr(defaults, name)
        return cls(**kwargs)

    @property
    def page_title(self) -> str:
        return self.seo_title or self.site_name


@dataclass
class ThemeInfo:
    """A theme directory plus its optional ``theme.json`` metadata."""

    key: str
    name: str
    description: str = ""
    author: str = ""
    version: str = "1.0.0"
    preview: str = ""
    templates: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class TemplateKey:
    """Concrete lookup key for one template of one theme."""

    theme: str
    name: str

    @property
    def filename(self) -> str:
        return f"{self.name}.html"

    def __str__(self) -> str:
        return f"{self.theme}/{self.filename}"
