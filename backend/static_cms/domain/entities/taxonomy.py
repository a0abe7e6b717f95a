"""Domain entities for categories, tags and standalone pages."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import IntEnum


class PublishStatus(IntEnum):
    """Status shared by categories, tags (enabled/disabled) and pages."""

    UNPUBLISHED = 0
    PUBLISHED = 1


@dataclass
class Category:
    """An article category. ``template`` overrides the theme's default."""

    name: str
    id: int | None = None
    parent_id: int = 0
    description: str | None = None
    template: str | None = None
    status: PublishStatus = PublishStatus.PUBLISHED
    sort: int = 0
    create_time: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    update_time: datetime | None = None

    @property
    def is_published(self) -> bool:
        return self.status == PublishStatus.PUBLISHED


@dataclass
class Tag:
    """A free-form label attached to articles through a many-to-many join."""

    name: str
    id: int | None = None
    description: str | None = None
    status: PublishStatus = PublishStatus.PUBLISHED
    sort: int = 0
    article_count: int = 0
    create_time: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    update_time: datetime | None = None

    @property
    def is_published(self) -> bool:
        return self.status == PublishStatus.PUBLISHED


@dataclass
class Page:
    """A standalone page rendered to ``{slug}.html``."""

    title: str
    slug: str
    content: str = ""
    id: int | None = None
    template: str | None = None
    status: PublishStatus = PublishStatus.UNPUBLISHED
    seo_keywords: str | None = None
    seo_description: str | None = None
    sort: int = 0
    create_time: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    update_time: datetime | None = None

    @property
    def is_published(self) -> bool:
        return self.status == PublishStatus.PUBLISHED

    @property
    def output_name(self) -> str:
        """File stem used for the static file — slug, or ``page-{id}`` without one."""
        return self.slug.strip() or f"page-{self.id}"
