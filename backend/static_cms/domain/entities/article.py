"""Domain entities — pure Python business objects, no framework dependencies."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum, IntEnum


class ArticleStatus(IntEnum):
    """Editorial status of an article. Only PUBLISHED articles are generated."""

    DRAFT = 0
    PUBLISHED = 1
    PENDING_REVIEW = 2
    OFFLINE = 3


class ArticleLifecycle(str, Enum):
    """Storage lifecycle of an article row."""

    ACTIVE = "active"
    RECYCLED = "recycled"
    PURGED = "purged"


@dataclass
class CategoryRef:
    """Minimal category projection embedded in articles."""

    id: int
    name: str


@dataclass
class TagRef:
    """Minimal tag projection embedded in articles."""

    id: int
    name: str


@dataclass
class ArticleCategoryLink:
    """Join record between an article and one of its categories."""

    category_id: int
    is_main: bool = False


@dataclass
class ArticleLink:
    """Navigation link to a neighbouring article — id and title only."""

    id: int
    title: str


@dataclass
class Article:
    """Core domain entity representing a CMS article."""

    title: str
    content: str
    category_id: int
    id: int | None = None
    summary: str | None = None
    seo_keywords: str | None = None
    seo_description: str | None = None
    status: ArticleStatus = ArticleStatus.DRAFT
    lifecycle: ArticleLifecycle = ArticleLifecycle.ACTIVE
    is_top: bool = False
    sort: int = 0
    author: str | None = None
    category: CategoryRef | None = None
    tags: list[TagRef] = field(default_factory=list)
    category_links: list[ArticleCategoryLink] = field(default_factory=list)
    publish_time: datetime | None = None
    create_time: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    update_time: datetime | None = None

    @property
    def is_published(self) -> bool:
        return self.status == ArticleStatus.PUBLISHED and self.lifecycle == ArticleLifecycle.ACTIVE

    def has_consistent_main_category(self) -> bool:
        """Exactly one main link must exist and it must point at ``category_id``.

        Articles without any links are accepted (older rows only carry
        ``category_id``).
        """
        if not self.category_links:
            return True
        mains = [link for link in self.category_links if link.is_main]
        return len(mains) == 1 and mains[0].category_id == self.category_id

    def publish(self) -> None:
        """Transition to published, stamping publish_time on first publication."""
        now = datetime.now(timezone.utc)
        self.status = ArticleStatus.PUBLISHED
        if self.publish_time is None:
            self.publish_time = now
        self.update_time = now

    def take_offline(self) -> None:
        self.status = ArticleStatus.OFFLINE
        self.update_time = datetime.now(timezone.utc)
