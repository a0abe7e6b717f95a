"""Domain entities for static builds — scopes, outcomes and the build log."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class BuildType(str, Enum):
    """Who asked for the build."""

    MANUAL = "manual"
    AUTO = "auto"


class BuildScope(str, Enum):
    """Kind of build target.

    The first six are single-target scopes with a dedicated strategy; the
    remaining ones label the bulk operations in the build log.
    """

    INDEX = "index"
    ARTICLES = "articles"
    ARTICLE = "article"
    CATEGORY = "category"
    TAG = "tag"
    PAGE = "page"
    TAGS = "tags"
    PAGES = "pages"
    ALL = "all"


class BuildStatus(str, Enum):
    SUCCESS = "success"
    FAILED = "failed"


@dataclass
class BuildLog:
    """Append-only record of one build attempt."""

    build_type: BuildType
    scope: BuildScope
    status: BuildStatus
    target_id: int = 0
    error_message: str | None = None
    id: int | None = None
    create_time: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass
class BuildOutcome:
    """Result of a single successful build invocation."""

    scope: BuildScope
    target_id: int = 0
    files: list[str] = field(default_factory=list)


@dataclass
class BulkBuildResult:
    """Success and failure counters of a bulk build."""

    built: int = 0
    failed: int = 0


@dataclass
class BuildAllSummary:
    """Per-scope counters of a full rebuild."""

    index: int = 0
    article_list_pages: int = 0
    articles: int = 0
    categories: int = 0
    tags: int = 0
    pages: int = 0
    failed: int = 0
