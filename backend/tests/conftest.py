"""Shared in-memory fakes and fixtures for the static build tests."""

from datetime import datetime, timezone
from pathlib import Path

import pytest

from static_cms.application.interfaces import (
    ArticleRepository,
    BuildLogRepository,
    ConfigStore,
    ContentRepository,
    TemplateAssignmentRepository,
)
from static_cms.application.services import (
    BuildLogService,
    StaticBuildService,
    ThemeResolver,
)
from static_cms.domain.entities import (
    Article,
    ArticleLifecycle,
    ArticleLink,
    BuildLog,
    BuildScope,
    BuildStatus,
    Category,
    Page,
    SiteConfig,
    Tag,
)
from static_cms.infrastructure.rendering import FileSystemThemeCatalog, JinjaTemplateRenderer
from static_cms.infrastructure.storage.static_file_writer import LocalStaticFileWriter

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def _link(article: Article) -> ArticleLink:
    return ArticleLink(id=article.id, title=article.title)


class FakeContentRepository(ContentRepository):
    """In-memory fake content repository for unit testing."""

    def __init__(self):
        self.articles: dict[int, Article] = {}
        self.categories: dict[int, Category] = {}
        self.tags: dict[int, Tag] = {}
        self.pages: dict[int, Page] = {}

    def add(self, *entities):
        for entity in entities:
            target = {
                Article: self.articles,
                Category: self.categories,
                Tag: self.tags,
                Page: self.pages,
            }[type(entity)]
            target[entity.id] = entity

    def _published(self) -> list[Article]:
        return [a for a in self.articles.values() if a.is_published]

    @staticmethod
    def _newest_first(articles: list[Article]) -> list[Article]:
        return sorted(articles, key=lambda a: (a.create_time, a.id), reverse=True)

    async def get_article(self, article_id: int) -> Article | None:
        article = self.articles.get(article_id)
        if article is None or article.lifecycle == ArticleLifecycle.PURGED:
            return None
        return article

    async def list_latest_articles(self, limit: int) -> list[Article]:
        return self._newest_first(self._published())[:limit]

    async def count_published_articles(self) -> int:
        return len(self._published())

    async def list_published_articles_page(self, page: int, page_size: int) -> list[Article]:
        ordered = sorted(
            self._published(),
            key=lambda a: (a.is_top, a.publish_time is not None, a.publish_time or _EPOCH, a.id),
            reverse=True,
        )
        start = (page - 1) * page_size
        return ordered[start : start + page_size]

    async def list_published_articles(self) -> list[Article]:
        return sorted(self._published(), key=lambda a: a.id)

    async def get_previous_article(self, article_id: int) -> ArticleLink | None:
        lower = [a for a in self._published() if a.id < article_id]
        return _link(max(lower, key=lambda a: a.id)) if lower else None

    async def get_next_article(self, article_id: int) -> ArticleLink | None:
        higher = [a for a in self._published() if a.id > article_id]
        return _link(min(higher, key=lambda a: a.id)) if higher else None

    async def get_category(self, category_id: int) -> Category | None:
        return self.categories.get(category_id)

    async def list_categories(self, published_only: bool = True) -> list[Category]:
        items = [c for c in self.categories.values() if c.is_published or not published_only]
        return sorted(items, key=lambda c: (c.sort, c.id))

    async def list_category_articles(
        self, category_id: int, limit: int | None = None
    ) -> list[Article]:
        items = self._newest_first(
            [a for a in self._published() if a.category_id == category_id]
        )
        return items[:limit] if limit is not None else items

    async def count_category_articles(self, category_id: int) -> int:
        return len([a for a in self._published() if a.category_id == category_id])

    async def get_tag(self, tag_id: int) -> Tag | None:
        return self.tags.get(tag_id)

    async def list_tags(self, published_only: bool = True) -> list[Tag]:
        items = [t for t in self.tags.values() if t.is_published or not published_only]
        return sorted(items, key=lambda t: (t.sort, t.id))

    async def list_tag_articles(self, tag_id: int) -> list[Article]:
        return self._newest_first(
            [a for a in self._published() if any(t.id == tag_id for t in a.tags)]
        )

    async def get_page(self, page_id: int) -> Page | None:
        return self.pages.get(page_id)

    async def list_pages(self, published_only: bool = True) -> list[Page]:
        items = [p for p in self.pages.values() if p.is_published or not published_only]
        return sorted(items, key=lambda p: (p.sort, p.id))


class FakeBuildLogRepository(BuildLogRepository):
    """In-memory fake build log repository for unit testing."""

    def __init__(self):
        self.logs: list[BuildLog] = []
        self._next_id = 1

    def _filtered(self, scope: BuildScope | None, status: BuildStatus | None) -> list[BuildLog]:
        return [
            log
            for log in self.logs
            if (scope is None or log.scope == scope) and (status is None or log.status == status)
        ]

    async def create(self, log: BuildLog) -> BuildLog:
        log.id = self._next_id
        self._next_id += 1
        self.logs.append(log)
        return log

    async def get_all(
        self,
        *,
        skip: int = 0,
        limit: int = 20,
        scope: BuildScope | None = None,
        status: BuildStatus | None = None,
    ) -> list[BuildLog]:
        ordered = sorted(
            self._filtered(scope, status), key=lambda l: (l.create_time, l.id), reverse=True
        )
        return ordered[skip : skip + limit]

    async def count(
        self, *, scope: BuildScope | None = None, status: BuildStatus | None = None
    ) -> int:
        return len(self._filtered(scope, status))

    async def delete_by_ids(self, ids: list[int]) -> int:
        before = len(self.logs)
        self.logs = [log for log in self.logs if log.id not in set(ids)]
        return before - len(self.logs)

    async def delete_older_than(self, cutoff: datetime) -> int:
        before = len(self.logs)
        self.logs = [log for log in self.logs if log.create_time >= cutoff]
        return before - len(self.logs)


class FakeConfigStore(ConfigStore):
    def __init__(self, values: dict[str, str] | None = None):
        self.values = dict(values or {})

    async def get_all(self) -> dict[str, str]:
        return dict(self.values)

    async def get(self, key: str, default: str = "") -> str:
        return self.values.get(key, default)

    async def set(self, key: str, value: str) -> None:
        self.values[key] = value


class FakeTemplateAssignmentRepository(TemplateAssignmentRepository):
    def __init__(self):
        self.category_template: str | None = None
        self.page_template: str | None = None

    async def reset_category_templates(self, template: str) -> int:
        self.category_template = template
        return 3

    async def reset_page_templates(self, template: str) -> int:
        self.page_template = template
        return 2


class FakeArticleRepository(ArticleRepository):
    """In-memory fake for article lifecycle writes."""

    def __init__(self):
        self.articles: dict[int, Article] = {}

    async def get_by_id(self, article_id: int) -> Article | None:
        article = self.articles.get(article_id)
        if article is None or article.lifecycle == ArticleLifecycle.PURGED:
            return None
        return article

    async def update_status(self, article: Article) -> Article:
        self.articles[article.id] = article
        return article

    async def recycle(self, article_id: int) -> bool:
        article = await self.get_by_id(article_id)
        if article is None:
            return False
        article.lifecycle = ArticleLifecycle.RECYCLED
        return True

    async def purge(self, article_id: int) -> bool:
        return self.articles.pop(article_id, None) is not None


# ── Theme on disk ───────────────────────────────────────────────────

THEME_FILES = {
    "theme.json": '{"name": "Test Theme", "author": "tests", "version": "2.0.0"}',
    "layout.html": (
        "<html><head><title>{{ title }}</title></head>"
        "<body data-home=\"{{ is_home }}\">{% block content %}{% endblock %}</body></html>\n"
    ),
    "index.html": (
        '{% extends "layout.html" %}{% block content %}'
        '{% for a in articles %}<li data-id="{{ a.id }}">{{ a.title }}</li>{% endfor %}'
        "{% endblock %}"
    ),
    "articles.html": (
        '{% extends "layout.html" %}{% block content %}'
        '<p class="pagination">{{ pagination.current_page }}/{{ pagination.total_pages }}'
        " total={{ pagination.total }} size={{ pagination.page_size }}</p>"
        '{% for a in articles %}<li data-id="{{ a.id }}">{{ a.title }}</li>{% endfor %}'
        "{% endblock %}"
    ),
    "article.html": (
        '{% extends "layout.html" %}{% block content %}'
        "<h1>{{ article.title }}</h1>{{ article.content|safe }}"
        '<p class="prev">{{ prev.id if prev else "none" }}</p>'
        '<p class="next">{{ next.id if next else "none" }}</p>'
        "{% endblock %}"
    ),
    "category.html": (
        '{% extends "layout.html" %}{% block content %}<h1>{{ category.name }}</h1>'
        '{% for a in articles %}<li data-id="{{ a.id }}">{{ a.title }}</li>{% endfor %}'
        "{% endblock %}"
    ),
    "landing.html": "LANDING {{ category.name if category else page.title }}\n",
    "tag.html": (
        '{% extends "layout.html" %}{% block content %}<h1>{{ tag.name }}</h1>'
        "{% if tag.name == 'broken' %}{{ missing.attribute }}{% endif %}"
        '{% for a in articles %}<li data-id="{{ a.id }}">{{ a.title }}</li>{% endfor %}'
        "{% endblock %}"
    ),
    "page.html": '{% extends "layout.html" %}{% block content %}{{ page.content|safe }}{% endblock %}',
}


def write_theme(root: Path, name: str = "default", files: dict[str, str] | None = None) -> Path:
    theme_dir = root / name
    theme_dir.mkdir(parents=True, exist_ok=True)
    for filename, body in (files or THEME_FILES).items():
        (theme_dir / filename).write_text(body, encoding="utf-8")
    return theme_dir


@pytest.fixture
def themes_dir(tmp_path: Path) -> Path:
    root = tmp_path / "themes"
    write_theme(root)
    return root


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    return tmp_path / "html"


@pytest.fixture
def content() -> FakeContentRepository:
    return FakeContentRepository()


@pytest.fixture
def log_repo() -> FakeBuildLogRepository:
    return FakeBuildLogRepository()


@pytest.fixture
def config_store() -> FakeConfigStore:
    return FakeConfigStore()


@pytest.fixture
def assignments() -> FakeTemplateAssignmentRepository:
    return FakeTemplateAssignmentRepository()


@pytest.fixture
def article_repo() -> FakeArticleRepository:
    return FakeArticleRepository()


@pytest.fixture
def make_builder(content, log_repo, themes_dir, output_dir):
    """Factory for StaticBuildService over the fakes, the tmp theme and a tmp output root."""

    def _make(site: SiteConfig | None = None) -> StaticBuildService:
        return StaticBuildService(
            content=content,
            build_logs=BuildLogService(log_repo),
            resolver=ThemeResolver(FileSystemThemeCatalog(themes_dir)),
            renderer=JinjaTemplateRenderer(themes_dir),
            writer=LocalStaticFileWriter(output_dir),
            site=site or SiteConfig(),
        )

    return _make


@pytest.fixture
def builder(make_builder) -> StaticBuildService:
    return make_builder()
