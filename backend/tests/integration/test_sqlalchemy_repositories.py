"""Integration tests for the SQLAlchemy repositories on a throwaway SQLite database."""

from datetime import datetime, timedelta, timezone

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from static_cms.application.services import BuildLogService, StaticBuildService, ThemeResolver
from static_cms.config import get_settings
from static_cms.domain.entities import (
    ArticleLifecycle,
    BuildLog,
    BuildScope,
    BuildStatus,
    BuildType,
    SiteConfig,
)
from static_cms.infrastructure.database import (
    ArticleCategoryModel,
    ArticleModel,
    ArticleTagModel,
    Base,
    CategoryModel,
    PageModel,
    TagModel,
)
from static_cms.infrastructure.database.repositories import (
    SQLAlchemyArticleRepository,
    SQLAlchemyBuildLogRepository,
    SQLAlchemyConfigStore,
    SQLAlchemyContentRepository,
    SQLAlchemyTemplateAssignmentRepository,
)
from static_cms.infrastructure.rendering import FileSystemThemeCatalog, JinjaTemplateRenderer
from static_cms.infrastructure.storage.static_file_writer import LocalStaticFileWriter

T0 = datetime(2024, 5, 1, tzinfo=timezone.utc)


@pytest_asyncio.fixture
async def session(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'cms.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        await _seed(session)
        yield session
    await engine.dispose()


async def _seed(session: AsyncSession) -> None:
    session.add_all(
        [
            CategoryModel(id=1, name="News", sort=2),
            CategoryModel(id=2, name="Guides", sort=1, template="landing"),
            CategoryModel(id=3, name="Hidden", status=0),
            TagModel(id=1, name="python"),
            TagModel(id=2, name="old", status=0),
            PageModel(id=1, title="About", slug="about", content="<p>Us</p>", status=1),
            PageModel(id=2, title="Draft page", slug="draft", status=0),
        ]
    )
    # ids 1..7; 2 is a draft, 4 is recycled, 6 is offline
    statuses = {1: 1, 2: 0, 3: 1, 4: 1, 5: 1, 6: 3, 7: 1}
    for article_id, status in statuses.items():
        session.add(
            ArticleModel(
                id=article_id,
                title=f"Article {article_id}",
                content=f"<p>Body {article_id}</p>",
                category_id=1 if article_id != 7 else 2,
                status=status,
                lifecycle="recycled" if article_id == 4 else "active",
                is_top=article_id == 1,
                publish_time=T0 + timedelta(days=article_id),
                create_time=T0 + timedelta(days=article_id),
            )
        )
    await session.flush()
    session.add_all(
        [
            ArticleTagModel(article_id=3, tag_id=1),
            ArticleTagModel(article_id=5, tag_id=1),
            ArticleTagModel(article_id=2, tag_id=1),
            ArticleCategoryModel(article_id=1, category_id=1, is_main=True),
            ArticleCategoryModel(article_id=1, category_id=2, is_main=False),
        ]
    )
    await session.flush()


# ── Content repository ──────────────────────────────────────────────


@pytest.mark.asyncio
async def test_published_article_queries(session):
    repo = SQLAlchemyContentRepository(session)

    assert await repo.count_published_articles() == 4
    assert [a.id for a in await repo.list_latest_articles(3)] == [7, 5, 3]
    assert [a.id for a in await repo.list_published_articles()] == [1, 3, 5, 7]
    # pinned first, then newest publish_time
    assert [a.id for a in await repo.list_published_articles_page(1, 3)] == [1, 7, 5]
    assert [a.id for a in await repo.list_published_articles_page(2, 3)] == [3]


@pytest.mark.asyncio
async def test_prev_next_skip_unpublished_and_recycled(session):
    repo = SQLAlchemyContentRepository(session)

    assert (await repo.get_previous_article(5)).id == 3
    assert (await repo.get_next_article(3)).id == 5
    assert await repo.get_previous_article(1) is None
    assert await repo.get_next_article(7) is None


@pytest.mark.asyncio
async def test_get_article_maps_relations(session):
    repo = SQLAlchemyContentRepository(session)

    article = await repo.get_article(1)

    assert article.category.name == "News"
    assert article.is_top is True
    assert article.has_consistent_main_category()
    recycled = await repo.get_article(4)
    assert recycled.lifecycle == ArticleLifecycle.RECYCLED
    assert not recycled.is_published


@pytest.mark.asyncio
async def test_category_tag_and_page_queries(session):
    repo = SQLAlchemyContentRepository(session)

    assert [c.id for c in await repo.list_categories()] == [2, 1]
    assert [c.id for c in await repo.list_categories(published_only=False)] == [3, 2, 1]
    assert [a.id for a in await repo.list_category_articles(1)] == [5, 3, 1]
    assert [a.id for a in await repo.list_category_articles(1, limit=2)] == [5, 3]
    assert await repo.count_category_articles(1) == 3
    assert [t.id for t in await repo.list_tags()] == [1]
    assert [a.id for a in await repo.list_tag_articles(1)] == [5, 3]
    assert [p.slug for p in await repo.list_pages()] == ["about"]


# ── Write-side repositories ─────────────────────────────────────────


@pytest.mark.asyncio
async def test_build_log_repository_filters_and_purges(session):
    repo = SQLAlchemyBuildLogRepository(session)
    now = datetime.now(timezone.utc)
    for scope, status, age in (
        (BuildScope.ARTICLE, BuildStatus.SUCCESS, 40),
        (BuildScope.ARTICLE, BuildStatus.FAILED, 1),
        (BuildScope.INDEX, BuildStatus.SUCCESS, 0),
    ):
        await repo.create(
            BuildLog(
                build_type=BuildType.MANUAL,
                scope=scope,
                status=status,
                create_time=now - timedelta(days=age),
            )
        )

    assert await repo.count(scope=BuildScope.ARTICLE) == 2
    newest = await repo.get_all(limit=1)
    assert newest[0].scope == BuildScope.INDEX
    failed = await repo.get_all(status=BuildStatus.FAILED)
    assert [log.scope for log in failed] == [BuildScope.ARTICLE]

    assert await repo.delete_older_than(now - timedelta(days=30)) == 1
    assert await repo.count() == 2


@pytest.mark.asyncio
async def test_config_store_upserts(session):
    store = SQLAlchemyConfigStore(session)

    await store.set("site_name", "Example")
    await store.set("site_name", "Renamed")

    assert await store.get("site_name") == "Renamed"
    assert await store.get("missing", "fallback") == "fallback"
    assert await store.get_all() == {"site_name": "Renamed"}


@pytest.mark.asyncio
async def test_template_assignment_reset(session):
    repo = SQLAlchemyTemplateAssignmentRepository(session)

    assert await repo.reset_category_templates("category") == 3
    await repo.reset_page_templates("page")

    category = await SQLAlchemyContentRepository(session).get_category(2)
    assert category.template == "category"


@pytest.mark.asyncio
async def test_article_repository_recycle_and_purge(session):
    repo = SQLAlchemyArticleRepository(session)

    assert await repo.recycle(3) is True
    assert (await repo.get_by_id(3)).lifecycle == ArticleLifecycle.RECYCLED

    assert await repo.purge(1) is True
    assert await repo.get_by_id(1) is None
    assert await repo.purge(1) is False
    assert await repo.recycle(99) is False


# ── End to end with the shipped theme ───────────────────────────────


@pytest.mark.asyncio
async def test_full_build_with_default_theme(session, tmp_path):
    themes_dir = get_settings().themes_dir
    builder = StaticBuildService(
        content=SQLAlchemyContentRepository(session),
        build_logs=BuildLogService(SQLAlchemyBuildLogRepository(session)),
        resolver=ThemeResolver(FileSystemThemeCatalog(themes_dir)),
        renderer=JinjaTemplateRenderer(themes_dir, strict=False),
        writer=LocalStaticFileWriter(tmp_path / "html"),
        site=SiteConfig(site_name="Example"),
    )

    summary = await builder.build_all()

    # category 2 points at a template the default theme does not ship
    assert summary.failed == 1
    assert (summary.articles, summary.categories, summary.tags, summary.pages) == (4, 1, 1, 1)
    out = tmp_path / "html"
    assert "Article 7" in (out / "index.html").read_text("utf-8")
    assert "<p>Body 5</p>" in (out / "article" / "5.html").read_text("utf-8")
    assert "<p>Us</p>" in (out / "about.html").read_text("utf-8")
    assert not (out / "category" / "2.html").exists()

    logs = await SQLAlchemyBuildLogRepository(session).get_all(scope=BuildScope.ALL)
    assert logs[0].status == BuildStatus.FAILED
