"""FastAPI dependency injection — wires infrastructure to application layer."""

from collections.abc import AsyncGenerator
from functools import lru_cache

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from static_cms.config import get_settings
from static_cms.application.interfaces import ConfigStore
from static_cms.application.services import (
    ArticleLifecycleService,
    AutoBuildDispatcher,
    BuildLogService,
    SitemapService,
    StaticBuildService,
    ThemeResolver,
    ThemeService,
    UrlBuilder,
)
from static_cms.domain.entities import SiteConfig
from static_cms.infrastructure.database.session import get_db_session
from static_cms.infrastructure.database.repositories import (
    SQLAlchemyArticleRepository,
    SQLAlchemyBuildLogRepository,
    SQLAlchemyConfigStore,
    SQLAlchemyContentRepository,
    SQLAlchemyTemplateAssignmentRepository,
)
from static_cms.infrastructure.rendering import FileSystemThemeCatalog, JinjaTemplateRenderer
from static_cms.infrastructure.storage.static_file_writer import LocalStaticFileWriter

RECYCLE_BIN_CONFIG_KEY = "recycle_bin_enable"


# ── Process-wide singletons ─────────────────────────────────────────

@lru_cache
def get_theme_catalog() -> FileSystemThemeCatalog:
    return FileSystemThemeCatalog(get_settings().themes_dir)


@lru_cache
def get_template_renderer() -> JinjaTemplateRenderer:
    """One renderer per process so compiled templates are cached across requests."""
    return JinjaTemplateRenderer(get_settings().themes_dir)


@lru_cache
def get_static_file_writer() -> LocalStaticFileWriter:
    return LocalStaticFileWriter(get_settings().static_output_dir)


@lru_cache
def get_auto_build_dispatcher() -> AutoBuildDispatcher:
    """Provides the singleton AutoBuildDispatcher started in the app lifespan."""
    return AutoBuildDispatcher(service_factory=build_static_build_service)


# ── Builders shared by requests and background jobs ─────────────────

async def load_site_config(config_store: ConfigStore) -> SiteConfig:
    return SiteConfig.from_mapping(await config_store.get_all())


async def build_static_build_service(
    session: AsyncSession, urls: UrlBuilder | None = None
) -> StaticBuildService:
    """Build a StaticBuildService bound to ``session``.

    Also used as the AutoBuildDispatcher's service_factory so each
    automatic build gets a service bound to its own session/transaction.
    """
    site = await load_site_config(SQLAlchemyConfigStore(session))
    return StaticBuildService(
        content=SQLAlchemyContentRepository(session),
        build_logs=BuildLogService(SQLAlchemyBuildLogRepository(session)),
        resolver=ThemeResolver(get_theme_catalog()),
        renderer=get_template_renderer(),
        writer=get_static_file_writer(),
        site=site,
        urls=urls or UrlBuilder(site.site_url),
    )


def public_base_url(site: SiteConfig, request: Request) -> str:
    """Configured site URL, else this server's origin plus the static mount segment."""
    if site.site_url:
        return site.site_url.rstrip("/")
    origin = str(request.base_url).rstrip("/")
    return f"{origin}/{get_settings().static_url_segment}"


# ── Request-scoped providers ────────────────────────────────────────

async def get_static_build_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[StaticBuildService, None]:
    """Provides a StaticBuildService with content, log, theme and writer wired up."""
    yield await build_static_build_service(session)


async def get_build_log_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[BuildLogService, None]:
    yield BuildLogService(SQLAlchemyBuildLogRepository(session))


async def get_sitemap_service(
    request: Request,
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[SitemapService, None]:
    """Provides a SitemapService whose links point at the public static site."""
    site = await load_site_config(SQLAlchemyConfigStore(session))
    yield SitemapService(
        content=SQLAlchemyContentRepository(session),
        writer=get_static_file_writer(),
        urls=UrlBuilder(public_base_url(site, request)),
        site_name=site.site_name,
    )


async def get_theme_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[ThemeService, None]:
    yield ThemeService(
        catalog=get_theme_catalog(),
        config_store=SQLAlchemyConfigStore(session),
        assignments=SQLAlchemyTemplateAssignmentRepository(session),
    )


class _AfterCommitScheduler:
    """Holds scheduled article builds until the request transaction is committed."""

    def __init__(self) -> None:
        self.article_ids: list[int] = []

    def enqueue_article(self, article_id: int) -> None:
        self.article_ids.append(article_id)


async def get_article_lifecycle_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[ArticleLifecycleService, None]:
    """Provides an ArticleLifecycleService that schedules builds on the dispatcher.

    Builds are handed to the dispatcher only after the status change is
    committed, otherwise the worker could read the article before it is
    published.
    """
    scheduled = _AfterCommitScheduler()
    yield ArticleLifecycleService(SQLAlchemyArticleRepository(session), scheduler=scheduled)
    await session.commit()
    dispatcher = get_auto_build_dispatcher()
    for article_id in scheduled.article_ids:
        dispatcher.enqueue_article(article_id)


async def get_recycle_bin_enabled(
    session: AsyncSession = Depends(get_db_session),
) -> bool:
    value = await SQLAlchemyConfigStore(session).get(RECYCLE_BIN_CONFIG_KEY, "open")
    return value != "close"
