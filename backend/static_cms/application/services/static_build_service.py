"""Static build orchestrator — turns published content into static HTML files.

Every operation follows the same pipeline:
    query content → resolve template → render → write → record build log

Single-target scopes are dispatched through a closed table keyed by
BuildScope. Bulk builds are plain sequences of single builds: a failing
member is counted and logged, never allowed to abort the rest of the batch.
"""

import logging
from collections.abc import Awaitable, Callable
from typing import Any

from static_cms.application.interfaces import (
    ContentRepository,
    StaticFileWriter,
    TemplateRenderer,
)
from static_cms.application.services.build_log_service import BuildLogService
from static_cms.application.services.static_paths import (
    ARTICLE_LIST_PAGE_SIZE,
    INDEX_ARTICLE_LIMIT,
    INDEX_PATH,
    UrlBuilder,
    article_list_page_count,
    article_list_path,
    article_path,
    category_path,
    page_path,
    tag_path,
)
from static_cms.application.services.theme_resolver import ThemeResolver
from static_cms.domain.entities import (
    BuildAllSummary,
    BuildOutcome,
    BuildScope,
    BuildStatus,
    BuildType,
    BulkBuildResult,
    SiteConfig,
)
from static_cms.domain.exceptions import (
    EntityNotFoundError,
    EntityNotPublishedError,
    StaticBuildError,
)
from static_cms.infrastructure.logging.colored_logger import BuildLogger, BuildStage

logger = logging.getLogger(__name__)
build_log = BuildLogger("StaticBuildService")

Strategy = Callable[[int], Awaitable[BuildOutcome]]


class StaticBuildService:
    """Orchestrates every static build operation.

    The service is created per request (or per automatic build job) with a
    SiteConfig snapshot, so all files produced by one invocation see the
    same site settings and the same active theme.
    """

    def __init__(
        self,
        content: ContentRepository,
        build_logs: BuildLogService,
        resolver: ThemeResolver,
        renderer: TemplateRenderer,
        writer: StaticFileWriter,
        site: SiteConfig,
        urls: UrlBuilder | None = None,
    ):
        self._content = content
        self._logs = build_logs
        self._resolver = resolver
        self._renderer = renderer
        self._writer = writer
        self._site = site
        self._urls = urls or UrlBuilder()

        self._strategies: dict[BuildScope, Strategy] = {
            BuildScope.INDEX: self._build_index,
            BuildScope.ARTICLES: self._build_article_list,
            BuildScope.ARTICLE: self._build_article,
            BuildScope.CATEGORY: self._build_category,
            BuildScope.TAG: self._build_tag,
            BuildScope.PAGE: self._build_page,
        }

    @property
    def site(self) -> SiteConfig:
        return self._site

    # ── Single builds ───────────────────────────────────────────────

    async def build(
        self,
        scope: BuildScope,
        target_id: int = 0,
        build_type: BuildType = BuildType.MANUAL,
    ) -> BuildOutcome:
        """Run one single-target build and record its outcome.

        Raises:
            ValueError: ``scope`` is a bulk scope.
            EntityNotFoundError: The target does not exist.
            StaticBuildError: The target could not be built.
        """
        strategy = self._strategies.get(scope)
        if strategy is None:
            raise ValueError(f"'{scope.value}' is not a single-target build scope")
        return await self._run(scope, target_id, build_type, strategy)

    async def build_index(self, build_type: BuildType = BuildType.MANUAL) -> BuildOutcome:
        return await self.build(BuildScope.INDEX, 0, build_type)

    async def build_article_list(self, build_type: BuildType = BuildType.MANUAL) -> int:
        """Regenerate every article list page; returns the number of pages written."""
        outcome = await self.build(BuildScope.ARTICLES, 0, build_type)
        return len(outcome.files)

    async def build_article(
        self, article_id: int, build_type: BuildType = BuildType.MANUAL
    ) -> BuildOutcome:
        return await self.build(BuildScope.ARTICLE, article_id, build_type)

    async def build_category(
        self, category_id: int, build_type: BuildType = BuildType.MANUAL
    ) -> BuildOutcome:
        return await self.build(BuildScope.CATEGORY, category_id, build_type)

    async def build_tag(self, tag_id: int, build_type: BuildType = BuildType.MANUAL) -> BuildOutcome:
        return await self.build(BuildScope.TAG, tag_id, build_type)

    async def build_page(self, page_id: int, build_type: BuildType = BuildType.MANUAL) -> BuildOutcome:
        return await self.build(BuildScope.PAGE, page_id, build_type)

    # ── Bulk builds ─────────────────────────────────────────────────

    async def build_all_tags(self, build_type: BuildType = BuildType.MANUAL) -> BulkBuildResult:
        with build_log.timed_step(BuildStage.BULK, "all tags"):
            tags = await self._content.list_tags(published_only=True)
            result = await self._build_each(BuildScope.TAG, [t.id for t in tags], build_type)
            await self._record_bulk(BuildScope.TAGS, build_type, result.failed, len(tags))
        build_log.stats(built=result.built, failed=result.failed)
        return result

    async def build_all_pages(self, build_type: BuildType = BuildType.MANUAL) -> BulkBuildResult:
        with build_log.timed_step(BuildStage.BULK, "all pages"):
            pages = await self._content.list_pages(published_only=True)
            result = await self._build_each(BuildScope.PAGE, [p.id for p in pages], build_type)
            await self._record_bulk(BuildScope.PAGES, build_type, result.failed, len(pages))
        build_log.stats(built=result.built, failed=result.failed)
        return result

    async def build_all(self, build_type: BuildType = BuildType.MANUAL) -> BuildAllSummary:
        """Rebuild the whole site: index, list pages, articles, categories, tags, pages."""
        summary = BuildAllSummary()
        attempted = 0

        with build_log.timed_step(BuildStage.BULK, "full site"):
            attempted += 1
            try:
                await self.build_index(build_type)
                summary.index = 1
            except (EntityNotFoundError, StaticBuildError):
                summary.failed += 1

            attempted += 1
            try:
                summary.article_list_pages = await self.build_article_list(build_type)
            except (EntityNotFoundError, StaticBuildError):
                summary.failed += 1

            articles = await self._content.list_published_articles()
            categories = await self._content.list_categories(published_only=True)
            tags = await self._content.list_tags(published_only=True)
            pages = await self._content.list_pages(published_only=True)

            for scope, ids, field_name in (
                (BuildScope.ARTICLE, [a.id for a in articles], "articles"),
                (BuildScope.CATEGORY, [c.id for c in categories], "categories"),
                (BuildScope.TAG, [t.id for t in tags], "tags"),
                (BuildScope.PAGE, [p.id for p in pages], "pages"),
            ):
                result = await self._build_each(scope, ids, build_type)
                setattr(summary, field_name, result.built)
                summary.failed += result.failed
                attempted += len(ids)

            await self._record_bulk(BuildScope.ALL, build_type, summary.failed, attempted)

        build_log.stats(
            index=summary.index,
            list_pages=summary.article_list_pages,
            articles=summary.articles,
            categories=summary.categories,
            tags=summary.tags,
            pages=summary.pages,
            failed=summary.failed,
        )
        return summary

    async def _build_each(
        self, scope: BuildScope, ids: list[int], build_type: BuildType
    ) -> BulkBuildResult:
        result = BulkBuildResult()
        for target_id in ids:
            try:
                await self.build(scope, target_id, build_type)
                result.built += 1
            except (EntityNotFoundError, StaticBuildError):
                # already recorded by _run
                result.failed += 1
        return result

    async def _record_bulk(
        self, scope: BuildScope, build_type: BuildType, failed: int, total: int
    ) -> None:
        await self._logs.record(
            build_type=build_type,
            scope=scope,
            target_id=0,
            status=BuildStatus.FAILED if failed else BuildStatus.SUCCESS,
            error_message=f"{failed} of {total} failed" if failed else None,
        )

    # ── Execution wrapper ───────────────────────────────────────────

    async def _run(
        self,
        scope: BuildScope,
        target_id: int,
        build_type: BuildType,
        strategy: Strategy,
    ) -> BuildOutcome:
        label = f"{scope.value} #{target_id}" if target_id else scope.value
        build_log.step_start(BuildStage.BUILD, label, type=build_type.value)
        try:
            outcome = await strategy(target_id)
        except (EntityNotFoundError, StaticBuildError) as exc:
            build_log.step_error(BuildStage.ERROR, label, error=exc)
            await self._logs.record_failure(build_type, scope, target_id, exc)
            raise
        except Exception as exc:
            build_log.step_error(BuildStage.ERROR, label, error=exc)
            logger.exception("Unexpected error while building %s", label)
            await self._logs.record_failure(build_type, scope, target_id, exc)
            raise StaticBuildError(f"Build of {label} failed: {exc}") from exc

        await self._logs.record_success(build_type, scope, target_id)
        build_log.step_complete(BuildStage.LOG, label, status=BuildStatus.SUCCESS.value)
        build_log.step_complete(BuildStage.BUILD, label, files=len(outcome.files))
        return outcome

    # ── Strategies ──────────────────────────────────────────────────

    async def _build_index(self, _: int) -> BuildOutcome:
        articles = await self._content.list_latest_articles(INDEX_ARTICLE_LIMIT)
        build_log.step_complete(BuildStage.QUERY, "Loaded index articles", count=len(articles))

        context = self._context(is_home=True, articles=articles)
        path = await self._render_to(self._site.index_template, context, INDEX_PATH)
        return BuildOutcome(scope=BuildScope.INDEX, files=[path])

    async def _build_article_list(self, _: int) -> BuildOutcome:
        total = await self._content.count_published_articles()
        total_pages = article_list_page_count(total, ARTICLE_LIST_PAGE_SIZE)
        build_log.step_complete(BuildStage.QUERY, "Article list", total=total, pages=total_pages)

        files = []
        for page in range(1, total_pages + 1):
            articles = await self._content.list_published_articles_page(
                page, ARTICLE_LIST_PAGE_SIZE
            )
            context = self._context(
                title=f"Articles - Page {page}" if page > 1 else "Articles",
                articles=articles,
                pagination={
                    "current_page": page,
                    "total_pages": total_pages,
                    "total": total,
                    "page_size": ARTICLE_LIST_PAGE_SIZE,
                },
            )
            files.append(await self._render_to("articles", context, article_list_path(page)))
        return BuildOutcome(scope=BuildScope.ARTICLES, files=files)

    async def _build_article(self, article_id: int) -> BuildOutcome:
        article = await self._content.get_article(article_id)
        if article is None:
            raise EntityNotFoundError("Article", article_id)
        if not article.is_published:
            raise EntityNotPublishedError("Article", article_id)

        prev = await self._content.get_previous_article(article_id)
        next_ = await self._content.get_next_article(article_id)
        build_log.step_complete(
            BuildStage.QUERY,
            "Article neighbours",
            prev=prev.id if prev else None,
            next=next_.id if next_ else None,
        )

        context = self._context(
            title=article.title,
            keywords=article.seo_keywords or "",
            description=article.seo_description or article.summary or "",
            article=article,
            prev=prev,
            next=next_,
        )
        path = await self._render_to("article", context, article_path(article_id))
        return BuildOutcome(scope=BuildScope.ARTICLE, target_id=article_id, files=[path])

    async def _build_category(self, category_id: int) -> BuildOutcome:
        category = await self._content.get_category(category_id)
        if category is None:
            raise EntityNotFoundError("Category", category_id)
        if not category.is_published:
            raise EntityNotPublishedError("Category", category_id)

        articles = await self._content.list_category_articles(category_id)
        build_log.step_complete(BuildStage.QUERY, "Category articles", count=len(articles))
        context = self._context(
            title=category.name,
            keywords=category.name,
            description=category.description or category.name,
            category=category,
            articles=articles,
        )
        path = await self._render_to(
            category.template or "category", context, category_path(category_id)
        )
        return BuildOutcome(scope=BuildScope.CATEGORY, target_id=category_id, files=[path])

    async def _build_tag(self, tag_id: int) -> BuildOutcome:
        tag = await self._content.get_tag(tag_id)
        if tag is None:
            raise EntityNotFoundError("Tag", tag_id)
        if not tag.is_published:
            raise EntityNotPublishedError("Tag", tag_id)

        articles = await self._content.list_tag_articles(tag_id)
        build_log.step_complete(BuildStage.QUERY, "Tag articles", count=len(articles))
        context = self._context(
            title=tag.name,
            keywords=tag.name,
            description=tag.description or tag.name,
            tag=tag,
            articles=articles,
        )
        path = await self._render_to("tag", context, tag_path(tag_id))
        return BuildOutcome(scope=BuildScope.TAG, target_id=tag_id, files=[path])

    async def _build_page(self, page_id: int) -> BuildOutcome:
        page = await self._content.get_page(page_id)
        if page is None:
            raise EntityNotFoundError("Page", page_id)
        if not page.is_published:
            raise EntityNotPublishedError("Page", page_id)

        context = self._context(
            title=page.title,
            keywords=page.seo_keywords or "",
            description=page.seo_description or "",
            page=page,
        )
        path = await self._render_to(
            page.template or "page", context, page_path(page.output_name)
        )
        return BuildOutcome(scope=BuildScope.PAGE, target_id=page_id, files=[path])

    # ── Helpers ─────────────────────────────────────────────────────

    def _context(
        self,
        *,
        is_home: bool = False,
        title: str | None = None,
        keywords: str | None = None,
        description: str | None = None,
        **extra: Any,
    ) -> dict[str, Any]:
        context: dict[str, Any] = {
            "config": self._site,
            "is_home": is_home,
            "urls": self._urls,
            "title": title or self._site.page_title,
            "keywords": keywords if keywords is not None else self._site.seo_keywords,
            "description": (
                description if description is not None else self._site.seo_description
            ),
        }
        context.update(extra)
        return context

    async def _render_to(self, template_name: str, context: dict[str, Any], output: str) -> str:
        key = self._resolver.resolve(template_name, self._site.current_template_theme)
        build_log.step_start(BuildStage.RENDER, str(key), output=output)
        html = self._renderer.render(key, context)
        path = await self._writer.write(output, html)
        build_log.step_complete(BuildStage.WRITE, output, chars=len(html))
        return path
