"""Article lifecycle transitions — publish, take offline, recycle or purge.

Publishing (and saving a published article) schedules an automatic static
build. The build runs on the AutoBuildDispatcher, detached from the
request, so a build failure never turns a successful publish into an error.
"""

import logging
from typing import Protocol

from static_cms.application.interfaces import ArticleRepository
from static_cms.domain.entities import Article, ArticleLifecycle
from static_cms.domain.exceptions import EntityNotFoundError

logger = logging.getLogger(__name__)


class BuildScheduler(Protocol):
    def enqueue_article(self, article_id: int) -> None:
        ...


class ArticleLifecycleService:
    def __init__(self, articles: ArticleRepository, scheduler: BuildScheduler | None = None):
        self._articles = articles
        self._scheduler = scheduler

    async def publish(self, article_id: int) -> Article:
        """Publish an article and schedule its automatic build.

        Raises:
            EntityNotFoundError: No active article with this id.
            ValueError: The article's category links disagree with its main category.
        """
        article = await self._get_active(article_id)
        if not article.has_consistent_main_category():
            raise ValueError(
                f"Article {article_id} must have exactly one main category link "
                f"matching category_id {article.category_id}"
            )
        article.publish()
        saved = await self._articles.update_status(article)
        logger.info("Published article #%d", article_id)
        self.notify_saved(saved)
        return saved

    async def offline(self, article_id: int) -> Article:
        article = await self._get_active(article_id)
        article.take_offline()
        saved = await self._articles.update_status(article)
        logger.info("Took article #%d offline", article_id)
        return saved

    async def delete(self, article_id: int, recycle_bin_enabled: bool) -> None:
        """Recycle (row kept, invisible to builds) or purge (row and links removed)."""
        if recycle_bin_enabled:
            found = await self._articles.recycle(article_id)
        else:
            found = await self._articles.purge(article_id)
        if not found:
            raise EntityNotFoundError("Article", article_id)
        logger.info(
            "%s article #%d", "Recycled" if recycle_bin_enabled else "Purged", article_id
        )

    def notify_saved(self, article: Article) -> None:
        """Hook for the content CRUD layer: schedule a rebuild of a saved published article."""
        if self._scheduler is None or article.id is None or not article.is_published:
            return
        self._scheduler.enqueue_article(article.id)

    async def _get_active(self, article_id: int) -> Article:
        article = await self._articles.get_by_id(article_id)
        if article is None or article.lifecycle != ArticleLifecycle.ACTIVE:
            raise EntityNotFoundError("Article", article_id)
        return article
