"""Concrete repository for article lifecycle writes backed by SQLAlchemy."""

import logging

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from static_cms.application.interfaces import ArticleRepository
from static_cms.domain.entities import Article, ArticleLifecycle
from static_cms.infrastructure.database.models import (
    ArticleCategoryModel,
    ArticleModel,
    ArticleTagModel,
)
from static_cms.infrastructure.database.repositories.mappers import article_to_entity

logger = logging.getLogger(__name__)


class SQLAlchemyArticleRepository(ArticleRepository):
    """Implements the ArticleRepository port using SQLAlchemy async sessions."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def _get_model(self, article_id: int) -> ArticleModel | None:
        stmt = select(ArticleModel).where(
            ArticleModel.id == article_id,
            ArticleModel.lifecycle != ArticleLifecycle.PURGED.value,
        )
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def get_by_id(self, article_id: int) -> Article | None:
        model = await self._get_model(article_id)
        return article_to_entity(model) if model else None

    async def update_status(self, article: Article) -> Article:
        model = await self._get_model(article.id)
        if model is None:
            raise ValueError(f"Article {article.id} not found in database")
        model.status = int(article.status)
        model.publish_time = article.publish_time
        if article.update_time is not None:
            model.update_time = article.update_time
        await self._session.flush()
        return article_to_entity(model)

    async def recycle(self, article_id: int) -> bool:
        model = await self._get_model(article_id)
        if model is None:
            return False
        model.lifecycle = ArticleLifecycle.RECYCLED.value
        await self._session.flush()
        return True

    async def purge(self, article_id: int) -> bool:
        model = await self._get_model(article_id)
        if model is None:
            return False
        await self._session.execute(
            delete(ArticleTagModel).where(ArticleTagModel.article_id == article_id)
        )
        await self._session.execute(
            delete(ArticleCategoryModel).where(ArticleCategoryModel.article_id == article_id)
        )
        await self._session.execute(delete(ArticleModel).where(ArticleModel.id == article_id))
        logger.info("Purged article %d", article_id)
        return True
