"""Concrete read-only content repository backed by SQLAlchemy."""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from static_cms.application.interfaces import ContentRepository
from static_cms.domain.entities import (
    Article,
    ArticleLifecycle,
    ArticleLink,
    ArticleStatus,
    Category,
    Page,
    PublishStatus,
    Tag,
)
from static_cms.infrastructure.database.models import (
    ArticleModel,
    ArticleTagModel,
    CategoryModel,
    PageModel,
    TagModel,
)
from static_cms.infrastructure.database.repositories.mappers import (
    article_to_entity,
    category_to_entity,
    page_to_entity,
    tag_to_entity,
)


def _published():
    """WHERE clause shared by every published-article query."""
    return (
        ArticleModel.status == int(ArticleStatus.PUBLISHED),
        ArticleModel.lifecycle == ArticleLifecycle.ACTIVE.value,
    )


class SQLAlchemyContentRepository(ContentRepository):
    """Implements the ContentRepository port using SQLAlchemy async sessions."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def _articles(self, stmt) -> list[Article]:
        result = await self._session.execute(stmt)
        return [article_to_entity(row) for row in result.scalars().all()]

    # ── Articles ────────────────────────────────────────────────────

    async def get_article(self, article_id: int) -> Article | None:
        stmt = select(ArticleModel).where(
            ArticleModel.id == article_id,
            ArticleModel.lifecycle != ArticleLifecycle.PURGED.value,
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return article_to_entity(model) if model else None

    async def list_latest_articles(self, limit: int) -> list[Article]:
        stmt = (
            select(ArticleModel)
            .where(*_published())
            .order_by(ArticleModel.create_time.desc(), ArticleModel.id.desc())
            .limit(limit)
        )
        return await self._articles(stmt)

    async def count_published_articles(self) -> int:
        stmt = select(func.count()).select_from(ArticleModel).where(*_published())
        return (await self._session.execute(stmt)).scalar_one()

    async def list_published_articles_page(self, page: int, page_size: int) -> list[Article]:
        stmt = (
            select(ArticleModel)
            .where(*_published())
            .order_by(
                ArticleModel.is_top.desc(),
                ArticleModel.publish_time.desc().nulls_last(),
                ArticleModel.id.desc(),
            )
            .offset((max(page, 1) - 1) * page_size)
            .limit(page_size)
        )
        return await self._articles(stmt)

    async def list_published_articles(self) -> list[Article]:
        stmt = select(ArticleModel).where(*_published()).order_by(ArticleModel.id)
        return await self._articles(stmt)

    async def get_previous_article(self, article_id: int) -> ArticleLink | None:
        stmt = (
            select(ArticleModel.id, ArticleModel.title)
            .where(ArticleModel.id < article_id, *_published())
            .order_by(ArticleModel.id.desc())
            .limit(1)
        )
        row = (await self._session.execute(stmt)).first()
        return ArticleLink(id=row.id, title=row.title) if row else None

    async def get_next_article(self, article_id: int) -> ArticleLink | None:
        stmt = (
            select(ArticleModel.id, ArticleModel.title)
            .where(ArticleModel.id > article_id, *_published())
            .order_by(ArticleModel.id.asc())
            .limit(1)
        )
        row = (await self._session.execute(stmt)).first()
        return ArticleLink(id=row.id, title=row.title) if row else None

    # ── Categories ──────────────────────────────────────────────────

    async def get_category(self, category_id: int) -> Category | None:
        model = await self._session.get(CategoryModel, category_id)
        return category_to_entity(model) if model else None

    async def list_categories(self, published_only: bool = True) -> list[Category]:
        stmt = select(CategoryModel).order_by(CategoryModel.sort.asc(), CategoryModel.id.asc())
        if published_only:
            stmt = stmt.where(CategoryModel.status == int(PublishStatus.PUBLISHED))
        result = await self._session.execute(stmt)
        return [category_to_entity(row) for row in result.scalars().all()]

    async def list_category_articles(
        self, category_id: int, limit: int | None = None
    ) -> list[Article]:
        stmt = (
            select(ArticleModel)
            .where(ArticleModel.category_id == category_id, *_published())
            .order_by(ArticleModel.create_time.desc(), ArticleModel.id.desc())
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        return await self._articles(stmt)

    async def count_category_articles(self, category_id: int) -> int:
        stmt = (
            select(func.count())
            .select_from(ArticleModel)
            .where(ArticleModel.category_id == category_id, *_published())
        )
        return (await self._session.execute(stmt)).scalar_one()

    # ── Tags ────────────────────────────────────────────────────────

    async def get_tag(self, tag_id: int) -> Tag | None:
        model = await self._session.get(TagModel, tag_id)
        return tag_to_entity(model) if model else None

    async def list_tags(self, published_only: bool = True) -> list[Tag]:
        stmt = select(TagModel).order_by(TagModel.sort.asc(), TagModel.id.asc())
        if published_only:
            stmt = stmt.where(TagModel.status == int(PublishStatus.PUBLISHED))
        result = await self._session.execute(stmt)
        return [tag_to_entity(row) for row in result.scalars().all()]

    async def list_tag_articles(self, tag_id: int) -> list[Article]:
        stmt = (
            select(ArticleModel)
            .join(ArticleTagModel, ArticleTagModel.article_id == ArticleModel.id)
            .where(ArticleTagModel.tag_id == tag_id, *_published())
            .order_by(ArticleModel.create_time.desc(), ArticleModel.id.desc())
        )
        return await self._articles(stmt)

    # ── Pages ───────────────────────────────────────────────────────

    async def get_page(self, page_id: int) -> Page | None:
        model = await self._session.get(PageModel, page_id)
        return page_to_entity(model) if model else None

    async def list_pages(self, published_only: bool = True) -> list[Page]:
        stmt = select(PageModel).order_by(PageModel.sort.asc(), PageModel.id.asc())
        if published_only:
            stmt = stmt.where(PageModel.status == int(PublishStatus.PUBLISHED))
        result = await self._session.execute(stmt)
        return [page_to_entity(row) for row in result.scalars().all()]
