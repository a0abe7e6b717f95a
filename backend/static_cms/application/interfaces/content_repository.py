"""Read-only port over published content — the build engine's only view of the database."""

from abc import ABC, abstractmethod

from static_cms.domain.entities import Article, ArticleLink, Category, Page, Tag


class ContentRepository(ABC):
    """Port for content queries — implemented in the infrastructure layer.

    Every ``list_published_*``/``count_*`` query only sees published, active
    articles; single-entity getters return the entity regardless of status so
    the caller can tell "missing" from "not published".
    """

    # ── Articles ────────────────────────────────────────────────────

    @abstractmethod
    async def get_article(self, article_id: int) -> Article | None:
        """Retrieve one article with its category and tags, or None."""
        ...

    @abstractmethod
    async def list_latest_articles(self, limit: int) -> list[Article]:
        """Most recently created published articles, newest first."""
        ...

    @abstractmethod
    async def count_published_articles(self) -> int:
        ...

    @abstractmethod
    async def list_published_articles_page(self, page: int, page_size: int) -> list[Article]:
        """One 1-based page of published articles ordered by (is_top desc, publish_time desc, id desc)."""
        ...

    @abstractmethod
    async def list_published_articles(self) -> list[Article]:
        """All published articles ordered by id."""
        ...

    @abstractmethod
    async def get_previous_article(self, article_id: int) -> ArticleLink | None:
        """Nearest published article with a lower id."""
        ...

    @abstractmethod
    async def get_next_article(self, article_id: int) -> ArticleLink | None:
        """Nearest published article with a higher id."""
        ...

    # ── Categories ──────────────────────────────────────────────────

    @abstractmethod
    async def get_category(self, category_id: int) -> Category | None:
        ...

    @abstractmethod
    async def list_categories(self, published_only: bool = True) -> list[Category]:
        """Categories ordered by (sort asc, id asc)."""
        ...

    @abstractmethod
    async def list_category_articles(
        self, category_id: int, limit: int | None = None
    ) -> list[Article]:
        """Published articles whose main category is ``category_id``, newest first."""
        ...

    @abstractmethod
    async def count_category_articles(self, category_id: int) -> int:
        ...

    # ── Tags ────────────────────────────────────────────────────────

    @abstractmethod
    async def get_tag(self, tag_id: int) -> Tag | None:
        ...

    @abstractmethod
    async def list_tags(self, published_only: bool = True) -> list[Tag]:
        ...

    @abstractmethod
    async def list_tag_articles(self, tag_id: int) -> list[Article]:
        """Published articles linked to the tag, newest first."""
        ...

    # ── Pages ───────────────────────────────────────────────────────

    @abstractmethod
    async def get_page(self, page_id: int) -> Page | None:
        ...

    @abstractmethod
    async def list_pages(self, published_only: bool = True) -> list[Page]:
        ...
