"""Abstract repository interfaces (ports) — define the contract, not the implementation."""

from abc import ABC, abstractmethod

from static_cms.domain.entities import Article


class ArticleRepository(ABC):
    """Port for article lifecycle writes — implemented in the infrastructure layer."""

    @abstractmethod
    async def get_by_id(self, article_id: int) -> Article | None:
        """Retrieve a single active or recycled article by its ID."""
        ...

    @abstractmethod
    async def update_status(self, article: Article) -> Article:
        """Persist status, publish_time and update_time of an existing article."""
        ...

    @abstractmethod
    async def recycle(self, article_id: int) -> bool:
        """Move an article to the recycle bin. Returns False if not found."""
        ...

    @abstractmethod
    async def purge(self, article_id: int) -> bool:
        """Delete an article and its tag/category links. Returns False if not found."""
        ...
