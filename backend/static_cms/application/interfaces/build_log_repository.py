"""Abstract repository interface for static build logs."""

from abc import ABC, abstractmethod
from datetime import datetime

from static_cms.domain.entities import BuildLog, BuildScope, BuildStatus


class BuildLogRepository(ABC):
    """Port — defines persistence operations for build log records."""

    @abstractmethod
    async def create(self, log: BuildLog) -> BuildLog:
        """Persist a new build log entry.

        Returns:
            The created log with its assigned ID.
        """
        ...

    @abstractmethod
    async def get_all(
        self,
        *,
        skip: int = 0,
        limit: int = 20,
        scope: BuildScope | None = None,
        status: BuildStatus | None = None,
    ) -> list[BuildLog]:
        """Retrieve build logs, ordered by most recent first."""
        ...

    @abstractmethod
    async def count(
        self, *, scope: BuildScope | None = None, status: BuildStatus | None = None
    ) -> int:
        ...

    @abstractmethod
    async def delete_by_ids(self, ids: list[int]) -> int:
        """Delete the given records. Returns the number actually deleted."""
        ...

    @abstractmethod
    async def delete_older_than(self, cutoff: datetime) -> int:
        """Delete records created strictly before ``cutoff``."""
        ...
