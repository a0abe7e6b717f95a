"""Build log sink — single entry point for recording and purging build outcomes.

Every build invocation, successful or not, ends up as exactly one
append-only record here.
"""

import logging
from datetime import datetime, timedelta, timezone

from static_cms.application.interfaces import BuildLogRepository
from static_cms.domain.entities import BuildLog, BuildScope, BuildStatus, BuildType
from static_cms.domain.exceptions import InvalidRetentionError

logger = logging.getLogger(__name__)

MIN_RETENTION_DAYS = 7
MAX_PAGE_SIZE = 100


class BuildLogService:
    """Records build attempts and serves the log query/purge operations.

    Usage:
        sink = BuildLogService(log_repository)
        await sink.record_success(BuildType.MANUAL, BuildScope.ARTICLE, 5)
    """

    def __init__(self, log_repository: BuildLogRepository):
        self._repo = log_repository

    async def record(
        self,
        *,
        build_type: BuildType,
        scope: BuildScope,
        target_id: int,
        status: BuildStatus,
        error_message: str | None = None,
    ) -> BuildLog:
        """Persist one build attempt.

        Args:
            build_type: Manual (API) or automatic (post-publish) build.
            scope: What was built.
            target_id: Entity id, 0 for scope-less builds.
            status: Outcome of the attempt.
            error_message: Failure reason when status is FAILED.
        """
        entry = BuildLog(
            build_type=build_type,
            scope=scope,
            target_id=target_id,
            status=status,
            error_message=error_message,
        )
        saved = await self._repo.create(entry)

        if status == BuildStatus.SUCCESS:
            logger.info("Build [%s] #%d %s ok", scope.value, target_id, build_type.value)
        else:
            logger.warning(
                "Build [%s] #%d %s failed: %s",
                scope.value,
                target_id,
                build_type.value,
                error_message,
            )
        return saved

    async def record_success(
        self, build_type: BuildType, scope: BuildScope, target_id: int = 0
    ) -> BuildLog:
        return await self.record(
            build_type=build_type, scope=scope, target_id=target_id, status=BuildStatus.SUCCESS
        )

    async def record_failure(
        self, build_type: BuildType, scope: BuildScope, target_id: int, error: Exception | str
    ) -> BuildLog:
        """Convenience method for logging failed builds."""
        return await self.record(
            build_type=build_type,
            scope=scope,
            target_id=target_id,
            status=BuildStatus.FAILED,
            error_message=str(error),
        )

    async def list_logs(
        self,
        page: int = 1,
        page_size: int = 20,
        scope: BuildScope | None = None,
        status: BuildStatus | None = None,
    ) -> tuple[list[BuildLog], int]:
        """Return one page of records (newest first) and the filtered total."""
        page = max(page, 1)
        page_size = min(max(page_size, 1), MAX_PAGE_SIZE)
        total = await self._repo.count(scope=scope, status=status)
        items = await self._repo.get_all(
            skip=(page - 1) * page_size, limit=page_size, scope=scope, status=status
        )
        return items, total

    async def batch_delete(self, ids: list[int]) -> int:
        deleted = await self._repo.delete_by_ids(sorted(set(ids)))
        logger.info("Deleted %d build log records", deleted)
        return deleted

    async def clear_logs(self, days: int) -> int:
        """Delete records older than ``days`` days; at least a week is always kept."""
        if days < MIN_RETENTION_DAYS:
            raise InvalidRetentionError(days, MIN_RETENTION_DAYS)
        cutoff = datetime.now(timezone.utc) - timedelta(days=days)
        deleted = await self._repo.delete_older_than(cutoff)
        logger.info("Cleared %d build log records older than %s", deleted, cutoff.isoformat())
        return deleted
