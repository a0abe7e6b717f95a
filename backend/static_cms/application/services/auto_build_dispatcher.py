"""Auto-build dispatcher — asyncio worker for post-publish article builds."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from static_cms.domain.entities import BuildType
from static_cms.domain.exceptions import EntityNotFoundError, StaticBuildError

logger = logging.getLogger(__name__)


class AutoBuildDispatcher:
    """Runs automatic article builds one at a time, detached from the request.

    Runs as an asyncio.Task inside FastAPI's lifespan. Each job gets its own
    database session; the build log record is committed whether the build
    succeeds or fails, and failures are logged, never raised to the caller
    that enqueued the job.

    ``service_factory`` receives the job's session and returns a
    StaticBuildService bound to it.
    """

    def __init__(
        self,
        service_factory: Callable[[Any], Awaitable[Any]],
        session_factory: Callable[[], Any] | None = None,
    ) -> None:
        if session_factory is None:
            from static_cms.infrastructure.database.session import async_session_factory

            session_factory = async_session_factory
        self._service_factory = service_factory
        self._session_factory = session_factory
        self._queue: asyncio.Queue[int] = asyncio.Queue()
        self._pending: set[int] = set()
        self._task: asyncio.Task | None = None

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def start(self) -> None:
        if self.is_running:
            return
        self._task = asyncio.create_task(self._loop())
        logger.info("AutoBuildDispatcher started")

    async def stop(self) -> None:
        """Stop the worker; queued jobs that have not started are dropped."""
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
        logger.info("AutoBuildDispatcher stopped")

    def enqueue_article(self, article_id: int) -> None:
        """Schedule a build of ``article_id``; a job already waiting is not duplicated."""
        if article_id in self._pending:
            logger.debug("Article #%d already queued for auto-build", article_id)
            return
        self._pending.add(article_id)
        self._queue.put_nowait(article_id)
        logger.info("Queued auto-build of article #%d (queue=%d)", article_id, self._queue.qsize())

    async def wait_idle(self) -> None:
        """Block until every queued job has been processed."""
        await self._queue.join()

    async def _loop(self) -> None:
        while True:
            article_id = await self._queue.get()
            self._pending.discard(article_id)
            try:
                await self._process(article_id)
            except Exception:
                logger.exception("Auto-build of article #%d crashed", article_id)
            finally:
                self._queue.task_done()

    async def _process(self, article_id: int) -> None:
        async with self._session_factory() as session:
            service = await self._service_factory(session)
            try:
                await service.build_article(article_id, BuildType.AUTO)
            except (EntityNotFoundError, StaticBuildError) as exc:
                logger.warning("Auto-build of article #%d failed: %s", article_id, exc)
            await session.commit()
