"""Concrete repository for static build logs backed by SQLAlchemy."""

from datetime import datetime

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from static_cms.application.interfaces import BuildLogRepository
from static_cms.domain.entities import BuildLog, BuildScope, BuildStatus
from static_cms.infrastructure.database.models import StaticBuildLogModel
from static_cms.infrastructure.database.repositories.mappers import build_log_to_entity


class SQLAlchemyBuildLogRepository(BuildLogRepository):
    """Implements the BuildLogRepository port using SQLAlchemy."""

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_model(self, entity: BuildLog) -> StaticBuildLogModel:
        """Map domain entity → ORM model."""
        return StaticBuildLogModel(
            build_type=entity.build_type.value,
            build_scope=entity.scope.value,
            target_id=entity.target_id,
            status=entity.status.value,
            error_message=entity.error_message,
            create_time=entity.create_time,
        )

    @staticmethod
    def _filters(scope: BuildScope | None, status: BuildStatus | None) -> list:
        clauses = []
        if scope is not None:
            clauses.append(StaticBuildLogModel.build_scope == scope.value)
        if status is not None:
            clauses.append(StaticBuildLogModel.status == status.value)
        return clauses

    async def create(self, log: BuildLog) -> BuildLog:
        model = self._to_model(log)
        self._session.add(model)
        await self._session.flush()
        return build_log_to_entity(model)

    async def get_all(
        self,
        *,
        skip: int = 0,
        limit: int = 20,
        scope: BuildScope | None = None,
        status: BuildStatus | None = None,
    ) -> list[BuildLog]:
        stmt = (
            select(StaticBuildLogModel)
            .where(*self._filters(scope, status))
            .order_by(StaticBuildLogModel.create_time.desc(), StaticBuildLogModel.id.desc())
            .offset(skip)
            .limit(limit)
        )
        result = await self._session.execute(stmt)
        return [build_log_to_entity(row) for row in result.scalars().all()]

    async def count(
        self, *, scope: BuildScope | None = None, status: BuildStatus | None = None
    ) -> int:
        stmt = (
            select(func.count())
            .select_from(StaticBuildLogModel)
            .where(*self._filters(scope, status))
        )
        return (await self._session.execute(stmt)).scalar_one()

    async def delete_by_ids(self, ids: list[int]) -> int:
        if not ids:
            return 0
        result = await self._session.execute(
            delete(StaticBuildLogModel).where(StaticBuildLogModel.id.in_(ids))
        )
        await self._session.flush()
        return result.rowcount or 0

    async def delete_older_than(self, cutoff: datetime) -> int:
        result = await self._session.execute(
            delete(StaticBuildLogModel).where(StaticBuildLogModel.create_time < cutoff)
        )
        await self._session.flush()
        return result.rowcount or 0
