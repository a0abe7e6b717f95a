"""Concrete configuration store and template assignment repository backed by SQLAlchemy."""

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from static_cms.application.interfaces import ConfigStore, TemplateAssignmentRepository
from static_cms.infrastructure.database.models import CategoryModel, ConfigModel, PageModel


class SQLAlchemyConfigStore(ConfigStore):
    """Implements the ConfigStore port over the 'configs' key/value table."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def get_all(self) -> dict[str, str]:
        result = await self._session.execute(select(ConfigModel))
        return {row.config_key: row.config_value for row in result.scalars().all()}

    async def get(self, key: str, default: str = "") -> str:
        stmt = select(ConfigModel.config_value).where(ConfigModel.config_key == key)
        value = (await self._session.execute(stmt)).scalar_one_or_none()
        return value if value is not None else default

    async def set(self, key: str, value: str) -> None:
        stmt = select(ConfigModel).where(ConfigModel.config_key == key)
        model = (await self._session.execute(stmt)).scalar_one_or_none()
        if model is None:
            self._session.add(ConfigModel(config_key=key, config_value=value))
        else:
            model.config_value = value
        await self._session.flush()


class SQLAlchemyTemplateAssignmentRepository(TemplateAssignmentRepository):
    """Bulk template resets used when the active theme changes."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def reset_category_templates(self, template: str) -> int:
        result = await self._session.execute(update(CategoryModel).values(template=template))
        return result.rowcount or 0

    async def reset_page_templates(self, template: str) -> int:
        result = await self._session.execute(update(PageModel).values(template=template))
        return result.rowcount or 0
