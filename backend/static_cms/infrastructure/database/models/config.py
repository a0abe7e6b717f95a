"""SQLAlchemy ORM model for key/value site configuration."""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from static_cms.infrastructure.database.base import Base


class ConfigModel(Base):
    """ORM model — maps to the 'configs' table."""

    __tablename__ = "configs"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    config_key: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    config_value: Mapped[str] = mapped_column(Text, nullable=False, default="")

    def __repr__(self) -> str:
        return f"<ConfigModel(key='{self.config_key}')>"
