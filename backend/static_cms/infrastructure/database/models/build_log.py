"""SQLAlchemy ORM model for static build logs."""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from static_cms.infrastructure.database.base import Base


class StaticBuildLogModel(Base):
    """ORM model — maps to the 'static_build_logs' table."""

    __tablename__ = "static_build_logs"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    build_type: Mapped[str] = mapped_column(String(16), nullable=False, default="manual")
    build_scope: Mapped[str] = mapped_column(String(32), nullable=False, index=True)
    target_id: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    status: Mapped[str] = mapped_column(String(16), nullable=False, index=True)
    error_message: Mapped[str | None] = mapped_column(Text, nullable=True)
    create_time: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
        index=True,
    )

    def __repr__(self) -> str:
        return (
            f"<StaticBuildLogModel(id={self.id}, scope='{self.build_scope}', "
            f"target_id={self.target_id}, status='{self.status}')>"
        )
