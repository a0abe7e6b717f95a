"""Pydantic DTOs for article lifecycle transitions."""

from datetime import datetime

from pydantic import BaseModel

from static_cms.domain.entities import ArticleLifecycle, ArticleStatus


class ArticleStatusResponse(BaseModel):
    """Article state after a lifecycle transition."""

    id: int
    title: str
    status: ArticleStatus
    lifecycle: ArticleLifecycle
    publish_time: datetime | None = None
    update_time: datetime | None = None

    model_config = {"from_attributes": True}
