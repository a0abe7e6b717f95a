"""Pydantic DTOs for static builds and the build log."""

from datetime import datetime

from pydantic import BaseModel, Field

from static_cms.domain.entities import BuildScope, BuildStatus, BuildType


class BuildLogResponse(BaseModel):
    """One build log record as returned to the client."""

    id: int
    build_type: BuildType
    build_scope: BuildScope = Field(validation_alias="scope")
    target_id: int
    status: BuildStatus
    error_message: str | None = None
    create_time: datetime

    model_config = {"from_attributes": True, "populate_by_name": True}


class BatchDeleteRequest(BaseModel):
    ids: list[int] = Field(..., min_length=1, examples=[[1, 2, 3]])


class ClearLogsRequest(BaseModel):
    days: int = Field(30, ge=1, examples=[30])


class CountResponse(BaseModel):
    count: int


class ArticleListBuildResponse(BaseModel):
    pages: int


class TagsBuildResponse(BaseModel):
    tags: int
    failed: int


class PagesBuildResponse(BaseModel):
    pages: int
    failed: int


class BuildAllResponse(BaseModel):
    index: int
    article_list_pages: int
    articles: int
    categories: int
    tags: int
    pages: int
    failed: int

    model_config = {"from_attributes": True}
