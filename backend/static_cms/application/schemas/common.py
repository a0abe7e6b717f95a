"""Response envelope shared by every non-health endpoint."""

import math
import time
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """``{code, message, data, timestamp, error}`` — ``error`` is None on success."""

    code: int = 200
    message: str = "success"
    data: T | None = None
    timestamp: int = Field(default_factory=lambda: int(time.time()))
    error: str | None = None


class PaginatedData(BaseModel, Generic[T]):
    list: list[T]
    total: int
    page: int
    page_size: int
    total_pages: int

    @classmethod
    def build(cls, items: list[Any], total: int, page: int, page_size: int) -> "PaginatedData":
        return cls(
            list=items,
            total=total,
            page=page,
            page_size=page_size,
            total_pages=math.ceil(total / page_size) if page_size else 0,
        )
