"""Shared Pydantic schemas — pagination envelope."""

from typing import Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class PageResponse(BaseModel, Generic[T]):
    """Paginated list envelope. ``page`` is zero-based."""

    items: list[T]
    total: int
    page: int
    size: int
    pages: int
