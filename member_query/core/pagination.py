"""Pagination primitives: page requests, sort orders, pages, and the list-endpoint dependency."""

from __future__ import annotations

import dataclasses
import math
from enum import Enum
from typing import Generic, TypeVar

from fastapi import Query
from pydantic import BaseModel
from pydantic.alias_generators import to_camel

from member_query.core.config import settings
from member_query.core.exceptions import InvalidArgumentError

T = TypeVar("T")


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


class CountMode(str, Enum):
    """How a paged search resolves its total element count."""

    SIMPLE = "simple"  # always run the count query
    OPTIMIZED = "optimized"  # skip it when the first page is short


@dataclasses.dataclass(frozen=True)
class SortOrder:
    """Single sort criterion. Null values always sort last."""

    field: str
    direction: SortDirection = SortDirection.ASC

    @classmethod
    def parse(cls, raw: str) -> SortOrder:
        """Parse ``"field"``, ``"field,asc"`` or ``"field,desc"``."""
        field, _, direction = raw.partition(",")
        field = field.strip()
        if not field:
            raise InvalidArgumentError(f"Invalid sort expression '{raw}'")
        direction = direction.strip().lower() or SortDirection.ASC.value
        try:
            return cls(field, SortDirection(direction))
        except ValueError:
            raise InvalidArgumentError(
                f"Invalid sort direction '{direction}' (expected asc or desc)"
            ) from None


@dataclasses.dataclass(frozen=True)
class PageRequest:
    """Offset-based page descriptor.

    Construction fails fast with ``InvalidArgumentError`` so a bad request never
    reaches the database.
    """

    offset: int = 0
    page_size: int = 20
    sort: tuple[SortOrder, ...] = ()

    def __post_init__(self) -> None:
        if self.offset < 0:
            raise InvalidArgumentError("offset must be >= 0")
        if self.page_size <= 0:
            raise InvalidArgumentError("page_size must be > 0")

    @classmethod
    def of(cls, page: int, size: int, sort: tuple[SortOrder, ...] = ()) -> PageRequest:
        """Build a request from a 0-based page number."""
        if page < 0:
            raise InvalidArgumentError("page must be >= 0")
        if size <= 0:
            raise InvalidArgumentError("page_size must be > 0")
        return cls(offset=page * size, page_size=size, sort=tuple(sort))

    @property
    def page_number(self) -> int:
        return self.offset // self.page_size


@dataclasses.dataclass(frozen=True)
class Page(Generic[T]):
    """One slice of an ordered result set plus the total element count."""

    content: list[T]
    page_request: PageRequest
    total_elements: int

    def __post_init__(self) -> None:
        if len(self.content) > self.page_request.page_size:
            raise ValueError("page content exceeds page_size")
        if self.total_elements < len(self.content):
            raise ValueError("total_elements is smaller than the page content")

    @property
    def number(self) -> int:
        return self.page_request.page_number

    @property
    def size(self) -> int:
        return self.page_request.page_size

    @property
    def number_of_elements(self) -> int:
        return len(self.content)

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_elements / self.size)

    @property
    def is_first(self) -> bool:
        return self.page_request.offset == 0

    @property
    def has_next(self) -> bool:
        return self.page_request.offset + len(self.content) < self.total_elements

    @property
    def is_last(self) -> bool:
        return not self.has_next


class PaginationParams:
    """FastAPI dependency for `?page=1&size=20&sort=username,desc&mode=optimized`."""

    def __init__(
        self,
        page: int = Query(default=1, ge=1, description="Page number (1-based)"),
        size: int = Query(
            default=settings.default_page_size,
            ge=1,
            le=settings.max_page_size,
            description="Items per page",
        ),
        sort: list[str] | None = Query(
            default=None, description="Sort as `field` or `field,asc|desc`; repeatable"
        ),
        mode: CountMode = Query(
            default=CountMode(settings.default_count_mode),
            description="Total-count strategy",
        ),
    ):
        self.page = page
        self.size = size
        self.sort = sort or []
        self.mode = mode

    def to_page_request(self) -> PageRequest:
        return PageRequest.of(
            self.page - 1,
            self.size,
            tuple(SortOrder.parse(s) for s in self.sort),
        )


class PageMeta(BaseModel):
    total: int
    page: int
    size: int
    pages: int
    has_next: bool

    model_config = {"populate_by_name": True, "alias_generator": to_camel}
