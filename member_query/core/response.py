"""Standardized JSON response envelope helpers."""


from typing import Generic, TypeVar

from pydantic import BaseModel
from pydantic.alias_generators import to_camel

from member_query.core.pagination import Page, PageMeta

T = TypeVar("T")


class DataResponse(BaseModel, Generic[T]):
    """Single-item response envelope: `{ data: {...} }`"""

    data: T

    model_config = {
        "populate_by_name": True,
        "alias_generator": to_camel,
    }


class ListResponse(BaseModel, Generic[T]):
    """Plain list response envelope: `{ data: [...] }`"""

    data: list[T]

    model_config = {
        "populate_by_name": True,
        "alias_generator": to_camel,
    }


class PageResponse(BaseModel, Generic[T]):
    """Paginated list response envelope: `{ data: [...], meta: {...} }`"""

    data: list[T]
    meta: PageMeta

    model_config = {
        "populate_by_name": True,
        "alias_generator": to_camel,
    }


def paginated(page: Page) -> dict:
    """Build a paginated response dict for use with PageResponse.

    `meta.page` is 1-based to match the `?page=` query parameter.
    """
    return {
        "data": page.content,
        "meta": {
            "total": page.total_elements,
            "page": page.number + 1,
            "size": page.size,
            "pages": page.total_pages,
            "has_next": page.has_next,
        },
    }
