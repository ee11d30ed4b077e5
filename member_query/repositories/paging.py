"""Paged search execution with optional count-query elision.

`fetch_page` is storage-agnostic: the caller supplies two coroutines, one that
reads a slice of rows and one that counts every row matching the same filter.

Count elision (`CountMode.OPTIMIZED`): when the request starts at offset 0 and
the content comes back shorter than a full page, the content *is* the whole
result set, so its length is the total and the count query is skipped. Every
other case runs the count query, including short pages at a non-zero offset.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Sequence
from typing import TypeVar

from member_query.core.pagination import CountMode, Page, PageRequest, SortOrder

logger = logging.getLogger(__name__)

T = TypeVar("T")

ContentFetcher = Callable[[int, int, Sequence[SortOrder]], Awaitable[Sequence[T]]]
CountFetcher = Callable[[], Awaitable[int]]


def can_elide_count(page_request: PageRequest, content_size: int) -> bool:
    """True when the first page is short, so no further rows can exist."""
    return page_request.offset == 0 and content_size < page_request.page_size


async def fetch_page(
    page_request: PageRequest,
    fetch_content: ContentFetcher[T],
    fetch_count: CountFetcher,
    mode: CountMode = CountMode.OPTIMIZED,
) -> Page[T]:
    """Fetch one page and resolve its total element count.

    Errors from either callable propagate unchanged; a page is only built once
    both the content and a trustworthy total are known. A count that comes back
    below the rows already read (a concurrent delete) is raised to match them.
    """
    content = list(
        await fetch_content(page_request.offset, page_request.page_size, page_request.sort)
    )

    if mode is CountMode.OPTIMIZED and can_elide_count(page_request, len(content)):
        logger.debug(
            "count query elided: offset=0 size=%d rows=%d",
            page_request.page_size, len(content),
        )
        total = len(content)
    else:
        total = await fetch_count()
        logger.debug(
            "count query ran (%s): offset=%d size=%d rows=%d total=%d",
            mode.value, page_request.offset, page_request.page_size, len(content), total,
        )
        seen = page_request.offset + len(content)
        if content and total < seen:
            # rows removed between the two queries
            logger.warning("count %d behind fetched rows %d; using %d", total, seen, seen)
            total = seen

    return Page(content=content, page_request=page_request, total_elements=total)
