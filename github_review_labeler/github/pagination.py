"""Follows GitHub Link header pagination across a full remote collection."""

from dataclasses import dataclass, field
from typing import AsyncIterator, Awaitable, Callable, Generic, TypeVar

import structlog

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)

T = TypeVar("T")


@dataclass
class Page(Generic[T]):
    """One page of a paginated collection and the URL of the page after it."""

    items: list[T] = field(default_factory=list)
    next_url: str | None = None


PageFetcher = Callable[[str], Awaitable[Page[T]]]


def parse_next_page_url(link_header: str | None) -> str | None:
    """Return the URL of the rel="next" entry of a Link header, if any.

    Format: <https://api.github.com/...?page=2>; rel="next", <...>; rel="last"

    Entries without a relation or with an unbracketed URL are skipped.
    """
    if not link_header:
        return None

    for link in link_header.split(","):
        segments = link.strip().split(";")

        # link must at least have href and rel
        if len(segments) < 2:
            continue

        href = segments[0].strip()
        if not href.startswith("<") or not href.endswith(">"):
            continue

        for segment in segments[1:]:
            if 'rel="next"' in segment:
                return href[1:-1]

    return None


async def iter_pages(fetch_page: PageFetcher[T], url: str) -> AsyncIterator[list[T]]:
    """Yield the items of every page, starting at url and following next links.

    A fetch error propagates immediately and no further pages are requested.
    """
    next_url: str | None = url
    page_number = 0
    while next_url is not None:
        page_number += 1
        logger.debug("Loading page", url=next_url, page=page_number)
        page = await fetch_page(next_url)
        yield page.items
        next_url = page.next_url


async def collect_pages(fetch_page: PageFetcher[T], url: str) -> list[T]:
    """Return the items of every page concatenated in server order."""
    all_items: list[T] = []
    async for items in iter_pages(fetch_page, url):
        all_items.extend(items)
    return all_items
