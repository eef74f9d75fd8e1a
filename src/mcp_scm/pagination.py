"""Pagination cursor normalization.

Vendors signal "more pages" differently. GitHub-style APIs send an RFC 5988
``Link`` header with ``rel="next"`` and friends; Stash-style APIs embed an
``isLastPage`` flag in the body. Both end up as a :class:`Page` on the
response envelope, and callers walk a listing by re-requesting
``page.next`` until it is unset.
"""

from __future__ import annotations

import re
from collections.abc import AsyncIterator, Awaitable, Callable
from typing import TypeVar
from urllib.parse import parse_qs, urlsplit

from .models.common import ListOptions, Page, Response

T = TypeVar("T")

# Matches:  <https://host/path?page=2>; rel="next"
_LINK_RE = re.compile(r'<([^>]*)>\s*;\s*rel="?([a-z]+)"?')


def _page_param(url: str) -> int | None:
    values = parse_qs(urlsplit(url).query).get("page")
    if not values:
        return None
    try:
        return int(values[0])
    except ValueError:
        return None


def page_from_link_header(value: str | None) -> Page:
    """Build a cursor from a ``Link`` header. Absent rels stay unset."""
    page = Page()
    if not value:
        return page
    for url, rel in _LINK_RE.findall(value):
        if rel in ("first", "next", "prev", "last"):
            setattr(page, rel, _page_param(url))
    return page


def normalize_last_page(
    page: Page, requested: int, *, is_last_page: bool, count: int
) -> Page:
    """Apply a vendor "last page" flag to *page*.

    More results exist only when the vendor says this is not the last page
    and the page actually carried items; otherwise ``next`` is left unset.
    """
    if is_last_page or count == 0:
        return page
    current = max(requested, 1)
    return page.model_copy(update={"first": 1, "next": current + 1})


async def iterate_pages(
    fetch: Callable[[ListOptions], Awaitable[tuple[list[T], Response]]],
    opts: ListOptions | None = None,
) -> AsyncIterator[T]:
    """Yield every item of a paginated listing, following ``page.next``."""
    opts = opts or ListOptions()
    while True:
        items, res = await fetch(opts)
        for item in items:
            yield item
        if res.page.next is None or res.page.next <= opts.page:
            return
        opts = opts.model_copy(update={"page": res.page.next})
