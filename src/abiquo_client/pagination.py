"""Lazy iteration over paginated collections."""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING, Any

from .models.base import CollectionDto

if TYPE_CHECKING:  # pragma: no cover - import-time guard
    from .client import AbiquoClient


def iterate_pages(client: AbiquoClient, first_page: CollectionDto) -> Iterator[Any]:
    """Yield every item of `first_page` and of the pages reachable through `next` links.

    Pages are fetched one GET at a time, only once the previous page is exhausted.
    """
    page: CollectionDto | None = first_page
    while page is not None:
        yield from page.collection
        next_link = page.search_link("next")
        if next_link is None:
            return
        page = client.get(next_link.href, type(page), accept=next_link.type)
