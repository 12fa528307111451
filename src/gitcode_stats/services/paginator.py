"""Exhaustive, strictly sequential page collection through the retry layer."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from gitcode_stats.domain.ports.gitcode_api import FetchFn, Retrier

logger = logging.getLogger(__name__)

PAGE_SIZE = 100


async def collect_all(
    retryer: Retrier,
    fetch: FetchFn,
    variables: Mapping[str, Any],
    *,
    page_size: int = PAGE_SIZE,
    max_pages: int | None = None,
) -> list[Any]:
    """Fetch page after page until the upstream returns a short page.

    A payload that is not a list, or an empty list, ends the collection
    with whatever was accumulated so far.  Errors raised by *retryer*
    abort the whole collection.

    Parameters
    ----------
    variables:
        Caller variables (e.g. ``{"username": ...}``); ``page`` and
        ``per_page`` are merged in for every request.
    max_pages:
        Optional safety cap.  ``None`` keeps paging until a short page.
    """
    collected: list[Any] = []
    page = 1

    while True:
        response = await retryer(fetch, {**variables, "page": page, "per_page": page_size})
        items = response.data

        if not isinstance(items, list) or not items:
            break

        collected.extend(items)
        logger.debug("Page %d: %d items (%d total)", page, len(items), len(collected))

        if len(items) < page_size:
            break

        if max_pages is not None and page >= max_pages:
            logger.warning(
                "Stopped paging after %d full pages (%d items); results may be incomplete",
                page,
                len(collected),
            )
            break

        page += 1

    return collected
