"""Resolve a page selection ("all", "odd", "1,3,5", ...) against a page count."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from ...errors import NoValidPagesError

_logger = logging.getLogger(__name__)

__all__ = ["PAGE_SENTINELS", "PageSelection", "resolve_pages"]

PAGE_SENTINELS = ("all", "even", "odd", "first", "last")

PageSelection = str | Iterable[int]


def _parse_page_list(spec: str) -> list[int]:
    """Parse a comma-separated page list, dropping entries that are not integers."""
    numbers: list[int] = []
    for part in spec.split(","):
        token = part.strip()
        if not token:
            continue
        try:
            numbers.append(int(token))
        except ValueError:
            _logger.debug("Ignoring non-numeric page entry %r", token)
    return numbers


def resolve_pages(pages: PageSelection, page_count: int) -> list[int]:
    """Resolve a page selection to sorted, unique 1-based page numbers.

    Sentinels: ``"all"``, ``"even"``, ``"odd"``, ``"first"``, ``"last"``.
    Anything else is treated as a comma-separated list (or an iterable of
    ints). Entries that are not integers, not positive, or beyond the last
    page are dropped silently.

    >>> resolve_pages("1,99,3,0,-1", 3)
    [1, 3]
    >>> resolve_pages("even", 3)
    [2]

    Raises:
        NoValidPagesError: If nothing remains after filtering.
    """
    if isinstance(pages, str):
        spec = pages.strip().lower()
        if spec == "all":
            candidates = list(range(1, page_count + 1))
        elif spec == "even":
            candidates = list(range(2, page_count + 1, 2))
        elif spec == "odd":
            candidates = list(range(1, page_count + 1, 2))
        elif spec == "first":
            candidates = [1]
        elif spec == "last":
            candidates = [page_count]
        else:
            candidates = _parse_page_list(spec)
        label = repr(pages)
    else:
        candidates = [p for p in pages if isinstance(p, int) and not isinstance(p, bool)]
        label = str(candidates)

    resolved = sorted({p for p in candidates if 0 < p <= page_count})
    if not resolved:
        raise NoValidPagesError(
            f"No valid pages in selection {label} (document has {page_count} page(s))",
            page_count=page_count,
        )
    return resolved
