"""Filtered, paginated views over the record store.

A view is recomputed from the store on every call and never written back.
Query-string parsing is lenient: unusable page/limit values fall back to
the defaults instead of failing the request.
"""

from __future__ import annotations

import math
import re
from typing import Any, Optional, Tuple

from itemlist.logic.record_store import RecordStore
from itemlist.models.items import ItemsPage

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 20

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def _parse_positive_int(raw: Any, default: int) -> int:
    """Parse the leading integer of ``raw``; return ``default`` unless it is >= 1.

    "3", " 3 ", "3abc" and "3.9" all parse as 3. Booleans are not numbers.
    """
    if raw is None or isinstance(raw, bool):
        return default
    if isinstance(raw, int):
        value = raw
    elif isinstance(raw, float):
        if not math.isfinite(raw):
            return default
        value = int(raw)
    else:
        match = _LEADING_INT.match(str(raw))
        if not match:
            return default
        value = int(match.group(1))
    return value if value >= 1 else default


def coerce_page_params(
    page_raw: Any,
    limit_raw: Any,
    *,
    default_limit: int = DEFAULT_LIMIT,
) -> Tuple[int, int]:
    """Return usable (page, limit) from untrusted query values."""
    return _parse_positive_int(page_raw, DEFAULT_PAGE), _parse_positive_int(limit_raw, default_limit)


def matches(title: str, query: str) -> bool:
    """Case-insensitive substring test; the empty query matches everything."""
    if not query:
        return True
    return query.lower() in title.lower()


def project(
    store: RecordStore,
    query: Optional[str] = "",
    page: int = DEFAULT_PAGE,
    limit: int = DEFAULT_LIMIT,
) -> ItemsPage:
    """Filter the collection by ``query`` and return one page of it.

    ``page`` and ``limit`` must already be >= 1 (see ``coerce_page_params``).
    A page past the end yields an empty ``data`` list.
    """
    if page < 1 or limit < 1:
        raise ValueError("page and limit must be >= 1")
    needle = query or ""
    with store.reading():
        filtered = [item for item in store.all() if matches(item.title, needle)]
    total_items = len(filtered)
    total_pages = math.ceil(total_items / limit) if total_items else 0
    start = (page - 1) * limit
    data = filtered[start:start + limit]
    return ItemsPage(
        page=page,
        limit=limit,
        totalItems=total_items,
        totalPages=total_pages,
        data=data,
    )


__all__ = ["DEFAULT_PAGE", "DEFAULT_LIMIT", "coerce_page_params", "matches", "project"]
