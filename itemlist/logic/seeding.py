"""Initial collection seeding."""

from __future__ import annotations

from typing import List

from itemlist.models.items import Item


def seed_items(count: int) -> List[Item]:
    """Return ``count`` unselected items with ids 1..count titled "Title <id>"."""
    return [Item(id=n, title=f"Title {n}", selected=False) for n in range(1, count + 1)]


__all__ = ["seed_items"]
