"""Drag-and-drop relocation of a single item.

The client names the item it dropped and the item now directly to its
right. The moved item is placed immediately before that neighbour in the
full collection, whatever filter the client was looking at. A missing or
unknown neighbour means "move to the end".
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Optional

from itemlist.logic.errors import ItemNotFoundError
from itemlist.logic.record_store import RecordStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReorderResult:
    item_id: int
    from_index: int
    to_index: int
    target_found: bool

    @property
    def moved(self) -> bool:
        return self.from_index != self.to_index


def resolve_target_index(from_index: int, target_index: Optional[int], size: int) -> int:
    """Return the final index of the moved item.

    ``target_index`` is the neighbour's index before removal, or None for
    the end. The result is relative to the list after removal, so a
    neighbour that sat to the right of the moved item shifts left by one.
    """
    if target_index is None:
        return size - 1
    if target_index > from_index:
        return target_index - 1
    return target_index


def reorder_items(
    store: RecordStore,
    item_id: int,
    nearest_right_id: Optional[int] = None,
) -> ReorderResult:
    """Move ``item_id`` to sit immediately before ``nearest_right_id``.

    Raises ItemNotFoundError, before touching the store, when ``item_id``
    is unknown.
    """
    with store.mutation():
        from_index = store.find_index(item_id)
        if from_index is None:
            raise ItemNotFoundError(item_id)
        target_index = store.find_index(nearest_right_id) if nearest_right_id is not None else None
        to_index = resolve_target_index(from_index, target_index, len(store))
        if to_index != from_index:
            store.move(from_index, to_index)
    result = ReorderResult(
        item_id=item_id,
        from_index=from_index,
        to_index=to_index,
        target_found=target_index is not None,
    )
    logger.info(
        "items.reorder id=%s nearest_right_id=%s target_found=%s from=%s to=%s",
        item_id,
        nearest_right_id,
        result.target_found,
        from_index,
        to_index,
    )
    return result


__all__ = ["ReorderResult", "resolve_target_index", "reorder_items"]
