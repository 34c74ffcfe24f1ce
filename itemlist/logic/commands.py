"""Command objects for collection mutations.

Each client intent (save a batch, toggle one item, drop an item somewhere
else) is a small immutable command. ``dispatch`` runs it against the store
as a single locked step and publishes one domain event on success. A
failed command raises before anything is written and publishes nothing.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple, Union

from itemlist.logic.events import ITEM_REORDERED, ITEM_TOGGLED, ITEMS_UPDATED, publish
from itemlist.logic.reconciler import ReconcileResult, reconcile, toggle_selected
from itemlist.logic.record_store import RecordStore
from itemlist.logic.reorder import ReorderResult, reorder_items
from itemlist.models.items import Item, ItemPatch


@dataclass(frozen=True)
class UpdateItemsCommand:
    items: Tuple[ItemPatch, ...]
    scoped: bool = False


@dataclass(frozen=True)
class ToggleCommand:
    item_id: int


@dataclass(frozen=True)
class ReorderCommand:
    item_id: int
    nearest_right_id: Optional[int] = None


Command = Union[UpdateItemsCommand, ToggleCommand, ReorderCommand]


def dispatch(store: RecordStore, command: Command) -> Union[ReconcileResult, Item, ReorderResult]:
    """Execute ``command`` against ``store`` and return the operation result."""
    with store.mutation():
        if isinstance(command, UpdateItemsCommand):
            result = reconcile(store, command.items, scoped=command.scoped)
            publish(ITEMS_UPDATED, result.summary)
            return result
        if isinstance(command, ToggleCommand):
            item = toggle_selected(store, command.item_id)
            publish(ITEM_TOGGLED, {"id": item.id, "isSelected": item.selected})
            return item
        if isinstance(command, ReorderCommand):
            moved = reorder_items(store, command.item_id, command.nearest_right_id)
            publish(
                ITEM_REORDERED,
                {
                    "id": moved.item_id,
                    "nearestRightItemId": command.nearest_right_id,
                    "from": moved.from_index,
                    "to": moved.to_index,
                },
            )
            return moved
    raise TypeError(f"unsupported command: {type(command).__name__}")


__all__ = [
    "UpdateItemsCommand",
    "ToggleCommand",
    "ReorderCommand",
    "Command",
    "dispatch",
]
