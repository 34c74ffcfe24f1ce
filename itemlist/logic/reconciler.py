"""Merge client-supplied partial items back into the full collection.

Two policies, chosen by the caller:

- unscoped: the batch came from the unfiltered list. Merged items are
  moved to the front in batch order and every other item follows in its
  original relative order.
- scoped: the batch came from a filtered (search) view. Items are merged
  in place and nothing moves. Repositioning a filtered subset against the
  full list would scatter the hidden items once the filter is cleared, so
  drag ordering inside a filtered view is not honoured here.

Entries naming ids that are not in the collection are dropped without
error. Only ``selected`` is mutable; a differing ``title`` in a patch is
ignored.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Dict, Iterable, List

from itemlist.logic.errors import ItemNotFoundError
from itemlist.logic.record_store import RecordStore
from itemlist.models.items import Item, ItemPatch

logger = logging.getLogger(__name__)

MODE_SCOPED = "scoped"
MODE_UNSCOPED = "unscoped"


@dataclass
class ReconcileResult:
    mode: str
    applied: List[int] = field(default_factory=list)
    dropped: List[int] = field(default_factory=list)

    @property
    def summary(self) -> Dict[str, object]:
        return {"mode": self.mode, "applied": len(self.applied), "dropped": len(self.dropped)}


def _merge(existing: Item, patch: ItemPatch) -> Item:
    if patch.title is not None and patch.title != existing.title:
        logger.debug("items.reconcile.title_ignored id=%s", existing.id)
    changes = patch.changes()
    return existing.model_copy(update=changes) if changes else existing


def reconcile(store: RecordStore, updates: Iterable[ItemPatch], *, scoped: bool) -> ReconcileResult:
    """Apply ``updates`` to ``store`` as one atomic step."""
    patches = list(updates)
    with store.mutation():
        if scoped:
            result = _reconcile_in_place(store, patches)
        else:
            result = _reconcile_reordering(store, patches)
    logger.info(
        "items.reconcile mode=%s applied=%s dropped=%s",
        result.mode,
        len(result.applied),
        len(result.dropped),
    )
    if result.dropped:
        logger.info("items.reconcile.dropped_unknown_ids ids=%s", result.dropped[:20])
    return result


def _reconcile_in_place(store: RecordStore, patches: List[ItemPatch]) -> ReconcileResult:
    result = ReconcileResult(mode=MODE_SCOPED)
    seen: set[int] = set()
    for patch in patches:
        existing = store.find(patch.id)
        if existing is None:
            result.dropped.append(patch.id)
            continue
        store.replace(_merge(existing, patch))
        if patch.id not in seen:
            seen.add(patch.id)
            result.applied.append(patch.id)
    return result


def _reconcile_reordering(store: RecordStore, patches: List[ItemPatch]) -> ReconcileResult:
    result = ReconcileResult(mode=MODE_UNSCOPED)
    merged: List[Item] = []
    slot_by_id: Dict[int, int] = {}
    for patch in patches:
        slot = slot_by_id.get(patch.id)
        if slot is not None:
            # Repeated id: first position wins, later fields override.
            merged[slot] = _merge(merged[slot], patch)
            continue
        existing = store.find(patch.id)
        if existing is None:
            result.dropped.append(patch.id)
            continue
        slot_by_id[patch.id] = len(merged)
        merged.append(_merge(existing, patch))
        result.applied.append(patch.id)

    remaining = [item for item in store.all() if item.id not in slot_by_id]
    # Splicing merged[i] into `remaining` at index i for i = 0..k-1 leaves
    # the merged items as a prefix in batch order.
    store.replace_order(merged + remaining)
    return result


def toggle_selected(store: RecordStore, item_id: int) -> Item:
    """Flip ``selected`` on one item without moving it."""
    with store.mutation():
        existing = store.find(item_id)
        if existing is None:
            raise ItemNotFoundError(item_id)
        updated = existing.model_copy(update={"selected": not existing.selected})
        store.replace(updated)
    logger.info("items.toggle id=%s selected=%s", item_id, updated.selected)
    return updated


__all__ = [
    "MODE_SCOPED",
    "MODE_UNSCOPED",
    "ReconcileResult",
    "reconcile",
    "toggle_selected",
]
