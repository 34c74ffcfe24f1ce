"""Authoritative ordered store for the item collection.

Holds the full sequence of items plus an id -> index map that is kept in
step with every mutation, so lookups by id do not scan the list. Order in
``_items`` is the single source of truth; the map is derived from it.

All mutating methods take the store lock themselves. Callers that need
several reads and writes to act as one step (reconcile, reorder, toggle)
wrap them in ``mutation()``; the lock is re-entrant so the inner calls
nest. ``version`` is bumped once per outermost mutation that changed
anything.
"""

from __future__ import annotations

from collections import Counter
from contextlib import contextmanager
import logging
import threading
from typing import Dict, Iterable, Iterator, List, Optional

from itemlist.logic.errors import CollectionIntegrityError
from itemlist.models.items import Item

logger = logging.getLogger(__name__)


class RecordStore:
    def __init__(self, items: Iterable[Item] = ()) -> None:
        self._items: List[Item] = list(items)
        self._index: Dict[int, int] = {}
        self._lock = threading.RLock()
        self._depth = 0
        self._dirty = False
        self._version = 0
        self._rebuild_index()

    # -- locking -------------------------------------------------------------

    @contextmanager
    def mutation(self) -> Iterator["RecordStore"]:
        """Hold exclusive access for one logical mutation."""
        with self._lock:
            self._depth += 1
            try:
                yield self
            finally:
                self._depth -= 1
                if self._depth == 0 and self._dirty:
                    self._version += 1
                    self._dirty = False

    @contextmanager
    def reading(self) -> Iterator["RecordStore"]:
        """Hold the lock for a consistent multi-step read.

        Writers on other threads wait until the block exits, so a caller can
        run a mutation inside it and read the version that mutation produced.
        """
        with self._lock:
            yield self

    @property
    def version(self) -> int:
        with self._lock:
            return self._version

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    # -- reads ---------------------------------------------------------------

    def find(self, item_id: int) -> Optional[Item]:
        with self._lock:
            idx = self._index.get(item_id)
            return self._items[idx] if idx is not None else None

    def find_index(self, item_id: int) -> Optional[int]:
        with self._lock:
            return self._index.get(item_id)

    def all(self) -> List[Item]:
        """Return a copy of the collection in its current order."""
        with self._lock:
            return list(self._items)

    def ids(self) -> List[int]:
        with self._lock:
            return [item.id for item in self._items]

    # -- writes --------------------------------------------------------------

    def replace(self, item: Item) -> Item:
        """Overwrite the stored item with the same id, keeping its position."""
        with self.mutation():
            idx = self._index.get(item.id)
            if idx is None:
                raise CollectionIntegrityError(f"cannot replace unknown id {item.id}")
            if self._items[idx] != item:
                self._items[idx] = item
                self._dirty = True
            return item

    def replace_order(self, new_sequence: Iterable[Item]) -> None:
        """Swap in a new ordering of the same ids.

        The candidate must hold exactly the current id multiset; otherwise
        CollectionIntegrityError is raised and the store is left as it was.
        """
        candidate = list(new_sequence)
        with self.mutation():
            before = Counter(item.id for item in self._items)
            after = Counter(item.id for item in candidate)
            if before != after:
                missing = sorted((before - after).elements())
                extra = sorted((after - before).elements())
                logger.warning(
                    "record_store.replace_order.rejected missing=%s extra=%s", len(missing), len(extra)
                )
                raise CollectionIntegrityError(
                    f"reordered sequence changes ids (missing={missing[:10]} extra={extra[:10]})"
                )
            if candidate != self._items:
                self._items = candidate
                self._rebuild_index()
                self._dirty = True

    def move(self, from_index: int, to_index: int) -> None:
        """Relocate the item at ``from_index`` so it ends up at ``to_index``.

        ``to_index`` is measured in the list after the item has been removed.
        Only the index entries in the shifted range are rewritten.
        """
        with self.mutation():
            size = len(self._items)
            if not 0 <= from_index < size:
                raise IndexError(f"from_index {from_index} out of range")
            if not 0 <= to_index < size:
                raise IndexError(f"to_index {to_index} out of range")
            if from_index == to_index:
                return
            item = self._items.pop(from_index)
            self._items.insert(to_index, item)
            lo, hi = min(from_index, to_index), max(from_index, to_index)
            for i in range(lo, hi + 1):
                self._index[self._items[i].id] = i
            self._dirty = True

    # -- internals -----------------------------------------------------------

    def _rebuild_index(self) -> None:
        index: Dict[int, int] = {}
        for i, item in enumerate(self._items):
            if item.id in index:
                raise CollectionIntegrityError(f"duplicate id {item.id}")
            index[item.id] = i
        self._index = index


__all__ = ["RecordStore"]
