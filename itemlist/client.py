"""Synchronous client for the item list API.

Mirrors what the browser list does: it keeps the pages it has loaded,
loads more on demand (infinite scroll), and after every local change pushes
an update to the server. Each change is two explicit steps: apply it to
the local list, then persist it. If persisting fails the local step is
rolled back and ItemSyncError is raised, so the local list never drifts
from what the server accepted.
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional

import httpx

from itemlist.logic.errors import ItemNotFoundError
from itemlist.models.items import Item

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:3000"


class ItemSyncError(RuntimeError):
    """Raised when the server rejects or cannot be reached for a change."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ItemListClient:
    def __init__(
        self,
        http: Optional[httpx.Client] = None,
        *,
        base_url: str = DEFAULT_BASE_URL,
        page_size: int = 20,
    ) -> None:
        self._http = http if http is not None else httpx.Client(base_url=base_url, timeout=5.0)
        self._owns_http = http is None
        self.page_size = page_size
        self.items: List[Item] = []
        self.search = ""
        self.page = 1
        self.has_more = True

    def close(self) -> None:
        if self._owns_http:
            self._http.close()

    def __enter__(self) -> "ItemListClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    # -- transport -----------------------------------------------------------

    def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        try:
            resp = self._http.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            raise ItemSyncError(f"{method} {path} failed: {exc}") from exc
        if resp.status_code >= 400:
            try:
                detail = resp.json().get("detail", resp.text)
            except ValueError:
                detail = resp.text
            raise ItemSyncError(f"{method} {path} returned {resp.status_code}: {detail}", resp.status_code)
        return resp

    # -- reading -------------------------------------------------------------

    def set_search(self, term: str) -> None:
        """Start a new filtered listing; the next load_more fetches page 1."""
        self.search = term
        self.items = []
        self.page = 1
        self.has_more = True

    def load_more(self) -> List[Item]:
        """Fetch the next page for the current search and append it."""
        if not self.has_more:
            return []
        resp = self._request(
            "GET",
            "/items",
            params={"page": self.page, "limit": self.page_size, "search": self.search},
        )
        body = resp.json()
        fetched = [Item.model_validate(raw) for raw in body.get("data", [])]
        self.items.extend(fetched)
        self.has_more = self.page < int(body.get("totalPages", 0))
        self.page += 1
        return fetched

    # -- changes -------------------------------------------------------------

    def _index_of(self, item_id: int) -> int:
        for idx, item in enumerate(self.items):
            if item.id == item_id:
                return idx
        raise ItemNotFoundError(item_id)

    def save_items(self, items: Optional[List[Item]] = None) -> None:
        """Push the given (default: all loaded) items back via PUT /items."""
        batch = self.items if items is None else items
        self._request(
            "PUT",
            "/items",
            json={"items": [item.to_wire() for item in batch], "isInSearch": bool(self.search)},
        )

    def toggle(self, item_id: int) -> Item:
        """Flip selection locally, then save the whole loaded list."""
        idx = self._index_of(item_id)
        previous = list(self.items)
        current = self.items[idx]
        self.items[idx] = current.model_copy(update={"selected": not current.selected})
        try:
            self.save_items()
        except ItemSyncError:
            self.items = previous
            logger.warning("client.toggle.rolled_back id=%s", item_id)
            raise
        return self.items[idx]

    def toggle_remote(self, item_id: int) -> Item:
        """Toggle on the server via PUT /toggle-select and mirror the result locally."""
        try:
            resp = self._request("PUT", "/toggle-select", json={"id": item_id})
        except ItemSyncError as exc:
            if exc.status_code == 404:
                raise ItemNotFoundError(item_id) from exc
            raise
        item = Item.model_validate(resp.json()["item"])
        for idx, local in enumerate(self.items):
            if local.id == item.id:
                self.items[idx] = item
                break
        return item

    def move(self, active_id: int, over_id: int) -> Optional[int]:
        """Drop ``active_id`` where ``over_id`` was and persist the move.

        Returns the id now directly to the right of the moved item (None at
        the end of the loaded list), which is what the server is told.
        """
        if active_id == over_id:
            return None
        old_index = self._index_of(active_id)
        new_index = self._index_of(over_id)
        previous = list(self.items)
        moved = self.items.pop(old_index)
        self.items.insert(new_index, moved)
        nearest_right = self.items[new_index + 1].id if new_index + 1 < len(self.items) else None
        try:
            self._request(
                "PUT",
                "/reorder-items",
                json={"items": {"id": active_id, "nearestRightItemId": nearest_right}},
            )
        except ItemSyncError:
            self.items = previous
            logger.warning("client.move.rolled_back id=%s over=%s", active_id, over_id)
            raise
        return nearest_right


__all__ = ["ItemListClient", "ItemSyncError", "DEFAULT_BASE_URL"]
