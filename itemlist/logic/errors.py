"""Domain errors raised by the collection logic.

Route handlers translate these into problem+json responses; the logic
layer never builds HTTP payloads itself.
"""

from __future__ import annotations


class ItemNotFoundError(LookupError):
    """Raised when an operation names an id that is not in the collection."""

    def __init__(self, item_id: int) -> None:
        super().__init__(f"item {item_id} not found")
        self.item_id = item_id


class CollectionIntegrityError(ValueError):
    """Raised when a proposed order would add, lose or duplicate ids."""


__all__ = ["ItemNotFoundError", "CollectionIntegrityError"]
