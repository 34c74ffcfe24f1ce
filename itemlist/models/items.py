"""Pydantic models for items and the items API bodies.

`Item` is both the stored record and its wire shape. The field named
``selected`` in Python is ``isSelected`` on the wire; both spellings are
accepted on input, and responses always use the alias. Ids are strict
integers: booleans and numeric strings are rejected rather than coerced.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictInt


class Item(BaseModel):
    """A single record of the collection.

    Frozen: mutations produce a new instance via ``model_copy`` so a
    reader holding a reference never sees a half-applied change.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: StrictInt
    title: str
    selected: bool = Field(default=False, alias="isSelected")

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True)


class ItemPatch(BaseModel):
    """Partial record sent back by a client in an update batch.

    Only ``id`` is required. Unknown keys are ignored.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: StrictInt
    title: Optional[str] = None
    selected: Optional[bool] = Field(default=None, alias="isSelected")

    def changes(self) -> dict:
        """Return the mutable fields this patch sets, keyed by model field name."""
        out: dict = {}
        if self.selected is not None:
            out["selected"] = self.selected
        return out


class ItemsPage(BaseModel):
    page: int
    limit: int
    totalItems: int
    totalPages: int
    data: List[Item]


class ToggleRequest(BaseModel):
    id: StrictInt


class ReorderIntent(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: StrictInt
    nearest_right_item_id: Optional[StrictInt] = Field(default=None, alias="nearestRightItemId")


class ReorderRequest(BaseModel):
    items: ReorderIntent


class MessageResponse(BaseModel):
    message: str


class ToggleResponse(BaseModel):
    message: str
    item: Item


__all__ = [
    "Item",
    "ItemPatch",
    "ItemsPage",
    "ToggleRequest",
    "ReorderIntent",
    "ReorderRequest",
    "MessageResponse",
    "ToggleResponse",
]
