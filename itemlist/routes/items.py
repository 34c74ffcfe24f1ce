"""Item listing, update, toggle and reorder endpoints.

Handlers are thin: they parse the request, build a command, dispatch it to
the store owned by the application and shape the response. Domain errors
become problem+json responses here.
"""

from __future__ import annotations

from typing import Any, List, Optional, Tuple
import logging

from fastapi import APIRouter, Body, Depends, Query, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from itemlist.http.problem import problem_response
from itemlist.logic.commands import (
    Command,
    ReorderCommand,
    ToggleCommand,
    UpdateItemsCommand,
    dispatch,
)
from itemlist.logic.errors import ItemNotFoundError
from itemlist.logic.problem_factory import problem_item_not_found, problem_request_body_invalid
from itemlist.logic.record_store import RecordStore
from itemlist.logic.view_projector import coerce_page_params, project
from itemlist.middleware.cors import COLLECTION_VERSION_HEADER
from itemlist.models.items import ItemPatch, ReorderRequest, ToggleRequest


router = APIRouter()
logger = logging.getLogger(__name__)


def get_store(request: Request) -> RecordStore:
    """Return the store owned by the running application."""
    return request.app.state.store


def _default_limit(request: Request) -> int:
    config = getattr(request.app.state, "config", None)
    return config.paging.default_limit if config is not None else 20


def _dispatch_versioned(store: RecordStore, command: Command) -> Tuple[Any, int]:
    """Run ``command`` and read the version it produced before the lock is released."""
    with store.reading():
        result = dispatch(store, command)
        return result, store.version


def _versioned(body: dict, version: int) -> JSONResponse:
    resp = JSONResponse(body)
    resp.headers[COLLECTION_VERSION_HEADER] = str(version)
    return resp


@router.get("/items", summary="List items (filtered, paginated)", operation_id="listItems")
def list_items(
    request: Request,
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    search: str = Query(""),
    store: RecordStore = Depends(get_store),
) -> JSONResponse:
    page_no, page_size = coerce_page_params(page, limit, default_limit=_default_limit(request))
    with store.reading():
        view = project(store, search, page_no, page_size)
        version = store.version
    resp = JSONResponse(view.model_dump(by_alias=True))
    resp.headers[COLLECTION_VERSION_HEADER] = str(version)
    return resp


def _parse_patches(raw_items: List[Any]) -> List[ItemPatch]:
    patches: List[ItemPatch] = []
    skipped = 0
    for entry in raw_items:
        try:
            patches.append(ItemPatch.model_validate(entry))
        except ValidationError:
            skipped += 1
    if skipped:
        logger.info("items.update.malformed_entries_skipped count=%s", skipped)
    return patches


@router.put("/items", summary="Save a batch of items", operation_id="updateItems")
def update_items(
    payload: Any = Body(None),
    store: RecordStore = Depends(get_store),
) -> JSONResponse:
    if not isinstance(payload, dict) or not isinstance(payload.get("items"), list):
        return problem_response(
            problem_request_body_invalid(
                "body must be an object with an 'items' array",
                [{"path": "$.items", "code": "missing_or_not_array"}],
            )
        )
    scoped = payload.get("isInSearch") is True
    command = UpdateItemsCommand(items=tuple(_parse_patches(payload["items"])), scoped=scoped)
    _, version = _dispatch_versioned(store, command)
    return _versioned({"message": "Items updated successfully"}, version)


@router.put("/toggle-select", summary="Toggle one item's selection", operation_id="toggleSelect")
def toggle_select(
    body: ToggleRequest,
    store: RecordStore = Depends(get_store),
) -> JSONResponse:
    try:
        item, version = _dispatch_versioned(store, ToggleCommand(item_id=body.id))
    except ItemNotFoundError as exc:
        return problem_response(problem_item_not_found(exc.item_id))
    return _versioned({"message": "Item selection toggled", "item": item.to_wire()}, version)


@router.put("/reorder-items", summary="Move one item before another", operation_id="reorderItems")
def reorder_items(
    body: ReorderRequest,
    store: RecordStore = Depends(get_store),
) -> JSONResponse:
    intent = body.items
    try:
        _, version = _dispatch_versioned(
            store, ReorderCommand(item_id=intent.id, nearest_right_id=intent.nearest_right_item_id)
        )
    except ItemNotFoundError as exc:
        return problem_response(problem_item_not_found(exc.item_id))
    return _versioned({"message": "Items reordered successfully"}, version)


__all__ = ["router", "get_store", "list_items", "update_items", "toggle_select", "reorder_items"]
