"""Centralised construction of problem+json payloads for item routes.

Provides helpers that return dicts with stable error codes to avoid
embedding string literals in route modules.
"""

from __future__ import annotations

from typing import Any, Dict, List
import logging


logger = logging.getLogger(__name__)

ITEM_NOT_FOUND = "ITEM_NOT_FOUND"
REQUEST_BODY_INVALID = "REQUEST_BODY_INVALID"


def problem_item_not_found(item_id: int) -> Dict[str, object]:
    """Return a 404 problem for an id that is not in the collection."""
    problem = {
        "title": "Not Found",
        "status": 404,
        "detail": f"Item with id {item_id} not found",
        "message": "Item not found",
        "code": ITEM_NOT_FOUND,
        "id": item_id,
    }
    logger.info("error_handler.handle", extra={"code": problem.get("code")})
    return problem


def problem_request_body_invalid(detail: str, errors: List[Dict[str, Any]] | None = None) -> Dict[str, object]:
    """Return a 422 problem for a body whose overall shape is unusable."""
    problem: Dict[str, object] = {
        "title": "Invalid Request",
        "status": 422,
        "detail": detail,
        "code": REQUEST_BODY_INVALID,
    }
    if errors:
        problem["errors"] = errors
    logger.info("error_handler.handle", extra={"code": problem.get("code")})
    return problem


__all__ = [
    "ITEM_NOT_FOUND",
    "REQUEST_BODY_INVALID",
    "problem_item_not_found",
    "problem_request_body_invalid",
]
