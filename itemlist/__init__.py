"""FastAPI application package for the item list service.

This package exposes a small FastAPI application factory. It wires only
cross-cutting middleware (request-id and CORS) and mounts the API routers.
Business logic lives in `itemlist/logic/` and route handlers in
`itemlist/routes/`.
"""

from __future__ import annotations

from itemlist.main import create_app

__all__ = ["create_app"]
