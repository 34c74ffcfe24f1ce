from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse

from itemlist.config import AppConfig, load_config
from itemlist.http.problem import (
    handle_http_exception,
    handle_request_validation_error,
    handle_unexpected_error,
)
from itemlist.http.request_id import RequestIdMiddleware
from itemlist.logging_setup import configure_logging
from itemlist.logic.record_store import RecordStore
from itemlist.logic.seeding import seed_items
from itemlist.middleware.cors import apply_cors
from itemlist.routes import api_router

logger = logging.getLogger(__name__)


def create_app(
    config: Optional[AppConfig] = None,
    store: Optional[RecordStore] = None,
    *,
    include_test_support: bool = True,
) -> FastAPI:
    """Build the FastAPI application.

    The application owns exactly one RecordStore, kept on ``app.state`` and
    handed to routes through a dependency. When ``store`` is omitted a new
    one is seeded with ``config.seed.count`` items.
    """
    configure_logging()
    cfg = config or load_config()

    app = FastAPI(title="Item List Service")
    app.state.config = cfg
    app.state.store = store if store is not None else RecordStore(seed_items(cfg.seed.count))
    logger.info("collection_seeded items=%s", len(app.state.store))

    app.add_exception_handler(HTTPException, handle_http_exception)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)

    apply_cors(app, origins=cfg.cors.origins)
    # Added last so it is the outermost layer and every response carries the id
    app.add_middleware(RequestIdMiddleware)

    app.include_router(api_router)
    if include_test_support:
        from itemlist.routes.test_support import router as test_support_router

        app.include_router(test_support_router)

    @app.get("/", response_class=PlainTextResponse, include_in_schema=False)
    def root() -> str:
        return "Hello World!"

    @app.get("/health")
    def health() -> dict:
        current: RecordStore = app.state.store
        return {"status": "ok", "items": len(current), "version": current.version}

    return app


def run() -> None:  # pragma: no cover - process entry point
    """Serve the application with uvicorn using the configured host/port."""
    import uvicorn

    cfg = load_config()
    uvicorn.run(create_app(cfg, include_test_support=False), host=cfg.server.host, port=cfg.server.port, log_config=None)


# Intentionally do not instantiate the app at import time to prevent side effects.
