"""CORS configuration helpers.

Provides a small utility for applying CORS with the headers browsers need
to read from item responses.
"""

from __future__ import annotations

from typing import Iterable
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware


COLLECTION_VERSION_HEADER = "Collection-Version"

# Response headers that must be readable from browser scripts
EXPOSE_HEADERS: list[str] = [
    "X-Request-Id",
    COLLECTION_VERSION_HEADER,
]


def apply_cors(app: FastAPI, *, origins: Iterable[str] | None = None) -> None:
    allow_origins = list(origins or ["*"])
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allow_origins,
        # Browsers reject credentialed requests against a wildcard origin
        allow_credentials="*" not in allow_origins,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=EXPOSE_HEADERS,
    )


__all__ = ["apply_cors", "EXPOSE_HEADERS", "COLLECTION_VERSION_HEADER"]
