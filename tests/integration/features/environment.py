"""Behave environment hooks for integration tests.

Loads environment variables from a local .env (if present). When
``TEST_BASE_URL`` is set the scenarios run against that live server (its
test-support routes must be enabled); otherwise each scenario gets a fresh
in-process app through FastAPI's TestClient.
"""

from __future__ import annotations

import os
from typing import Any

from dotenv import load_dotenv
from fastapi.testclient import TestClient
import httpx

from itemlist.config import AppConfig, SeedConfig
from itemlist.logic.record_store import RecordStore
from itemlist.logic.seeding import seed_items
from itemlist.main import create_app

DEFAULT_SEED_COUNT = 10


def before_all(context: Any) -> None:  # pragma: no cover - executed by Behave
    load_dotenv(override=False)
    load_dotenv(dotenv_path="tests/integration/.env.test", override=False)
    context.base_url = os.environ.get("TEST_BASE_URL", "").strip().rstrip("/")


def before_scenario(context: Any, scenario: Any) -> None:  # pragma: no cover - executed by Behave
    context.vars = {}
    context.response = None
    if context.base_url:
        context.http = httpx.Client(base_url=context.base_url, timeout=5.0)
        resp = context.http.post("/__test__/reset-state")
        assert resp.status_code == 204, f"reset-state failed at {context.base_url}: {resp.status_code}"
        return
    context.store = RecordStore(seed_items(DEFAULT_SEED_COUNT))
    app = create_app(AppConfig(seed=SeedConfig(count=DEFAULT_SEED_COUNT)), context.store)
    context.http = TestClient(app)


def after_scenario(context: Any, scenario: Any) -> None:  # pragma: no cover - executed by Behave
    http = getattr(context, "http", None)
    if http is not None:
        http.close()
