"""Functional test bootstrap.

Each test gets a fresh five-item store and, when it asks for one, an
in-process FastAPI TestClient bound to an app that owns that store.
"""

from __future__ import annotations

import json
import pathlib
from typing import Callable

import pytest
from fastapi.testclient import TestClient

from itemlist.config import AppConfig, SeedConfig
from itemlist.logic import events as _events
from itemlist.logic.record_store import RecordStore
from itemlist.logic.seeding import seed_items
from itemlist.main import create_app

ROOT = pathlib.Path(__file__).resolve().parents[2]
SCHEMAS_DIR = ROOT / "schemas"


@pytest.fixture(autouse=True)
def _clear_event_buffer() -> None:
    _events.EVENT_BUFFER.clear()
    yield
    _events.EVENT_BUFFER.clear()


@pytest.fixture
def store() -> RecordStore:
    return RecordStore(seed_items(5))


@pytest.fixture
def make_store() -> Callable[[int], RecordStore]:
    return lambda count: RecordStore(seed_items(count))


@pytest.fixture
def app_config() -> AppConfig:
    return AppConfig(seed=SeedConfig(count=5))


@pytest.fixture
def client(app_config: AppConfig, store: RecordStore) -> TestClient:
    with TestClient(create_app(app_config, store)) as tc:
        yield tc


@pytest.fixture
def load_schema() -> Callable[[str], dict]:
    def _load(name: str) -> dict:
        return json.loads((SCHEMAS_DIR / name).read_text(encoding="utf-8"))

    return _load
