"""Functional tests for layered configuration loading."""

from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from itemlist import config as config_mod
from itemlist.config import AppConfig, load_config


@pytest.fixture
def isolated(tmp_path, monkeypatch):
    """Run load_config against an empty working directory and a clean env."""
    monkeypatch.chdir(tmp_path)
    for key in (
        "ITEMLIST_SEED_COUNT",
        "ITEMLIST_DEFAULT_LIMIT",
        "ITEMLIST_CORS_ORIGINS",
        "ITEMLIST_HOST",
        "ITEMLIST_PORT",
    ):
        monkeypatch.delenv(key, raising=False)
    return tmp_path


def test_defaults(isolated) -> None:
    cfg = load_config()
    assert cfg == AppConfig()
    assert cfg.seed.count == 300
    assert cfg.paging.default_limit == 20
    assert cfg.cors.origins == ["*"]
    assert (cfg.server.host, cfg.server.port) == ("127.0.0.1", 3000)


def test_json_file_then_text_override_then_env(isolated, monkeypatch) -> None:
    (isolated / config_mod.ROOT_CONFIG).write_text(
        json.dumps({"seed": {"count": 50}, "paging": {"default_limit": 10}, "cors": {"origins": ["http://a", "http://b"]}}),
        encoding="utf-8",
    )
    cfg = load_config()
    assert cfg.seed.count == 50
    assert cfg.paging.default_limit == 10
    assert cfg.cors.origins == ["http://a", "http://b"]

    (isolated / "config").mkdir()
    (isolated / "config" / "seed.count").write_text("75\n", encoding="utf-8")
    assert load_config().seed.count == 75

    monkeypatch.setenv("ITEMLIST_SEED_COUNT", "1000")
    monkeypatch.setenv("ITEMLIST_PORT", "8080")
    cfg = load_config()
    assert cfg.seed.count == 1000
    assert cfg.server.port == 8080


def test_malformed_json_file_falls_back_to_defaults(isolated) -> None:
    (isolated / config_mod.ROOT_CONFIG).write_text("{not json", encoding="utf-8")
    assert load_config().seed.count == 300


@pytest.mark.parametrize(
    "key,value",
    [
        ("ITEMLIST_DEFAULT_LIMIT", "0"),
        ("ITEMLIST_SEED_COUNT", "-1"),
        ("ITEMLIST_PORT", "70000"),
        ("ITEMLIST_CORS_ORIGINS", " , "),
    ],
)
def test_invalid_values_raise(isolated, monkeypatch, key, value) -> None:
    monkeypatch.setenv(key, value)
    with pytest.raises(ValidationError):
        load_config()


def test_non_numeric_value_raises(isolated, monkeypatch) -> None:
    monkeypatch.setenv("ITEMLIST_SEED_COUNT", "many")
    with pytest.raises(ValueError):
        load_config()
