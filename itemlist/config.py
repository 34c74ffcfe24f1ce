"""Configuration for the item list service.

This module loads application configuration with the following rules:
- Primary source: `itemlist_config.json` at the project root.
- Overrides: environment variables, then optional text files under `config/`.
- Validation: Pydantic models enforce required fields and value constraints.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field, ValidationError as PydanticValidationError, field_validator


CONFIG_DIR = Path("config")
ROOT_CONFIG = Path("itemlist_config.json")
logger = logging.getLogger(__name__)


def _read_config_file(rel_path: str) -> Optional[str]:
    path = CONFIG_DIR / rel_path
    try:
        if path.exists():
            return path.read_text(encoding="utf-8").strip()
    except (OSError, UnicodeDecodeError) as e:
        # Recoverable: an unreadable override falls through to the next source
        logger.warning("Failed to read override %s: %s", path, e)
        return None
    return None


def _env(key: str, default: Optional[str] = None) -> Optional[str]:
    return os.environ.get(key, default)


class SeedConfig(BaseModel):
    count: int = Field(default=300, ge=0, le=1_000_000)


class PagingConfig(BaseModel):
    default_limit: int = Field(default=20, gt=0)


class CorsConfig(BaseModel):
    origins: List[str] = Field(default_factory=lambda: ["*"])

    @field_validator("origins")
    @classmethod
    def origins_must_be_non_empty(cls, v: List[str]) -> List[str]:
        cleaned = [o.strip() for o in v if isinstance(o, str) and o.strip()]
        if not cleaned:
            raise ValueError("cors.origins must list at least one origin")
        return cleaned


class ServerConfig(BaseModel):
    host: str = "127.0.0.1"
    port: int = Field(default=3000, gt=0, lt=65536)


class AppConfig(BaseModel):
    seed: SeedConfig = Field(default_factory=SeedConfig)
    paging: PagingConfig = Field(default_factory=PagingConfig)
    cors: CorsConfig = Field(default_factory=CorsConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)


def _read_json_file(path: Path) -> dict:
    try:
        if path.exists():
            return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.error("Failed to read JSON config %s: %s", path, e)
    return {}


def load_config() -> AppConfig:
    """Load configuration with validation.

    Precedence (highest first):
    1) Environment variables
    2) Text files in `config/` (optional)
    3) itemlist_config.json at project root (primary base)
    4) Safe defaults for development
    """

    base = _read_json_file(ROOT_CONFIG)

    def _base(path: str, default: Optional[str] = None) -> Optional[str]:
        cur: object = base
        for key in path.split("."):
            if not isinstance(cur, dict) or key not in cur:
                return default
            cur = cur[key]
        if isinstance(cur, list):
            return ",".join(str(v) for v in cur)
        return str(cur) if cur is not None else default

    seed_count_text = _env("ITEMLIST_SEED_COUNT") or _read_config_file("seed.count") or _base("seed.count", "300")
    default_limit_text = (
        _env("ITEMLIST_DEFAULT_LIMIT") or _read_config_file("paging.default_limit") or _base("paging.default_limit", "20")
    )
    origins_text = _env("ITEMLIST_CORS_ORIGINS") or _read_config_file("cors.origins") or _base("cors.origins", "*")
    host = _env("ITEMLIST_HOST") or _read_config_file("server.host") or _base("server.host", "127.0.0.1")
    port_text = _env("ITEMLIST_PORT") or _read_config_file("server.port") or _base("server.port", "3000")

    try:
        cfg = AppConfig(
            seed=SeedConfig(count=int(str(seed_count_text).strip())),
            paging=PagingConfig(default_limit=int(str(default_limit_text).strip())),
            cors=CorsConfig(origins=str(origins_text).split(",")),
            server=ServerConfig(host=str(host).strip(), port=int(str(port_text).strip())),
        )
        return cfg
    except (PydanticValidationError, ValueError) as e:
        logger.error("Invalid application configuration: %s", e)
        raise


__all__ = [
    "AppConfig",
    "SeedConfig",
    "PagingConfig",
    "CorsConfig",
    "ServerConfig",
    "load_config",
]
