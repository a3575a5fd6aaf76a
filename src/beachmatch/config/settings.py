# src/beachmatch/config/settings.py
"""
Application settings (Pydantic).

Settings are loaded from `src/beachmatch/config/defaults.yaml`, then optionally overridden by:
- environment variables (e.g., `BEACHMATCH_DATABASE_URL`, `BEACHMATCH_LOG_LEVEL`)
- an external YAML file via `BEACHMATCH_CONFIG_PATH`

Design rule:
- Tuning knobs live in YAML, not hard-coded in business logic.
"""

from __future__ import annotations

import os
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field

from beachmatch.core.env import load_dotenv_if_present


def _read_package_yaml(filename: str) -> dict[str, Any]:
    """Read a YAML file packaged inside `beachmatch.config`."""
    text = resources.files("beachmatch.config").joinpath(filename).read_text(encoding="utf-8")
    data = yaml.safe_load(text) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Invalid YAML root object for {filename}; expected a mapping.")
    return data


def _read_yaml_file(path: str | Path) -> dict[str, Any]:
    """Read a YAML file from disk and return its mapping root."""
    data = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Invalid YAML root object for {path}; expected a mapping.")
    return data


class AppSettings(BaseModel):
    name: str = "BeachMatch"
    timezone: str = "Asia/Jakarta"
    log_level: str = "INFO"


class DataSettings(BaseModel):
    backend: Literal["json", "sql"] = "json"
    json_path: str = "data/beaches.sample.json"
    database_url: str | None = None
    pool_recycle_seconds: int = 300
    parallel_reads: bool = True


class ScoringSettings(BaseModel):
    top_n_default: int = Field(5, ge=1)
    top_n_max: int = Field(50, ge=1)


class FeaturesSettings(BaseModel):
    # Derived (review-summary) rows below this vote count are ignored.
    min_derived_votes: int = Field(1, ge=1)


class TracingSettings(BaseModel):
    detail_beach_count: int = Field(3, ge=0)
    top_matches_logged: int = Field(10, ge=0)


class MediaSettings(BaseModel):
    contents_base_url: str = "/uploads/contents/"


class Settings(BaseModel):
    app: AppSettings = Field(default_factory=AppSettings)
    data: DataSettings = Field(default_factory=DataSettings)
    scoring: ScoringSettings = Field(default_factory=ScoringSettings)
    features: FeaturesSettings = Field(default_factory=FeaturesSettings)
    tracing: TracingSettings = Field(default_factory=TracingSettings)
    media: MediaSettings = Field(default_factory=MediaSettings)


def _apply_env_overrides(data: dict[str, Any]) -> dict[str, Any]:
    """Overlay selected environment variables onto raw settings payload.

    Only a small whitelist is honored; everything else must come from YAML.
    """
    load_dotenv_if_present()
    data = dict(data)

    log_level = os.getenv("BEACHMATCH_LOG_LEVEL")
    if log_level:
        data.setdefault("app", {})["log_level"] = log_level

    backend = os.getenv("BEACHMATCH_DATA_BACKEND")
    if backend:
        data.setdefault("data", {})["backend"] = backend

    json_path = os.getenv("BEACHMATCH_DATA_PATH")
    if json_path:
        data.setdefault("data", {})["json_path"] = json_path

    database_url = os.getenv("BEACHMATCH_DATABASE_URL")
    if database_url:
        data.setdefault("data", {})["database_url"] = database_url

    return data


@lru_cache
def get_settings() -> Settings:
    """Load and validate settings (cached)."""
    load_dotenv_if_present()
    config_path = os.getenv("BEACHMATCH_CONFIG_PATH")
    raw = _read_yaml_file(config_path) if config_path else _read_package_yaml("defaults.yaml")
    raw = _apply_env_overrides(raw)
    return Settings.model_validate(raw)


@lru_cache
def get_logging_config() -> dict[str, Any]:
    """Load logging configuration (cached)."""
    return _read_package_yaml("logging.yaml")
