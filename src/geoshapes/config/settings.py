"""
Application settings (Pydantic).

Settings are loaded from `src/geoshapes/config/defaults.yaml`, then optionally overridden by:
- an external YAML file via `GEOSHAPES_CONFIG_PATH`
- environment variables (e.g., `GEOSHAPES_LOG_LEVEL`, `GEOSHAPES_COORDINATE_ORDER`)

Design rule:
- Settings only drive the outer layers (CLI output, shape adapters, logging).
  `Geometry.parse` and friends never read them, so they stay pure.
"""

from __future__ import annotations

import os
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field

from geoshapes.core.env import load_dotenv_if_present


def _read_package_yaml(filename: str) -> dict[str, Any]:
    """Read a YAML file packaged inside `geoshapes.config`."""
    text = resources.files("geoshapes.config").joinpath(filename).read_text(encoding="utf-8")
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
    name: str = "geoshapes"
    log_level: str = "INFO"


class ShapeSettings(BaseModel):
    coordinate_order: Literal["latLng", "lngLat"] = "latLng"


class OutputSettings(BaseModel):
    json_indent: int | None = Field(default=2, ge=0)
    normalize_longitude: bool = False


class Settings(BaseModel):
    app: AppSettings = Field(default_factory=AppSettings)
    shapes: ShapeSettings = Field(default_factory=ShapeSettings)
    output: OutputSettings = Field(default_factory=OutputSettings)


def _apply_env_overrides(data: dict[str, Any]) -> dict[str, Any]:
    """Overlay selected environment variables onto raw settings payload.

    Only a small whitelist is honoured; everything else has to come from YAML.
    """
    load_dotenv_if_present()
    data = dict(data)

    log_level = os.getenv("GEOSHAPES_LOG_LEVEL")
    if log_level:
        data.setdefault("app", {})["log_level"] = log_level

    order = os.getenv("GEOSHAPES_COORDINATE_ORDER")
    if order:
        data.setdefault("shapes", {})["coordinate_order"] = order

    return data


@lru_cache
def get_settings() -> Settings:
    """Load and validate settings (cached)."""
    load_dotenv_if_present()
    config_path = os.getenv("GEOSHAPES_CONFIG_PATH")
    raw = _read_yaml_file(config_path) if config_path else _read_package_yaml("defaults.yaml")
    raw = _apply_env_overrides(raw)
    return Settings.model_validate(raw)


@lru_cache
def get_logging_config() -> dict[str, Any]:
    """Load logging configuration (cached)."""
    return _read_package_yaml("logging.yaml")
