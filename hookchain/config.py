"""Configuration models and loading for hookchain."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field


class DefaultsConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    priority: int = 10
    arity: int = Field(default=1, ge=0)


class CallbackSpec(BaseModel):
    model_config = ConfigDict(extra="forbid")

    callback: str = Field(min_length=1)
    priority: int | None = None
    arity: int | None = Field(default=None, ge=0)


class HooksConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    defaults: DefaultsConfig = Field(default_factory=DefaultsConfig)
    all_hook: str = Field(default="all", min_length=1)
    hooks: dict[str, list[CallbackSpec]] = Field(default_factory=dict)


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_yaml_mapping(path: str | Path) -> dict[str, Any]:
    path = Path(path)
    if not path.exists():
        return {}
    data = yaml.safe_load(path.read_text())
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"YAML at {path} must decode to a mapping")
    return data


def load_effective_config(
    path: str | Path | None = None,
    system_defaults: dict[str, Any] | None = None,
    runtime_override: dict[str, Any] | None = None,
) -> HooksConfig:
    """Load config with precedence runtime > hooks file > system."""
    file_config = load_yaml_mapping(path) if path is not None else {}

    merged: dict[str, Any] = {}
    if system_defaults:
        merged = _deep_merge(merged, system_defaults)
    if file_config:
        merged = _deep_merge(merged, file_config)
    if runtime_override:
        merged = _deep_merge(merged, runtime_override)

    return HooksConfig.model_validate(merged)
