"""YAML config loader with environment overrides and dotted-key lookup."""

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from weathertext.config.defaults import DEFAULT_PROVIDERS
from weathertext.config.schema import AppConfig

PRIORITY_ENV_VAR = "WEATHER_PROVIDER_PRIORITY"


def load_config(
    path: str | Path | None = None, environ: Mapping[str, str] | None = None
) -> AppConfig:
    """Load and validate config from a YAML file.

    With no path every setting takes its default. If no providers are
    specified, injects DEFAULT_PROVIDERS. WEATHER_PROVIDER_PRIORITY in the
    environment overrides ``provider_priority``.
    """
    environ = os.environ if environ is None else environ
    raw: dict[str, Any] = {}
    if path is not None:
        with open(Path(path)) as f:
            raw = yaml.safe_load(f) or {}
        if not isinstance(raw, dict):
            raise ValueError("Config must be a YAML mapping at the top level")

    if "providers" not in raw or not raw["providers"]:
        raw["providers"] = [p.model_dump() for p in DEFAULT_PROVIDERS]

    priority = environ.get(PRIORITY_ENV_VAR, "").strip()
    if priority:
        raw["provider_priority"] = priority

    return AppConfig(**raw)


def get_config_value(config: AppConfig, dotted_key: str) -> Any:
    """Get a config value by dotted key path. E.g. 'server.port' or 'providers.0.name'."""
    parts = dotted_key.split(".")
    obj: Any = config
    for part in parts:
        if isinstance(obj, list):
            obj = obj[int(part)]
        elif hasattr(obj, part):
            obj = getattr(obj, part)
        elif isinstance(obj, dict):
            obj = obj[part]
        else:
            raise KeyError(f"Config key not found: {dotted_key}")
    return obj
