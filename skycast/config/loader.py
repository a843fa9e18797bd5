"""YAML config loader with environment override and runtime get/set."""

import hashlib
import json
import logging
import os
from pathlib import Path
from typing import Any

import yaml

from skycast.config.schema import AppConfig

logger = logging.getLogger(__name__)

API_KEY_ENV = "OPENWEATHER_API_KEY"
DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "config" / "skycast.yaml"


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load and validate config from a YAML file.

    A missing or empty file yields defaults. If the YAML leaves
    provider.api_key empty, OPENWEATHER_API_KEY from the environment is used.
    """
    raw: dict[str, Any] = {}
    if path is not None:
        path = Path(path)
        if path.exists():
            with open(path) as f:
                raw = yaml.safe_load(f) or {}
        else:
            logger.warning("Config file %s not found, using defaults", path)

    provider = raw.get("provider") or {}
    raw["provider"] = provider
    if not provider.get("api_key"):
        env_key = os.environ.get(API_KEY_ENV, "")
        if env_key:
            provider["api_key"] = env_key

    return AppConfig(**raw)


def config_hash(config: AppConfig) -> str:
    """Compute a deterministic SHA256 hash of the config."""
    data = config.model_dump_json(indent=None)
    return hashlib.sha256(data.encode()).hexdigest()[:16]


def get_config_value(config: AppConfig, dotted_key: str) -> Any:
    """Get a config value by dotted key path. E.g. 'forecast.hourly_limit'."""
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


def set_config_value(config: AppConfig, dotted_key: str, value: Any) -> AppConfig:
    """Set a config value by dotted key path and re-validate.

    Returns a new AppConfig instance.
    """
    data = json.loads(config.model_dump_json())
    parts = dotted_key.split(".")
    target = data
    for part in parts[:-1]:
        target = target[part]
    if parts[-1] not in target:
        raise KeyError(f"Config key not found: {dotted_key}")
    old_value = target.get(parts[-1])
    if isinstance(old_value, bool) and isinstance(value, str):
        value = value.lower() in ("1", "true", "yes", "on")
    elif isinstance(old_value, int) and isinstance(value, str):
        value = int(value)
    elif isinstance(old_value, float) and isinstance(value, str):
        value = float(value)
    target[parts[-1]] = value
    return AppConfig(**data)


def save_config(config: AppConfig, path: str | Path) -> None:
    """Write config back to YAML, keeping a .bak of the previous file.

    The api_key already on disk is written back in place of a key that
    only came from OPENWEATHER_API_KEY, so the environment secret never
    lands in the file.
    """
    path = Path(path)
    file_key = ""
    if path.exists():
        with open(path) as f:
            existing = yaml.safe_load(f) or {}
        provider = existing.get("provider") if isinstance(existing, dict) else None
        if isinstance(provider, dict):
            file_key = provider.get("api_key") or ""
        backup = path.with_suffix(".yaml.bak")
        backup.write_text(path.read_text())

    data = config.model_dump(mode="json")
    env_key = os.environ.get(API_KEY_ENV, "")
    if env_key and data["provider"]["api_key"] == env_key and file_key != env_key:
        data["provider"]["api_key"] = file_key

    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        yaml.dump(data, f, default_flow_style=False, sort_keys=False)
    logger.info("Saved config to %s", path)
