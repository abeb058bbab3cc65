from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from allocviz.models.config_models import AppConfig, InferenceConfig

"""Config loader.

Responsibilities:
- Load the YAML config (default config/allocviz.yml, or ALLOCVIZ_CONFIG)
- Validate it against config_schema.json shipped with the package
- Merge the values over the built-in inference defaults
"""

__all__ = [
    "ConfigError",
    "DEFAULT_CONFIG_PATH",
    "CONFIG_ENV_VAR",
    "SCHEMA_PATH",
    "load_config",
    "resolve_config_path",
]

SCHEMA_PATH = Path(__file__).with_name("config_schema.json")
DEFAULT_CONFIG_PATH = Path("config") / "allocviz.yml"
CONFIG_ENV_VAR = "ALLOCVIZ_CONFIG"


class ConfigError(Exception):
    pass


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: If the schema file is missing or invalid, or the config
            data fails validation (unknown keys, wrong types).
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")

    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def resolve_config_path(explicit: Path | None = None) -> tuple[Path, bool]:
    """Return the config path to use and whether the caller asked for it.

    Precedence: explicit argument, then ALLOCVIZ_CONFIG, then the default path.
    Only the default path may be absent.
    """
    if explicit is not None:
        return explicit, True
    env_path = os.getenv(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path), True
    return DEFAULT_CONFIG_PATH, False


def _lowered(values: list[str]) -> tuple[str, ...]:
    return tuple(v.strip().lower() for v in values if v.strip())


def _build_inference(data: dict[str, Any]) -> InferenceConfig:
    defaults = InferenceConfig()
    overrides = data.get("role_keywords") or {}
    role_keywords = tuple(
        (role, _lowered(overrides[role]) if role in overrides else keywords)
        for role, keywords in defaults.role_keywords
    )

    positions = defaults.fixed_product_positions
    names = defaults.fixed_product_names
    fixed = data.get("fixed_products")
    if fixed is not None:
        names = _lowered(fixed["names"])
        if "positions" in fixed:
            start, end = fixed["positions"]
            if start > end:
                raise ConfigError(f"config validation failed: fixed_products positions {start} > {end}")
            positions = (start, end)

    denylist = defaults.synthetic_label_denylist
    if "synthetic_label_denylist" in data:
        denylist = _lowered(data["synthetic_label_denylist"])

    return InferenceConfig(
        role_keywords=role_keywords,
        fixed_product_positions=positions,
        fixed_product_names=names,
        synthetic_label_denylist=denylist,
        default_product_label=data.get("default_product_label", defaults.default_product_label),
    )


def load_config(path: Path | None = None) -> AppConfig:
    config_path, required = resolve_config_path(path)
    if not config_path.exists():
        if required:
            raise ConfigError(f"config file not found: {config_path}")
        return AppConfig()
    try:
        data = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config validation failed: expected a mapping, got {type(data).__name__}")

    _validate_config_schema(data)

    defaults = AppConfig()
    return AppConfig(
        inference=_build_inference(data),
        session_path=Path(data["session_path"]) if "session_path" in data else defaults.session_path,
        preview_rows=data.get("preview_rows", defaults.preview_rows),
    )
