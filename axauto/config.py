# axauto/config.py
"""
@file config.py
@brief Centralized settings for capability binding, search and path generation.
"""

from __future__ import annotations

import json
import os
import threading
from contextlib import contextmanager
from dataclasses import asdict, dataclass, fields, replace
from typing import Any, Dict, Generator, Optional

import jsonschema
import yaml

from .exceptions import ConfigError

_SCHEMA_PATH = os.path.join(os.path.dirname(__file__), "schemas", "config.schema.json")


@dataclass(frozen=True)
class AXConfig:
    """
    Settings for the object model.

    Precedence per thread: run config -> override() -> process default.
    """
    attribute_prefix: str = "AX"
    strict_reads: bool = False
    strict_actions: bool = False
    cycle_guard: bool = True
    comment_width_threshold: int = 44
    unknown_role: str = "<AXUnknownRole>"
    empty_description: str = "<AXEmptyDescription>"
    empty_role_description: str = "<AXEmptyRoleDescription>"

    _default_instance = None
    _local = threading.local()
    _lock = threading.Lock()

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def with_overrides(self, **kwargs: Any) -> AXConfig:
        known = {f.name for f in fields(self)}
        unknown = set(kwargs) - known
        if unknown:
            raise ConfigError(f"Unknown AXConfig field(s): {sorted(unknown)}")
        return replace(self, **kwargs)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> AXConfig:
        _validate(data)
        return cls().with_overrides(**data)

    @classmethod
    def from_yaml(cls, path: str) -> AXConfig:
        if not os.path.exists(path):
            raise ConfigError(f"Settings YAML not found: {path}")
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError("Settings YAML must be a mapping at root.")
        return cls.from_dict(data.get("axauto", data))

    @classmethod
    def default(cls) -> AXConfig:
        """Get the process default configuration (singleton)."""
        if cls._default_instance is None:
            with cls._lock:
                if cls._default_instance is None:
                    cls._default_instance = cls()
        return cls._default_instance

    @classmethod
    def install_run_config(cls, config: AXConfig) -> None:
        """Install per-thread run configuration."""
        cls._local.run_config = config

    @classmethod
    def clear_run_config(cls) -> None:
        cls._local.run_config = None

    @classmethod
    def current(cls) -> AXConfig:
        """Get the current effective configuration."""
        run_cfg = getattr(cls._local, "run_config", None)
        if run_cfg is not None:
            return run_cfg

        override = getattr(cls._local, "override", None)
        if override is not None:
            return override

        return cls.default()

    @classmethod
    @contextmanager
    def override(cls, **kwargs: Any) -> Generator[AXConfig, None, None]:
        """Context manager for temporary configuration overrides."""
        previous = getattr(cls._local, "override", None)
        new_config = cls.current().with_overrides(**kwargs)

        cls._local.override = new_config
        try:
            yield new_config
        finally:
            cls._local.override = previous

    @classmethod
    def reset_to_defaults(cls) -> None:
        """Reset default and clear all thread-local config state."""
        with cls._lock:
            cls._default_instance = cls()
        cls._local.override = None
        cls._local.run_config = None


def _validate(data: Dict[str, Any]) -> None:
    with open(_SCHEMA_PATH, "r", encoding="utf-8") as f:
        schema = json.load(f)
    try:
        jsonschema.validate(instance=data, schema=schema)
    except jsonschema.ValidationError as e:
        where = ".".join(str(p) for p in e.absolute_path) or "<root>"
        raise ConfigError(f"Invalid settings at {where}: {e.message}") from e
