"""Configuration utilities.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Type, TypeVar

import yaml

logger = logging.getLogger(__name__)

T = TypeVar("T", bound="RouterConfig")

PACKAGE_LOGGER = "roadrouter_core"


@dataclass
class RouterConfig:
    """Router configuration."""

    # Log resolution traces at INFO instead of DEBUG
    debug: bool = False

    # Nested mounts deeper than this abort resolution
    max_mount_depth: int = 32

    # Method used by declarative route tables when none is given
    default_method: str = "GET"

    # Logging
    log_level: str = "INFO"

    @classmethod
    def from_dict(cls: Type[T], data: Dict[str, Any]) -> T:
        """Create config from dictionary."""
        # Filter to only valid fields
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in (data or {}).items() if k in valid_fields}
        return cls(**filtered)

    @classmethod
    def from_json(cls: Type[T], path: str) -> T:
        """Load config from JSON file."""
        with open(path, "r") as f:
            data = json.load(f)
        return cls.from_dict(data)

    @classmethod
    def from_yaml(cls: Type[T], path: str) -> T:
        """Load config from YAML file."""
        with open(path, "r") as f:
            data = yaml.safe_load(f)
        return cls.from_dict(data)

    @classmethod
    def from_env(cls: Type[T], prefix: str = "ROADROUTER_") -> T:
        """Load config from environment variables."""
        data = {}

        for key, value in os.environ.items():
            if key.startswith(prefix):
                config_key = key[len(prefix):].lower()

                # Type conversion
                if value.lower() in ("true", "false"):
                    data[config_key] = value.lower() == "true"
                elif value.isdigit():
                    data[config_key] = int(value)
                else:
                    data[config_key] = value

        return cls.from_dict(data)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        result = {}
        for field_name in self.__dataclass_fields__:
            result[field_name] = getattr(self, field_name)
        return result

    def merge(self, other: Dict[str, Any]) -> "RouterConfig":
        """Merge with explicitly set values (``other`` takes precedence)."""
        data = self.to_dict()
        data.update(other)
        return RouterConfig.from_dict(data)


def load_config(
    path: Optional[str] = None,
    env_prefix: str = "ROADROUTER_",
) -> RouterConfig:
    """Load configuration from multiple sources.

    Priority (highest to lowest):
    1. Environment variables
    2. Config file (if provided)
    3. Defaults

    The package logger level is set from ``log_level``.
    """
    config = RouterConfig()

    # Load from file if provided
    if path:
        path_obj = Path(path)
        if path_obj.exists():
            if path.endswith(".json"):
                config = RouterConfig.from_json(path)
            elif path.endswith((".yaml", ".yml")):
                config = RouterConfig.from_yaml(path)
            else:
                logger.warning(f"Unknown config format: {path}")
        else:
            logger.warning(f"Config file not found: {path}")

    # Override with environment variables that are actually set
    env_values = {
        k: v
        for k, v in RouterConfig.from_env(env_prefix).to_dict().items()
        if f"{env_prefix}{k.upper()}" in os.environ
    }
    config = config.merge(env_values)

    logging.getLogger(PACKAGE_LOGGER).setLevel(config.log_level.upper())
    return config


__all__ = [
    "RouterConfig",
    "load_config",
]
