"""Utility functions and helpers."""

from __future__ import annotations

from .config_loader import (
    DEFAULT_CONFIG_PATH,
    config_to_dict,
    from_dict,
    load_config_from_yaml,
    load_default_config,
)

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "config_to_dict",
    "from_dict",
    "load_config_from_yaml",
    "load_default_config",
]
