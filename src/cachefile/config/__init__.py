"""Configuration for cachefile.

Layered YAML (bundled defaults, user config directory) with
``CACHEFILE_<section>__<key>`` environment overrides, validated against a
bundled JSON Schema.
"""
from __future__ import annotations

from cachefile.data import clear_caches as _clear_data_caches

from .cache import clear_all_caches, get_cached_config, is_cached, register_cache_clearer
from .domains import IOConfig, LoggingConfig, TextConfig
from .manager import ConfigManager, get_user_dir

register_cache_clearer("data", _clear_data_caches)

__all__ = [
    "ConfigManager",
    "get_user_dir",
    "get_cached_config",
    "clear_all_caches",
    "register_cache_clearer",
    "is_cached",
    "IOConfig",
    "LoggingConfig",
    "TextConfig",
]
