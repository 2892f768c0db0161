"""Process-wide cache of the merged configuration.

Every accessor reads the same dict. The cache key fingerprints CACHEFILE_*
environment variables and the user config files, so edits are picked up
without an explicit reset.
"""
from __future__ import annotations

import hashlib
import logging
import os
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple

from cachefile.errors import ConfigError

logger = logging.getLogger(__name__)

_config_cache: Dict[str, Dict[str, Any]] = {}
_cache_clearers: Dict[str, Callable[[], None]] = {}


def _normalize_user_dir(user_dir: Optional[Path]) -> Path:
    if user_dir is None:
        from .manager import get_user_dir

        return get_user_dir()
    return Path(user_dir).expanduser().resolve()


def _cache_key(user_dir: Optional[Path], validate: bool = True) -> str:
    from .manager import ENV_PREFIX, iter_yaml_files

    base = _normalize_user_dir(user_dir)

    env_items = sorted(
        (k, os.environ.get(k, "")) for k in os.environ.keys() if k.startswith(ENV_PREFIX)
    )
    env_fp = hashlib.sha256(repr(env_items).encode("utf-8")).hexdigest()[:12]

    files: List[Tuple[str, int, int]] = []
    for p in iter_yaml_files(base / "config"):
        try:
            st = p.stat()
            files.append((p.name, st.st_mtime_ns, st.st_size))
        except OSError:
            files.append((p.name, 0, 0))
    cfg_fp = hashlib.sha256(repr(files).encode("utf-8")).hexdigest()[:12]

    suffix = ":validated" if validate else ":raw"
    return f"{base}{suffix}:env={env_fp}:cfg={cfg_fp}"


def get_cached_config(
    user_dir: Optional[Path] = None,
    validate: bool = True,
    *,
    fallback_to_defaults: bool = False,
) -> Dict[str, Any]:
    """Return the merged configuration, loading it on first use.

    Returns the same dict instance for an unchanged environment and user
    config; treat it as immutable.

    Args:
        user_dir: User directory (default: ``$CACHEFILE_HOME`` or ``~/.cachefile``)
        validate: Validate against the schema and reject malformed overrides
        fallback_to_defaults: On a configuration error, log a warning and
            return the bundled defaults instead of raising

    Raises:
        ConfigError: If loading fails and ``fallback_to_defaults`` is False.
    """
    normalized = _normalize_user_dir(user_dir)
    key = _cache_key(normalized, validate=validate)
    if fallback_to_defaults:
        key += ":fallback"
    if key not in _config_cache:
        from .manager import ConfigManager

        manager = ConfigManager(user_dir=normalized)
        try:
            _config_cache[key] = manager._load_config_uncached(validate=validate)
        except ConfigError as exc:
            if not fallback_to_defaults:
                raise
            logger.warning("Ignoring cachefile configuration, using bundled defaults: %s", exc)
            _config_cache[key] = manager.load_bundled_defaults()
    return _config_cache[key]



def clear_all_caches() -> None:
    """Clear the config dict cache and every registered derived cache."""
    _config_cache.clear()
    for clearer in list(_cache_clearers.values()):
        clearer()


def register_cache_clearer(name: str, clearer: Callable[[], None]) -> None:
    """Register an additional cache clearer to run inside `clear_all_caches()`."""
    _cache_clearers[name] = clearer


def is_cached(user_dir: Optional[Path] = None, validate: bool = True) -> bool:
    return _cache_key(user_dir, validate=validate) in _config_cache


__all__ = [
    "get_cached_config",
    "clear_all_caches",
    "register_cache_clearer",
    "is_cached",
]
