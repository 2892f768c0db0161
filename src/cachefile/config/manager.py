"""
cachefile configuration management (YAML layers + environment overrides).
"""
from __future__ import annotations

import json
import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple

import yaml

from cachefile.data import get_data_path
from cachefile.errors import ConfigError

from .merge import deep_merge

logger = logging.getLogger(__name__)

ENV_PREFIX = "CACHEFILE_"
HOME_ENV_VAR = "CACHEFILE_HOME"
DEFAULT_USER_DIR = "~/.cachefile"


def get_user_dir() -> Path:
    """Return the per-user cachefile directory (``$CACHEFILE_HOME`` or ``~/.cachefile``).

    Relative values are resolved against the home directory, not the CWD.
    """
    raw = os.environ.get(HOME_ENV_VAR) or DEFAULT_USER_DIR
    p = Path(raw).expanduser()
    if not p.is_absolute():
        p = Path.home() / p
    return p.resolve()


def iter_yaml_files(directory: Path) -> List[Path]:
    """Return ``*.yaml``/``*.yml`` files in ``directory`` sorted by name."""
    d = Path(directory)
    if not d.is_dir():
        return []
    return sorted(
        (p for p in d.iterdir() if p.is_file() and p.suffix in (".yaml", ".yml")),
        key=lambda p: p.name,
    )


class ConfigManager:
    """Load, merge, and validate cachefile configuration.

    Configuration sources (highest to lowest priority):
    1. Environment variables: CACHEFILE_<section>__<key>
    2. User config: <user-dir>/config/*.yaml (alphabetical order)
    3. Bundled defaults: cachefile.data/config/*.yaml (alphabetical order)
    """

    def __init__(self, user_dir: Optional[Path] = None) -> None:
        self.user_dir = Path(user_dir) if user_dir is not None else get_user_dir()
        self.core_config_dir = get_data_path("config")
        self.user_config_dir = self.user_dir / "config"

    def load_yaml(self, path: Path) -> Dict[str, Any]:
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as exc:
            # Invalid YAML is an error, never an empty layer.
            raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigError(
                f"Config file {path} must contain a mapping, got {type(data).__name__}"
            )
        return data

    def _load_directory(self, directory: Path, cfg: Dict[str, Any]) -> Dict[str, Any]:
        for path in iter_yaml_files(directory):
            cfg = deep_merge(cfg, self.load_yaml(path))
        return cfg

    # ========== Environment overrides ==========

    def _as_bool(self, v: str) -> Optional[bool]:
        low = v.strip().lower()
        if low in {"true", "false"}:
            return low == "true"
        return None

    def _as_int(self, v: str) -> Optional[int]:
        if re.fullmatch(r"[-+]?\d+", v.strip() or " "):
            return int(v)
        return None

    def _as_float(self, v: str) -> Optional[float]:
        s = v.strip()
        if re.fullmatch(r"[-+]?\d*\.\d+", s) or re.fullmatch(r"[-+]?\d+\.\d*", s):
            return float(s)
        return None

    def _as_json(self, v: str) -> Optional[Any]:
        s = v.strip()
        if (s.startswith("{") and s.endswith("}")) or (s.startswith("[") and s.endswith("]")):
            try:
                return json.loads(s)
            except ValueError:
                return None
        return None

    def _coerce_type(self, value: str) -> Any:
        for caster in (self._as_bool, self._as_int, self._as_float, self._as_json):
            result = caster(value)
            if result is not None:
                return result
        return value

    def _iter_env_overrides(self, *, strict: bool) -> Iterator[Tuple[List[str], Any]]:
        for key in sorted(os.environ.keys()):
            if not key.startswith(ENV_PREFIX) or key == HOME_ENV_VAR:
                continue
            raw = key[len(ENV_PREFIX):]
            if "__" not in raw:
                if strict:
                    raise ConfigError(
                        f"Malformed {key}: expected {ENV_PREFIX}<section>__<key>"
                    )
                logger.debug("Ignoring environment variable %s", key)
                continue
            segs = raw.split("__")
            if any(not s for s in segs):
                if strict:
                    raise ConfigError(f"Malformed {key}: empty segment")
                continue
            yield [s.lower() for s in segs], self._coerce_type(os.environ[key])

    def _set_nested(self, root: Dict[str, Any], path: List[str], value: Any) -> None:
        cur = root
        for part in path[:-1]:
            nxt = cur.get(part)
            if not isinstance(nxt, dict):
                nxt = {}
                cur[part] = nxt
            cur = nxt
        cur[path[-1]] = value

    def apply_env_overrides(self, cfg: Dict[str, Any], *, strict: bool) -> None:
        for path, typed_value in self._iter_env_overrides(strict=strict):
            self._set_nested(cfg, path, typed_value)

    # ========== Loading ==========

    def _load_config_uncached(self, validate: bool = True) -> Dict[str, Any]:
        """Load and merge configuration from all sources (UNCACHED).

        Layers:
            1. Core config: cachefile.data/config/*.yaml
            2. User config: <user-dir>/config/*.yaml
            3. Environment variable overrides (CACHEFILE_*)

        Args:
            validate: If True, validate the merged result against the schema
                and reject malformed environment overrides.
        """
        cfg: Dict[str, Any] = {}
        cfg = self._load_directory(self.core_config_dir, cfg)
        cfg = self._load_directory(self.user_config_dir, cfg)
        self.apply_env_overrides(cfg, strict=validate)

        if validate:
            from .validation import validate_payload

            validate_payload(cfg, "config")
        return cfg

    def load_bundled_defaults(self) -> Dict[str, Any]:
        """Return only the bundled defaults layer, ignoring user files and env."""
        return self._load_directory(self.core_config_dir, {})

    def load_config(self, validate: bool = True) -> Dict[str, Any]:
        """Return the merged configuration, served from the process cache."""
        from .cache import get_cached_config

        return get_cached_config(user_dir=self.user_dir, validate=validate)


__all__ = ["ConfigManager", "get_user_dir", "iter_yaml_files", "ENV_PREFIX", "HOME_ENV_VAR"]
