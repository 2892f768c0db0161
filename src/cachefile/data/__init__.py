"""Files shipped inside the cachefile package.

``config/defaults.yaml`` holds the lowest configuration layer and
``schemas/config.schema.yaml`` the schema the merged result must satisfy.
"""

from __future__ import annotations

from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any

import yaml


def get_data_path(subpackage: str, filename: str = "") -> Path:
    """Filesystem path of a bundled directory, or of a file inside it."""
    root = Path(str(resources.files("cachefile.data") / subpackage))
    return root / filename if filename else root


@lru_cache(maxsize=16)
def read_yaml(subpackage: str, filename: str) -> dict[str, Any]:
    """Parsed content of a bundled YAML file.

    Results are memoized; do not mutate them.
    """
    text = get_data_path(subpackage, filename).read_text(encoding="utf-8")
    return yaml.safe_load(text) or {}


def clear_caches() -> None:
    read_yaml.cache_clear()


__all__ = ["get_data_path", "read_yaml", "clear_caches"]
