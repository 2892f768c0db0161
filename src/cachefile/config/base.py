"""Shared plumbing for the per-section config accessors."""
from __future__ import annotations

from abc import ABC, abstractmethod
from functools import cached_property
from pathlib import Path
from typing import Any, Dict, Optional

from .cache import get_cached_config


class BaseDomainConfig(ABC):
    """Typed view onto one top-level section of the merged configuration.

    Subclasses name their section and expose settings as cached properties::

        class IOConfig(BaseDomainConfig):
            def _config_section(self) -> str:
                return "io"

            @cached_property
            def fsync(self) -> bool:
                return bool(self.section["fsync"])

    The merged config comes from :func:`get_cached_config`, so building an
    accessor is cheap once the config has been loaded. With
    ``fallback_to_defaults=True`` a broken user config or environment gives
    the bundled defaults (with a warning) instead of a ``ConfigError``; the
    file operations use that mode.
    """

    def __init__(
        self, user_dir: Optional[Path] = None, *, fallback_to_defaults: bool = False
    ) -> None:
        self._user_dir = user_dir
        self._config = get_cached_config(
            user_dir=user_dir, fallback_to_defaults=fallback_to_defaults
        )

    @abstractmethod
    def _config_section(self) -> str:
        ...

    @cached_property
    def section(self) -> Dict[str, Any]:
        """The section mapping; empty when the section is missing."""
        return self._config.get(self._config_section(), {}) or {}


__all__ = ["BaseDomainConfig"]
