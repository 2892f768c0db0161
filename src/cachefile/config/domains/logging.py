"""Domain-specific configuration for cachefile logging."""
from __future__ import annotations

from functools import cached_property
from pathlib import Path
from typing import Optional

from ..base import BaseDomainConfig


class LoggingConfig(BaseDomainConfig):
    def _config_section(self) -> str:
        return "logging"

    @cached_property
    def level(self) -> str:
        return str(self.section.get("level", "WARNING") or "WARNING").upper()

    @cached_property
    def path(self) -> Optional[Path]:
        """Log file path, or None when file logging is disabled.

        Relative paths are resolved against the user directory.
        """
        raw = str(self.section.get("path", "") or "").strip()
        if not raw:
            return None
        p = Path(raw).expanduser()
        if not p.is_absolute():
            from ..manager import get_user_dir

            p = (self._user_dir or get_user_dir()) / p
        return p


__all__ = ["LoggingConfig"]
