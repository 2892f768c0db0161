"""Domain-specific configuration for low-level file I/O.

Covers the chunk size used by streaming reads and zero-fill writes, whether
atomic writes fsync their temporary file, and the infix used in temporary
file names.
"""
from __future__ import annotations

from functools import cached_property
from typing import Any, Dict

from ..base import BaseDomainConfig


class IOConfig(BaseDomainConfig):
    """Accessor for the ``io`` section."""

    def _config_section(self) -> str:
        return "io"

    @cached_property
    def read_buffer_size(self) -> int:
        return int(self.section["read_buffer_size"])

    @cached_property
    def fsync(self) -> bool:
        """Whether temp files are fsync'd before being renamed into place."""
        return bool(self.section["fsync"])

    @cached_property
    def tmp_infix(self) -> str:
        return str(self.section["tmp_infix"])

    def get_all_settings(self) -> Dict[str, Any]:
        return {
            "read_buffer_size": self.read_buffer_size,
            "fsync": self.fsync,
            "tmp_infix": self.tmp_infix,
        }


__all__ = ["IOConfig"]
