"""Domain-specific configuration for text decoding and encoding."""
from __future__ import annotations

from functools import cached_property

from ..base import BaseDomainConfig


class TextConfig(BaseDomainConfig):
    """Accessor for the ``text`` section.

    ``errors`` is a codec error handler name; the default
    ``surrogateescape`` lets undecodable bytes survive a read/write cycle.
    """

    def _config_section(self) -> str:
        return "text"

    @cached_property
    def encoding(self) -> str:
        return str(self.section["encoding"])

    @cached_property
    def errors(self) -> str:
        return str(self.section["errors"])

    @cached_property
    def transcode_utf16le_bom(self) -> bool:
        return bool(self.section["transcode_utf16le_bom"])


__all__ = ["TextConfig"]
