"""Typed accessors for individual configuration sections."""
from __future__ import annotations

from .io import IOConfig
from .logging import LoggingConfig
from .text import TextConfig

__all__ = ["IOConfig", "LoggingConfig", "TextConfig"]
