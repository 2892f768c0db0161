"""Exception types raised by cachefile.

Descriptor, read, write and copy operations raise :class:`FileIOError`,
whose message is meant for logs. Removal operations re-raise the native
``OSError`` so callers can branch on ``errno``.
"""
from __future__ import annotations

from typing import Optional

from .types import PathLike


class CacheFileError(Exception):
    """Marker base class for every exception defined by cachefile."""


class FileIOError(CacheFileError, OSError):
    """A file operation failed.

    ``str(exc)`` is the human-readable message. ``reason``, ``errno`` and
    ``filename`` are populated from the underlying ``OSError`` when there is
    one, so wrappers can rephrase the message without nesting it.
    """

    def __init__(
        self,
        message: str,
        *,
        path: Optional[PathLike] = None,
        errno: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.reason = message
        self.errno = errno
        self.filename = None if path is None else str(path)

    def __str__(self) -> str:
        return self.message

    @classmethod
    def from_os_error(
        cls, message: str, exc: OSError, *, path: Optional[PathLike] = None
    ) -> "FileIOError":
        """Build an error whose message ends with ``exc``'s strerror."""
        reason = exc.strerror or str(exc)
        err = cls(f"{message}: {reason}", path=path, errno=exc.errno)
        err.reason = reason
        return err


class ConfigError(CacheFileError, ValueError):
    """Configuration could not be loaded or is malformed."""


class SchemaValidationError(ConfigError):
    """Configuration does not match the bundled schema."""


__all__ = [
    "CacheFileError",
    "FileIOError",
    "ConfigError",
    "SchemaValidationError",
]
