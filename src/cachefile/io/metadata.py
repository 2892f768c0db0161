"""Best-effort metadata operations.

These never raise for filesystem failures. They return ``None`` on success
and a diagnostic message otherwise, which is also logged at DEBUG level.
"""
from __future__ import annotations

import logging
import os
import time
from datetime import datetime, timezone
from typing import Optional

from cachefile.errors import FileIOError
from cachefile.types import PathLike, TimeLike

from .content import write_file
from .descriptors import set_cloexec_flag

logger = logging.getLogger(__name__)

CACHEDIR_TAG_NAME = "CACHEDIR.TAG"

# Recognized by backup and indexing tools; see https://bford.info/cachedir/.
CACHEDIR_TAG_CONTENT = (
    "Signature: 8a477f597d28d172789f06886806bc55\n"
    "# This file is a cache directory tag created by cachefile.\n"
    "# For information about cache directory tags, see:\n"
    "#\thttps://bford.info/cachedir/\n"
)

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_NS_PER_SECOND = 1_000_000_000


def to_ns(value: TimeLike) -> int:
    """Convert a datetime or POSIX seconds to nanoseconds since the epoch.

    Naive datetimes are interpreted as local time.
    """
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.astimezone()
        delta = value - _EPOCH
        return (delta.days * 86400 + delta.seconds) * _NS_PER_SECOND + delta.microseconds * 1000
    if isinstance(value, int):
        return value * _NS_PER_SECOND
    return int(round(value * _NS_PER_SECOND))


def _diagnostic(message: str) -> str:
    logger.debug(message)
    return message


def set_timestamps(
    path: PathLike,
    mtime: Optional[TimeLike] = None,
    atime: Optional[TimeLike] = None,
) -> Optional[str]:
    """Set modification and access time of ``path``.

    ``mtime`` defaults to now and ``atime`` defaults to ``mtime``.
    """
    try:
        if mtime is None and atime is None:
            os.utime(path)
        else:
            mtime_ns = time.time_ns() if mtime is None else to_ns(mtime)
            atime_ns = mtime_ns if atime is None else to_ns(atime)
            os.utime(path, ns=(atime_ns, mtime_ns))
    except OSError as exc:
        return _diagnostic(f"Failed to set timestamps of {os.fspath(path)}: {exc.strerror}")
    return None


def create_cachedir_tag(directory: PathLike) -> Optional[str]:
    """Mark ``directory`` as holding disposable cache data.

    Writes ``CACHEDIR.TAG`` unless a regular file by that name already
    exists.
    """
    path = os.path.join(os.fspath(directory), CACHEDIR_TAG_NAME)
    if os.path.isfile(path):
        return None
    try:
        write_file(path, CACHEDIR_TAG_CONTENT)
    except FileIOError as exc:
        return _diagnostic(f"Failed to create {path}: {exc.reason}")
    return None


__all__ = [
    "CACHEDIR_TAG_NAME",
    "CACHEDIR_TAG_CONTENT",
    "create_cachedir_tag",
    "set_cloexec_flag",
    "set_timestamps",
    "to_ns",
]
