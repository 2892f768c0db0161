"""Descriptor-level I/O.

Descriptors passed to these helpers are owned by the caller and are never
closed here.
"""
from __future__ import annotations

import errno
import logging
import os
from typing import Optional, Union

from cachefile.errors import FileIOError
from cachefile.types import DataReceiver

logger = logging.getLogger(__name__)

BytesLike = Union[bytes, bytearray, memoryview]

# Filesystems without allocation support report one of these.
_FALLOCATE_UNSUPPORTED = {errno.EINVAL, errno.EOPNOTSUPP, errno.ENOSYS}


def _buffer_size(buffer_size: Optional[int]) -> int:
    if buffer_size is None:
        from cachefile.config import IOConfig

        buffer_size = IOConfig(fallback_to_defaults=True).read_buffer_size
    if buffer_size <= 0:
        raise ValueError(f"buffer_size must be positive (got {buffer_size})")
    return buffer_size


def read_fd(fd: int, receiver: DataReceiver, *, buffer_size: Optional[int] = None) -> None:
    """Read ``fd`` until end of file, passing each chunk to ``receiver``.

    Chunks arrive in file order; their boundaries are unspecified. An empty
    file results in no calls.

    Raises:
        FileIOError: If a read fails.
    """
    size = _buffer_size(buffer_size)
    while True:
        try:
            chunk = os.read(fd, size)
        except OSError as exc:
            raise FileIOError.from_os_error(
                f"Failed to read from file descriptor {fd}", exc
            ) from exc
        if not chunk:
            return
        receiver(chunk)


def write_fd(fd: int, data: BytesLike, size: Optional[int] = None) -> None:
    """Write exactly ``size`` bytes from the start of ``data`` to ``fd``.

    ``size`` defaults to ``len(data)``. Short writes are continued until
    everything is written.

    Raises:
        ValueError: If ``size`` is negative or exceeds ``len(data)``.
        FileIOError: If a write fails.
    """
    view = memoryview(data).cast("B")
    if size is None:
        size = len(view)
    if size < 0 or size > len(view):
        raise ValueError(f"size {size} out of range for {len(view)} byte buffer")

    written = 0
    while written < size:
        try:
            written += os.write(fd, view[written:size])
        except BlockingIOError:
            continue
        except OSError as exc:
            raise FileIOError.from_os_error(
                f"Failed to write to file descriptor {fd}", exc
            ) from exc


def fallocate(fd: int, new_size: int, *, buffer_size: Optional[int] = None) -> None:
    """Extend the file behind ``fd`` to at least ``new_size`` bytes.

    Uses ``posix_fallocate`` where available; otherwise, or when the
    filesystem does not support it, zeros are appended from the current end
    of file. Existing holes are not filled. Files already long enough are
    left alone.

    Raises:
        ValueError: If ``new_size`` is negative.
        FileIOError: If the file cannot be extended.
    """
    if new_size < 0:
        raise ValueError(f"new_size must not be negative (got {new_size})")
    if new_size == 0:
        return

    if hasattr(os, "posix_fallocate"):
        try:
            os.posix_fallocate(fd, 0, new_size)
            return
        except OSError as exc:
            if exc.errno not in _FALLOCATE_UNSUPPORTED:
                raise FileIOError.from_os_error(
                    f"Failed to allocate {new_size} bytes", exc
                ) from exc
            logger.debug(
                "posix_fallocate unsupported on fd %d (%s), writing zeros", fd, exc.strerror
            )

    _extend_with_zeros(fd, new_size, _buffer_size(buffer_size))


def _extend_with_zeros(fd: int, new_size: int, chunk_size: int) -> None:
    try:
        saved_pos = os.lseek(fd, 0, os.SEEK_CUR)
        old_size = os.lseek(fd, 0, os.SEEK_END)
    except OSError as exc:
        raise FileIOError.from_os_error(f"Failed to seek in file descriptor {fd}", exc) from exc

    try:
        remaining = new_size - old_size
        if remaining > 0:
            zeros = bytes(min(remaining, chunk_size))
            while remaining > 0:
                n = min(remaining, len(zeros))
                write_fd(fd, zeros, n)
                remaining -= n
    finally:
        try:
            os.lseek(fd, saved_pos, os.SEEK_SET)
        except OSError:
            logger.debug("Failed to restore position of fd %d", fd)


def set_cloexec_flag(fd: int) -> Optional[str]:
    """Mark ``fd`` to be closed across exec. Best-effort.

    Returns:
        None on success, otherwise a diagnostic message.
    """
    try:
        os.set_inheritable(fd, False)
    except OSError as exc:
        message = f"Failed to set close-on-exec on fd {fd}: {exc.strerror}"
        logger.debug(message)
        return message
    return None


__all__ = ["read_fd", "write_fd", "fallocate", "set_cloexec_flag", "BytesLike"]
