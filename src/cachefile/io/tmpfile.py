"""Scoped temporary files and atomic replacement.

Temporary files are created next to their destination so the final rename
stays on one filesystem. A temporary file that is not committed is removed
when its scope ends, on success and failure alike.
"""
from __future__ import annotations

import logging
import os
import tempfile
import uuid
from contextlib import contextmanager
from functools import lru_cache
from typing import Iterator, Optional

from cachefile.errors import FileIOError
from cachefile.types import PathLike

logger = logging.getLogger(__name__)


def _tmp_infix(infix: Optional[str]) -> str:
    if infix is not None:
        return infix
    from cachefile.config import IOConfig

    return IOConfig(fallback_to_defaults=True).tmp_infix


@lru_cache(maxsize=None)
def _process_umask() -> int:
    # Reading the umask means setting it; do that once per process.
    mask = os.umask(0)
    os.umask(mask)
    return mask


def unique_sibling_name(path: PathLike, suffix: str = "", *, infix: Optional[str] = None) -> str:
    """Return ``<path>.<infix>.<random><suffix>``; the name is not reserved."""
    return f"{os.fspath(path)}.{_tmp_infix(infix)}.{uuid.uuid4().hex[:8]}{suffix}"


class TemporaryFile:
    """An exclusively created file named after ``path_prefix``.

    The file gets mode ``0o666`` masked by the process umask, like any
    regular file. Use as a context manager: on exit the descriptor is closed
    and the file removed unless :meth:`commit` succeeded.
    """

    def __init__(self, fd: int, path: str) -> None:
        self.fd = fd
        self.path = path
        self.committed = False

    @classmethod
    def create(cls, path_prefix: PathLike, *, infix: Optional[str] = None) -> "TemporaryFile":
        """Create a new temporary file.

        Raises:
            FileIOError: If no file could be created.
        """
        directory, name = os.path.split(os.fspath(path_prefix))
        try:
            fd, path = tempfile.mkstemp(
                prefix=f"{name}.{_tmp_infix(infix)}.", dir=directory or os.curdir
            )
        except OSError as exc:
            raise FileIOError.from_os_error(
                f"Failed to create temporary file for {os.fspath(path_prefix)}",
                exc,
                path=path_prefix,
            ) from exc

        tmp = cls(fd, path)
        if hasattr(os, "fchmod"):
            try:
                os.fchmod(fd, 0o666 & ~_process_umask())
            except OSError as exc:
                tmp.discard()
                raise FileIOError.from_os_error(
                    f"Failed to set mode of temporary file {path}", exc, path=path
                ) from exc
        return tmp

    def close(self) -> None:
        if self.fd >= 0:
            fd, self.fd = self.fd, -1
            os.close(fd)

    def commit(self, dest: PathLike) -> None:
        """Close the file and atomically rename it to ``dest``.

        Raises:
            FileIOError: If the rename fails; the temporary file is kept
                until the scope ends.
        """
        self.close()
        try:
            os.replace(self.path, dest)
        except OSError as exc:
            raise FileIOError.from_os_error(
                f"Failed to rename {self.path} to {os.fspath(dest)}", exc, path=dest
            ) from exc
        self.committed = True

    def discard(self) -> None:
        """Close and remove the file. Removal failures are only logged."""
        self.close()
        if self.committed:
            return
        try:
            os.unlink(self.path)
        except FileNotFoundError:
            pass
        except OSError as exc:
            logger.warning("Failed to remove temporary file %s: %s", self.path, exc.strerror)

    def __enter__(self) -> "TemporaryFile":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.discard()


def temporary_file(path_prefix: PathLike, *, infix: Optional[str] = None) -> TemporaryFile:
    """Create a :class:`TemporaryFile` for use in a ``with`` block."""
    return TemporaryFile.create(path_prefix, infix=infix)


@contextmanager
def atomic_replace(path: PathLike, *, fsync: Optional[bool] = None) -> Iterator[int]:
    """Yield a writable descriptor whose content atomically replaces ``path``.

    Data goes to a temporary file in the same directory. On normal exit the
    file is optionally fsync'd, closed and renamed over ``path``, so readers
    see either the old or the new content. If the block raises, the
    temporary file is removed and ``path`` is untouched.

    Args:
        path: Destination path
        fsync: Flush to stable storage before renaming (default: ``io.fsync``)
    """
    if fsync is None:
        from cachefile.config import IOConfig

        fsync = IOConfig(fallback_to_defaults=True).fsync

    with temporary_file(path) as tmp:
        yield tmp.fd
        if fsync:
            try:
                os.fsync(tmp.fd)
            except OSError as exc:
                raise FileIOError.from_os_error(
                    f"Failed to sync {tmp.path}", exc, path=tmp.path
                ) from exc
        tmp.commit(path)


__all__ = ["TemporaryFile", "temporary_file", "atomic_replace", "unique_sibling_name"]
