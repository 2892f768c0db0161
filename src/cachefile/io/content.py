"""Whole-file and partial reads, writes, and copies.

Binary and text reads are separate functions. Text reads transcode content
that starts with a UTF-16LE byte-order mark; writes never transcode.
"""
from __future__ import annotations

import logging
import os
from typing import Union

from cachefile.errors import FileIOError
from cachefile.types import PathLike

from .descriptors import BytesLike, read_fd, write_fd
from .encoding import decode_text, encode_text
from .tmpfile import atomic_replace

logger = logging.getLogger(__name__)

_O_BINARY = getattr(os, "O_BINARY", 0)
_MIN_READ_BUFFER = 1024


def _read_all(path: PathLike, size_hint: int) -> bytes:
    if size_hint < 0:
        raise ValueError(f"size_hint must not be negative (got {size_hint})")

    try:
        with open(path, "rb", buffering=0) as f:
            if size_hint == 0:
                size_hint = os.fstat(f.fileno()).st_size
            buf = bytearray(max(size_hint, _MIN_READ_BUFFER))
            pos = 0
            while True:
                if pos == len(buf):
                    buf.extend(bytes(len(buf)))
                with memoryview(buf) as view, view[pos:] as tail:
                    n = f.readinto(tail)
                if not n:
                    break
                pos += n
    except OSError as exc:
        raise FileIOError.from_os_error(f"Failed to read {os.fspath(path)}", exc, path=path) from exc

    del buf[pos:]
    return bytes(buf)


def _read_part(path: PathLike, pos: int, count: int) -> bytes:
    if pos < 0 or count < 0:
        raise ValueError(f"pos and count must not be negative (got {pos}, {count})")
    if count == 0:
        return b""

    chunks = []
    remaining = count
    try:
        with open(path, "rb", buffering=0) as f:
            size = os.fstat(f.fileno()).st_size
            if pos > size:
                return b""
            if pos:
                f.seek(pos)
            # Cap each read so a huge count does not allocate up front.
            chunk_size = max(size - pos, _MIN_READ_BUFFER)
            while remaining > 0:
                chunk = f.read(min(remaining, chunk_size))
                if not chunk:
                    break
                chunks.append(chunk)
                remaining -= len(chunk)
    except OSError as exc:
        logger.debug("Failed to read %s: %s", os.fspath(path), exc.strerror)
        raise FileIOError.from_os_error(
            f"Failed to read {count} bytes at offset {pos} from {os.fspath(path)}",
            exc,
            path=path,
        ) from exc
    return b"".join(chunks)


def read_file(path: PathLike, size_hint: int = 0) -> bytes:
    """Return the binary content of ``path``.

    Args:
        path: File to read
        size_hint: Expected size in bytes; 0 means stat the file. The hint
            only sizes the initial buffer, the bytes actually read govern
            the result.

    Raises:
        FileIOError: If the file cannot be opened or read.
    """
    return _read_all(path, size_hint)


def read_text_file(path: PathLike, size_hint: int = 0) -> str:
    """Return the text content of ``path``.

    Content starting with a UTF-16LE BOM is transcoded; see
    :func:`cachefile.io.encoding.decode_text`.
    """
    return decode_text(_read_all(path, size_hint))


def read_file_part(path: PathLike, pos: int, count: int) -> bytes:
    """Return at most ``count`` bytes of ``path`` starting at ``pos``.

    Reaching end of file early is not an error; a ``pos`` at or past the end
    gives ``b""``.

    Raises:
        FileIOError: If the file cannot be opened, seeked or read.
    """
    return _read_part(path, pos, count)


def read_text_file_part(path: PathLike, pos: int, count: int) -> str:
    """Text variant of :func:`read_file_part`.

    BOM detection applies to the slice that was read, not to the file.
    """
    return decode_text(_read_part(path, pos, count))


def _write_all(fd: int, payload: BytesLike, path: PathLike) -> None:
    try:
        write_fd(fd, payload)
    except FileIOError as exc:
        raise FileIOError(
            f"Failed to write {os.fspath(path)}: {exc.reason}", path=path, errno=exc.errno
        ) from exc


def write_file(path: PathLike, data: Union[str, BytesLike], in_place: bool = False) -> None:
    """Write ``data`` to ``path``.

    ``str`` data is encoded with the configured text encoding.

    With ``in_place=False`` (default) the content goes to a temporary file
    that is then renamed over ``path``. Other hard links to the old file keep
    the old content, and ``path`` never holds partial content.

    With ``in_place=True`` the existing file is truncated and overwritten,
    keeping its inode, hard links and extended attributes. A failure part way
    through can leave it partially written.

    Raises:
        FileIOError: If the file cannot be created, written or renamed.
    """
    payload = encode_text(data) if isinstance(data, str) else data

    if not in_place:
        with atomic_replace(path) as fd:
            _write_all(fd, payload, path)
        return

    try:
        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC | _O_BINARY, 0o666)
    except OSError as exc:
        raise FileIOError.from_os_error(
            f"Failed to open {os.fspath(path)} for writing", exc, path=path
        ) from exc
    try:
        _write_all(fd, payload, path)
    finally:
        os.close(fd)


def _copy_fd(src_fd: int, dest_fd: int, src: PathLike, dest: PathLike) -> None:
    try:
        read_fd(src_fd, lambda chunk: write_fd(dest_fd, chunk))
    except FileIOError as exc:
        raise FileIOError(
            f"Failed to copy {os.fspath(src)} to {os.fspath(dest)}: {exc.reason}",
            path=dest,
            errno=exc.errno,
        ) from exc


def copy_file(src: PathLike, dest: PathLike, via_tmp_file: bool = False) -> None:
    """Copy the content of ``src`` to ``dest``.

    By default an existing ``dest`` is unlinked (breaking hard links) and the
    new file is written directly. With ``via_tmp_file=True`` the copy is
    written to a temporary file next to ``dest`` and renamed into place, so
    concurrent readers of ``dest`` never observe a partial copy.

    Raises:
        FileIOError: If ``src`` cannot be read, an existing ``dest`` cannot be
            unlinked, or ``dest`` cannot be written or renamed. No temporary
            file is left behind.
    """
    try:
        src_file = open(src, "rb", buffering=0)
    except OSError as exc:
        raise FileIOError.from_os_error(
            f"Failed to open {os.fspath(src)} for reading", exc, path=src
        ) from exc

    with src_file:
        if via_tmp_file:
            with atomic_replace(dest) as dest_fd:
                _copy_fd(src_file.fileno(), dest_fd, src, dest)
            return

        _unlink_existing(dest)
        try:
            dest_fd = os.open(dest, os.O_WRONLY | os.O_CREAT | os.O_TRUNC | _O_BINARY, 0o666)
        except OSError as exc:
            raise FileIOError.from_os_error(
                f"Failed to open {os.fspath(dest)} for writing", exc, path=dest
            ) from exc
        try:
            _copy_fd(src_file.fileno(), dest_fd, src, dest)
        finally:
            os.close(dest_fd)


def _unlink_existing(path: PathLike) -> None:
    try:
        os.unlink(path)
    except FileNotFoundError:
        pass
    except OSError as exc:
        raise FileIOError.from_os_error(
            f"Failed to unlink {os.fspath(path)} before writing", exc, path=path
        ) from exc


__all__ = [
    "read_file",
    "read_text_file",
    "read_file_part",
    "read_text_file_part",
    "write_file",
    "copy_file",
]
