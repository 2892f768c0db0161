"""cachefile: file I/O primitives for build caches.

Atomic and hard-link-breaking writes, NFS-safe removal, streaming and partial
reads, descriptor-level I/O, pre-allocation, disk usage estimation and
timestamp handling.
"""
from __future__ import annotations

import logging

from .errors import CacheFileError, ConfigError, FileIOError, SchemaValidationError
from .io import (
    BLOCK_SIZE,
    CACHEDIR_TAG_CONTENT,
    TemporaryFile,
    atomic_replace,
    copy_file,
    create_cachedir_tag,
    fallocate,
    likely_size_on_disk,
    read_fd,
    read_file,
    read_file_part,
    read_text_file,
    read_text_file_part,
    remove,
    remove_nfs_safe,
    set_cloexec_flag,
    set_timestamps,
    temporary_file,
    write_fd,
    write_file,
)
from .types import DataReceiver, PathLike, TimeLike

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # errors
    "CacheFileError",
    "ConfigError",
    "FileIOError",
    "SchemaValidationError",
    # types
    "DataReceiver",
    "PathLike",
    "TimeLike",
    # io
    "BLOCK_SIZE",
    "CACHEDIR_TAG_CONTENT",
    "TemporaryFile",
    "atomic_replace",
    "copy_file",
    "create_cachedir_tag",
    "fallocate",
    "likely_size_on_disk",
    "read_fd",
    "read_file",
    "read_file_part",
    "read_text_file",
    "read_text_file_part",
    "remove",
    "remove_nfs_safe",
    "set_cloexec_flag",
    "set_timestamps",
    "temporary_file",
    "write_fd",
    "write_file",
]
