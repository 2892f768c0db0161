"""File I/O primitives.

- descriptors: read/write on caller-owned descriptors, pre-allocation
- content: whole-file and partial reads, writes, copies
- tmpfile: scoped temporary files and atomic replacement
- removal: plain and NFS-safe removal
- metadata: timestamps, close-on-exec, cache directory tags
- sizes: disk usage estimation
"""
from __future__ import annotations

from .content import (
    copy_file,
    read_file,
    read_file_part,
    read_text_file,
    read_text_file_part,
    write_file,
)
from .descriptors import fallocate, read_fd, set_cloexec_flag, write_fd
from .encoding import decode_text, encode_text, has_utf16le_bom
from .metadata import (
    CACHEDIR_TAG_CONTENT,
    CACHEDIR_TAG_NAME,
    create_cachedir_tag,
    set_timestamps,
)
from .removal import remove, remove_nfs_safe
from .sizes import BLOCK_SIZE, likely_size_on_disk
from .tmpfile import TemporaryFile, atomic_replace, temporary_file

__all__ = [
    # descriptors
    "read_fd",
    "write_fd",
    "fallocate",
    "set_cloexec_flag",
    # sizes
    "BLOCK_SIZE",
    "likely_size_on_disk",
    # content
    "read_file",
    "read_text_file",
    "read_file_part",
    "read_text_file_part",
    "write_file",
    "copy_file",
    # encoding
    "decode_text",
    "encode_text",
    "has_utf16le_bom",
    # tmpfile
    "TemporaryFile",
    "temporary_file",
    "atomic_replace",
    # removal
    "remove",
    "remove_nfs_safe",
    # metadata
    "CACHEDIR_TAG_NAME",
    "CACHEDIR_TAG_CONTENT",
    "create_cachedir_tag",
    "set_timestamps",
]
