"""Removal of non-directory files.

Both functions return ``True`` when a file was removed and ``False`` when
there was nothing to remove. Any other failure re-raises the ``OSError``
from the system call so callers can inspect ``errno``.
"""
from __future__ import annotations

import errno
import logging
import os
import stat

from cachefile.types import PathLike

from .tmpfile import unique_sibling_name

logger = logging.getLogger(__name__)


def _log_failure(enabled: bool, path: str, exc: OSError) -> None:
    if enabled:
        logger.warning("Removal of %s failed: %s", path, exc.strerror)


def remove(path: PathLike, log_failure: bool = True) -> bool:
    """Unlink ``path``.

    Not safe on NFS when other hosts may have the file open; see
    :func:`remove_nfs_safe`.

    Args:
        path: File to remove
        log_failure: Log a warning when removal fails

    Returns:
        True if removed, False if ``path`` did not exist.
    """
    path = os.fspath(path)
    try:
        os.unlink(path)
    except FileNotFoundError:
        return False
    except OSError as exc:
        _log_failure(log_failure, path, exc)
        raise
    logger.debug("Removed %s", path)
    return True


def remove_nfs_safe(path: PathLike, log_failure: bool = True) -> bool:
    """Remove ``path`` by renaming it aside and unlinking the new name.

    The rename is atomic on NFS, so ``path`` disappears in one step. If the
    renamed file cannot be unlinked (an NFS client may turn the unlink of an
    open file into a hidden ``.nfsXXXX`` file, or report it busy), the
    removal still counts as done because ``path`` is gone.

    Returns:
        True if removed, False if ``path`` did not exist.

    Raises:
        IsADirectoryError: If ``path`` is a directory.
        OSError: If ``path`` could not be renamed away.
    """
    path = os.fspath(path)
    try:
        st = os.lstat(path)
    except FileNotFoundError:
        return False
    except OSError as exc:
        _log_failure(log_failure, path, exc)
        raise
    if stat.S_ISDIR(st.st_mode):
        exc = IsADirectoryError(errno.EISDIR, os.strerror(errno.EISDIR), path)
        _log_failure(log_failure, path, exc)
        raise exc

    tmp_path = unique_sibling_name(path, ".remove")
    try:
        os.rename(path, tmp_path)
    except FileNotFoundError:
        # Removed by someone else in the meantime.
        return False
    except OSError as exc:
        _log_failure(log_failure, path, exc)
        raise

    try:
        os.unlink(tmp_path)
    except FileNotFoundError:
        pass
    except OSError as exc:
        if log_failure:
            logger.warning(
                "Removed %s but could not delete %s: %s", path, tmp_path, exc.strerror
            )
        return True
    logger.debug("Removed %s via %s", path, tmp_path)
    return True


__all__ = ["remove", "remove_nfs_safe"]
