from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

PACKAGE_LOGGER = "cachefile"

_CONFIGURED_LOG_PATH: Optional[str] = None
_FILE_HANDLER: Optional[logging.Handler] = None


def _level_from_name(name: str) -> int:
    level = logging.getLevelName(str(name).upper())
    return level if isinstance(level, int) else logging.INFO


def configure_stdlib_logging(*, log_path: Path, level: str = "INFO") -> None:
    """Send cachefile log records to ``log_path``.

    Idempotent per-process: if already configured for the same file, only the
    level is updated. Switching paths replaces the previously installed
    handler. The parent directory of ``log_path`` must exist.
    """
    global _CONFIGURED_LOG_PATH, _FILE_HANDLER

    resolved = str(Path(log_path).resolve())
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(_level_from_name(level))

    if _CONFIGURED_LOG_PATH == resolved and _FILE_HANDLER is not None:
        _FILE_HANDLER.setLevel(_level_from_name(level))
        return

    if _FILE_HANDLER is not None:
        logger.removeHandler(_FILE_HANDLER)
        _FILE_HANDLER.close()
        _FILE_HANDLER = None

    fh = logging.FileHandler(resolved, encoding="utf-8")
    fh.setLevel(_level_from_name(level))
    fh.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    logger.addHandler(fh)

    _FILE_HANDLER = fh
    _CONFIGURED_LOG_PATH = resolved


def configure_from_config(user_dir: Optional[Path] = None) -> Optional[Path]:
    """Apply the ``logging`` config section.

    Returns:
        The log file in use, or None when ``logging.path`` is empty.
    """
    from cachefile.config import LoggingConfig

    cfg = LoggingConfig(user_dir=user_dir)
    if cfg.path is None:
        return None
    configure_stdlib_logging(log_path=cfg.path, level=cfg.level)
    return cfg.path


def reset_stdlib_logging_for_tests() -> None:
    """Test-only: remove the installed handler and reset the level."""
    global _CONFIGURED_LOG_PATH, _FILE_HANDLER
    logger = logging.getLogger(PACKAGE_LOGGER)
    if _FILE_HANDLER is not None:
        logger.removeHandler(_FILE_HANDLER)
        _FILE_HANDLER.close()
    logger.setLevel(logging.NOTSET)
    _CONFIGURED_LOG_PATH = None
    _FILE_HANDLER = None


__all__ = ["configure_stdlib_logging", "configure_from_config", "reset_stdlib_logging_for_tests"]
