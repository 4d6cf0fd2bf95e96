from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

_CONFIGURED_ATTR = "_contentpath_logging_configured"
_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
_PACKAGE_LOGGER = "contentpath"


def _level(value: int | str) -> int:
    if isinstance(value, int):
        return value
    resolved = logging.getLevelName(value.strip().upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def configure_contentpath_logging(
    log_file: Path | None = None,
    *,
    level: int | str = logging.INFO,
    max_bytes: int = 5 * 1024 * 1024,
    backup_count: int = 5,
) -> logging.Logger:
    """Attach handlers to the ``contentpath`` logger once per process.

    Only the package logger is touched so host applications keep control of
    the root logger. Without ``log_file`` records go to stderr only.
    """
    package_logger = logging.getLogger(_PACKAGE_LOGGER)
    if getattr(package_logger, _CONFIGURED_ATTR, False):
        return package_logger

    formatter = logging.Formatter(_LOG_FORMAT)
    handlers: list[logging.Handler] = [logging.StreamHandler(stream=sys.stderr)]

    if log_file is not None:
        try:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            handlers.append(
                RotatingFileHandler(
                    log_file,
                    maxBytes=max_bytes,
                    backupCount=backup_count,
                    encoding="utf-8",
                )
            )
        except OSError as exc:
            sys.stderr.write(f"Failed to open contentpath log file at {log_file}: {exc}\n")

    package_logger.setLevel(_level(level))
    for handler in handlers:
        handler.setFormatter(formatter)
        package_logger.addHandler(handler)

    setattr(package_logger, _CONFIGURED_ATTR, True)
    return package_logger


def reset_contentpath_logging() -> None:
    package_logger = logging.getLogger(_PACKAGE_LOGGER)
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()
    package_logger.setLevel(logging.NOTSET)
    if hasattr(package_logger, _CONFIGURED_ATTR):
        delattr(package_logger, _CONFIGURED_ATTR)


__all__ = ["configure_contentpath_logging", "reset_contentpath_logging"]
