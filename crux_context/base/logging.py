"""Structured logging for the context pipeline.

Every module logs through a child of the shared ``context`` logger. That
logger owns one stderr handler (JSON by default) and, optionally, one rotating
file handler installed by :func:`configure_logger`. ``CONTEXT_LOG_LEVEL``
overrides the level requested in code.

Events are emitted with :func:`log_event` as one JSON object per line::

    {"event": "trim.removal_pass", "removed": 4, "kept": 9, "target": 6000, ...}
"""
from __future__ import annotations

import contextlib
import json
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Any, List, Optional

from .log_support import JsonFormatter, LogContext


BASE_LOGGER_NAME = "context"
LEVEL_ENV_VAR = "CONTEXT_LOG_LEVEL"
LOG_FILE_MAX_BYTES = 10 * 1024 * 1024
LOG_FILE_BACKUPS = 5

_PLAIN_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
_ROLE_ATTR = "_context_handler_role"


def _resolve_level(value: int | str | None, default: int) -> int:
    """Turn a level name or number into a numeric level; unknown names give ``default``."""
    if value is None or value == "":
        return default
    if isinstance(value, int):
        return value
    resolved = logging.getLevelName(value.strip().upper())
    return resolved if isinstance(resolved, int) else default


def _formatter(json_mode: bool) -> logging.Formatter:
    return JsonFormatter() if json_mode else logging.Formatter(_PLAIN_FORMAT)


def _handlers(logger: logging.Logger, role: str) -> List[logging.Handler]:
    return [h for h in logger.handlers if getattr(h, _ROLE_ATTR, None) == role]


def _apply_level(logger: logging.Logger, level: int) -> None:
    logger.setLevel(level)
    for handler in logger.handlers:
        handler.setLevel(level)


def _base_logger(json_mode: bool, level: int) -> logging.Logger:
    """Return the shared ``context`` logger, installing its console handler once.

    On later calls the console handler is pointed at the current
    ``sys.stderr`` (test runners swap it between tests) and the environment
    level is re-applied.
    """
    logger = logging.getLogger(BASE_LOGGER_NAME)
    wanted = _resolve_level(os.getenv(LEVEL_ENV_VAR), level)
    console = _handlers(logger, "console")
    if console:
        for handler in console:
            if isinstance(handler, logging.StreamHandler):
                handler.setStream(sys.stderr)
    else:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(_formatter(json_mode))
        setattr(handler, _ROLE_ATTR, "console")
        logger.handlers[:] = [handler]
        logger.propagate = False
    _apply_level(logger, wanted)
    return logger


def get_logger(name: str = BASE_LOGGER_NAME, json_mode: bool = True, level: int = logging.INFO) -> logging.Logger:
    """Return ``context.<name>``, a child of the shared pipeline logger.

    ``get_logger("trimmer")`` and ``get_logger("context.trimmer")`` return the
    same logger; ``get_logger()`` returns the shared logger itself.
    """
    base = _base_logger(json_mode=json_mode, level=level)
    if name == BASE_LOGGER_NAME:
        return base
    prefix = f"{BASE_LOGGER_NAME}."
    child = logging.getLogger(name if name.startswith(prefix) else prefix + name)
    child.setLevel(logging.NOTSET)
    child.propagate = True
    return child


def _drop_file_handlers(logger: logging.Logger, keep: Optional[str] = None) -> Optional[logging.Handler]:
    kept = None
    for handler in _handlers(logger, "file"):
        if keep is not None and getattr(handler, "baseFilename", None) == keep:
            kept = handler
            continue
        logger.removeHandler(handler)
        handler.close()
    return kept


def configure_logger(
    *,
    level: int | str | None = None,
    file_path: Optional[str] = None,
    json_mode: bool = True,
) -> logging.Logger:
    """Adjust the shared logger at runtime.

    Args:
        level: New level, by number or name. ``None`` leaves it unchanged.
        file_path: Attach a rotating log file at this path, replacing any file
            handler added earlier. ``None`` removes the file handler.
        json_mode: Formatter for the file handler.

    Returns:
        The shared ``context`` logger.
    """
    logger = _base_logger(json_mode=json_mode, level=logging.INFO)
    if level is not None:
        _apply_level(logger, _resolve_level(level, logger.level))

    if file_path is None:
        _drop_file_handlers(logger)
        return logger

    path = os.path.abspath(os.path.expanduser(file_path))
    handler = _drop_file_handlers(logger, keep=path)
    if handler is None:
        with contextlib.suppress(OSError):
            os.makedirs(os.path.dirname(path), exist_ok=True)
        handler = RotatingFileHandler(
            path, maxBytes=LOG_FILE_MAX_BYTES, backupCount=LOG_FILE_BACKUPS, encoding="utf-8"
        )
        setattr(handler, _ROLE_ATTR, "file")
        logger.addHandler(handler)
    handler.setFormatter(_formatter(json_mode))
    handler.setLevel(logger.level)
    return logger


def log_event(
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    *,
    level: int = logging.INFO,
    **fields: Any,
) -> None:
    """Log ``event`` as a JSON object.

    The payload is ``{"event": event}`` merged with ``ctx`` and ``fields``;
    fields whose value is ``None`` are left out.
    """
    if not logger.isEnabledFor(level):
        return
    payload: dict[str, Any] = {"event": event}
    if ctx is not None:
        payload.update(ctx.to_dict())
    payload.update((k, v) for k, v in fields.items() if v is not None)
    logger.log(level, json.dumps(payload, ensure_ascii=False, default=str))


__all__ = [
    "BASE_LOGGER_NAME",
    "LogContext",
    "get_logger",
    "configure_logger",
    "log_event",
]
