"""Shared service-layer helpers for fault isolation.

Expected failures travel as ServiceResult. These helpers exist for the
other kind: exceptions thrown by misbehaving creators, parsers, commands,
or I/O collaborators.
"""

from __future__ import annotations

import errno
import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

T = TypeVar("T")

logger = logging.getLogger(__name__)

_CRITICAL_ERRNOS = frozenset({errno.EACCES, errno.EPERM, errno.ENOMEM})


def safe_execute(
    fn: Callable[[], T],
    *,
    default: T | None = None,
    message: str = "Error during execution",
    log: Any = None,
    level: int = logging.ERROR,
) -> T | None:
    """Call *fn*; on any exception log it and return *default*."""
    try:
        return fn()
    except Exception:
        (log or logger).log(level, message, exc_info=True)
        return default


async def safe_execute_async(
    fn: Callable[[], Awaitable[T]],
    *,
    default: T | None = None,
    message: str = "Error during async execution",
    log: Any = None,
    level: int = logging.ERROR,
) -> T | None:
    """Await *fn()*; on any exception log it and return *default*."""
    try:
        return await fn()
    except Exception:
        (log or logger).log(level, message, exc_info=True)
        return default


def format_error_for_user(exc: BaseException) -> str:
    """One line, message only. Never a traceback."""
    text = str(exc).strip().splitlines()
    return text[0] if text else exc.__class__.__name__


def is_critical_error(exc: BaseException) -> bool:
    """Whether *exc* should end the session instead of being reported.

    Resource exhaustion and permission failures on the underlying streams
    are critical; everything else is reported and the session continues.
    """
    if isinstance(exc, MemoryError):
        return True
    if isinstance(exc, OSError) and exc.errno in _CRITICAL_ERRNOS:
        return True
    if isinstance(exc, PermissionError):
        return True
    text = str(exc)
    return "out of memory" in text.lower() or "EACCES" in text or "EPERM" in text
