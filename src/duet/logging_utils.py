"""Runtime logging helpers."""

from __future__ import annotations

import contextlib
import os
import sys
from logging import Handler
from typing import Literal, TextIO

from loguru import logger
from rich import get_console
from rich.logging import RichHandler

LogProfile = Literal["default", "chat"]

# loguru installs this stderr sink on import.
_STOCK_SINK_ID = 0
_PROFILE_FORMATS: dict[LogProfile, str] = {
    "chat": "{message}",
    "default": "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level:<6} | {name}:{function}:{line} | {message}",
}
_sink_id: int | None = None
_configured: tuple[LogProfile, str] | None = None


def _build_sink(profile: LogProfile) -> Handler | TextIO:
    if profile == "chat":
        return RichHandler(
            console=get_console(),
            show_level=True,
            show_time=False,
            show_path=False,
            markup=False,
            rich_tracebacks=False,
        )
    return sys.stderr


def configure_logging(*, profile: LogProfile = "default", level: str | None = None) -> None:
    """Install the duet log sink for ``profile``.

    Calling again with the same profile and level does nothing. Otherwise the sink
    from the previous call is swapped out; sinks added by an embedding application
    are left alone.
    """
    global _sink_id, _configured

    resolved_level = (level or os.getenv("DUET_LOG_LEVEL", "INFO")).upper()
    if _configured == (profile, resolved_level):
        return

    if _sink_id is None:
        with contextlib.suppress(ValueError):
            logger.remove(_STOCK_SINK_ID)
    else:
        logger.remove(_sink_id)
    _sink_id = logger.add(
        _build_sink(profile),
        level=resolved_level,
        format=_PROFILE_FORMATS[profile],
        backtrace=False,
        diagnose=False,
    )
    _configured = (profile, resolved_level)
    logger.debug("logging.configure profile={} level={}", profile, resolved_level)
