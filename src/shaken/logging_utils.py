"""Runtime logging helpers.

Every record carries ``extra["channel"]``: the chat channel of the message
being handled by the current task, or ``-`` outside of one.
"""

from __future__ import annotations

import os
import sys
from contextvars import ContextVar
from logging import Handler
from typing import Literal, TextIO

import loguru
from loguru import logger
from rich import get_console
from rich.logging import RichHandler

LogProfile = Literal["default", "chat"]

_PROFILE_FORMATS: dict[LogProfile, str] = {
    # RichHandler renders the level itself
    "chat": "{extra[channel]} | {message}",
    "default": "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level:<6} | {name}:{function}:{line} | {extra[channel]} | {message}",
}
_CONFIGURED_PROFILE: LogProfile | None = None

_current_channel: ContextVar[str] = ContextVar("shaken_channel", default="-")


def current_channel() -> str:
    return _current_channel.get()


def bind_channel(channel: str) -> None:
    """Tag log records emitted by the current task with ``channel``."""
    _current_channel.set(channel)


def _inject_channel(record: loguru.Record) -> None:
    record["extra"]["channel"] = current_channel()


def _sink_for(profile: LogProfile) -> Handler | TextIO:
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
    """Configure process-level logging once.

    ``level`` falls back to ``SHAKEN_LOG_LEVEL`` and then ``INFO``.
    """
    global _CONFIGURED_PROFILE
    if profile == _CONFIGURED_PROFILE:
        return

    logger.remove()
    logger.add(
        _sink_for(profile),
        level=(level or os.getenv("SHAKEN_LOG_LEVEL", "INFO")).upper(),
        format=_PROFILE_FORMATS[profile],
        backtrace=False,
        diagnose=False,
    )
    logger.configure(patcher=_inject_channel)
    _CONFIGURED_PROFILE = profile
