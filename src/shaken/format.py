"""Formatting helpers for chat output."""

from __future__ import annotations

_UNITS: tuple[tuple[str, int], ...] = (
    ("days", 86400),
    ("hours", 3600),
    ("minutes", 60),
    ("seconds", 1),
)


def relative_time(seconds: float) -> str:
    """Format a duration in words, e.g. ``1 hour, 2 minutes and 1 second``."""
    remaining = int(seconds)
    parts: list[str] = []
    for name, size in _UNITS:
        count, remaining = divmod(remaining, size)
        if count > 0:
            parts.append(f"{count} {name if count > 1 else name[:-1]}")

    if len(parts) > 1:
        return ", ".join(parts[:-1]) + " and " + parts[-1]
    return "".join(parts)


def shrink_string(text: str, limit: int) -> str:
    """Cut ``text`` to fewer than ``limit`` characters when it is longer."""
    if len(text) <= limit:
        return text
    return text[: max(limit - 1, 0)]
