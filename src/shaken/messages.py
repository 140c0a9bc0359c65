"""Chat message models."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Literal

ELEVATED_BADGES = frozenset({"broadcaster", "moderator", "vip"})


@dataclass(frozen=True)
class ChatMessage:
    """Message received from a channel."""

    channel: str
    sender: str
    content: str
    badges: frozenset[str] = frozenset()
    source: str = "console"
    message_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))

    @property
    def is_elevated(self) -> bool:
        return bool(self.badges & ELEVATED_BADGES)

    def is_mentioned(self, identity: str) -> bool:
        needle = f"@{identity}".lower()
        return any(word.lower().rstrip(",.:!?") == needle for word in self.content.split())


@dataclass(frozen=True)
class Response:
    """Text to be delivered back to a channel.

    A ``reply`` answers a specific message and names its sender; a ``say`` is
    sent to the channel as-is.
    """

    kind: Literal["say", "reply"]
    channel: str
    content: str
    reply_to: str | None = None
    recipient: str | None = None
    source: str = "console"

    def render(self) -> str:
        if self.kind == "reply" and self.recipient:
            return f"@{self.recipient} {self.content}"
        return self.content
