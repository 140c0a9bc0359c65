from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from shaken import http
from shaken.config import Settings
from shaken.dispatch import Context, Responder
from shaken.messages import ChatMessage


class FakeClock:
    def __init__(self, now: float = 0.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture(autouse=True)
def _no_network(monkeypatch: pytest.MonkeyPatch) -> None:
    async def refuse(url: str, *, body: Any = None, timeout: float = 0.0) -> Any:
        raise AssertionError(f"unexpected HTTP request to {url}")

    monkeypatch.setattr(http, "get_json", refuse)


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        _env_file=None,  # type: ignore[call-arg]
        commands_file=tmp_path / "commands.json",
        generate_timeout_ms=1000,
        delay_lower_ms=0,
        delay_upper_ms=0,
        ignore_chance=0.0,
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


def make_message(
    content: str,
    *,
    sender: str = "test_user",
    channel: str = "#test_channel",
    badges: frozenset[str] = frozenset(),
) -> ChatMessage:
    return ChatMessage(channel=channel, sender=sender, content=content, badges=badges)


def make_context(message: ChatMessage) -> Context[ChatMessage]:
    return Context(args=message, message=message, responder=Responder(message))
