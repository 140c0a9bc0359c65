"""Local console channel: stdin lines in, responses printed out."""

from __future__ import annotations

import asyncio
import sys
from dataclasses import dataclass
from typing import TextIO

from loguru import logger
from rich.console import Console

from shaken.bus import MessageBus
from shaken.channels.base import BaseChannel
from shaken.messages import ChatMessage, Response

QUIT_WORDS = frozenset({"quit", "exit"})


@dataclass(frozen=True)
class ConsoleConfig:
    """Console adapter config."""

    channel: str = "#console"
    sender: str = "console_user"
    badges: frozenset[str] = frozenset()


class ConsoleChannel(BaseChannel):
    """Read one message per line until EOF or ``quit``."""

    name = "console"

    def __init__(
        self,
        bus: MessageBus,
        config: ConsoleConfig,
        *,
        stdin: TextIO | None = None,
        console: Console | None = None,
    ) -> None:
        super().__init__(bus)
        self._config = config
        self._stdin = stdin or sys.stdin
        self._console = console or Console()

    async def start(self) -> None:
        self._running = True
        logger.info("console.channel.start channel={} sender={}", self._config.channel, self._config.sender)
        while self._running:
            line = await asyncio.to_thread(self._stdin.readline)
            if not line:
                break
            text = line.rstrip("\r\n")
            if text.strip().lower() in QUIT_WORDS:
                break
            if not text.strip():
                continue
            await self.publish_inbound(
                ChatMessage(
                    channel=self._config.channel,
                    sender=self._config.sender,
                    content=text,
                    badges=self._config.badges,
                    source=self.name,
                )
            )
        self._running = False
        logger.info("console.channel.stopped")

    async def stop(self) -> None:
        self._running = False

    async def send(self, response: Response) -> None:
        self._console.print(response.channel, response.render(), markup=False, highlight=False)
