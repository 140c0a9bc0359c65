"""Channel manager."""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Iterable

from loguru import logger

from shaken.bot import Bot
from shaken.bus import MessageBus
from shaken.channels.base import BaseChannel
from shaken.messages import ChatMessage


class ChannelManager:
    """Run the adapters and feed their messages through the bot.

    Each adapter is routed on the bus under its ``name``, so responses find
    their way back to the adapter whose message produced them.
    """

    def __init__(self, bus: MessageBus, bot: Bot) -> None:
        self.bus = bus
        self.bot = bot
        self._channels: dict[str, BaseChannel] = {}
        self._tasks: list[asyncio.Task[None]] = []
        self._unsubscribe: list[Callable[[], None]] = []

    def register(self, channel: BaseChannel) -> None:
        self._channels[channel.name] = channel

    @property
    def channels(self) -> dict[str, BaseChannel]:
        return dict(self._channels)

    def enabled_channels(self) -> Iterable[str]:
        return self._channels.keys()

    async def start(self) -> None:
        logger.info("channel.manager.start channels={}", ",".join(self.enabled_channels()))
        self._unsubscribe.append(self.bus.on_message(self._process_inbound))
        for name, channel in self._channels.items():
            self._unsubscribe.append(self.bus.route(name, channel.send))
            self._tasks.append(asyncio.create_task(channel.start()))

    async def wait(self) -> None:
        await asyncio.gather(*self._tasks)

    async def stop(self) -> None:
        for channel in self._channels.values():
            await channel.stop()
        for task in self._tasks:
            task.cancel()
        for task in self._tasks:
            try:
                await task
            except asyncio.CancelledError:
                continue
        self._tasks.clear()
        while self._unsubscribe:
            self._unsubscribe.pop()()

    async def _process_inbound(self, message: ChatMessage) -> None:
        try:
            responses = await self.bot.handle(message)
        except Exception:
            logger.exception("channel.inbound.error channel={}", message.channel)
            return
        for response in responses:
            await self.bus.publish_outbound(response)
