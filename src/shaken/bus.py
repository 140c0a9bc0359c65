"""Signal-based message bus.

Inbound chat messages fan out to every subscriber. Responses are routed back
to the adapter named by ``Response.source``: each adapter subscribes under its
own name, and blinker delivers a response only to receivers connected for that
sender.
"""

from __future__ import annotations

from collections.abc import Callable, Coroutine
from typing import Any

from blinker import ANY, Signal
from loguru import logger

from shaken.messages import ChatMessage, Response

MessageHandler = Callable[[ChatMessage], Coroutine[Any, Any, None]]
DeliveryHandler = Callable[[Response], Coroutine[Any, Any, None]]


class MessageBus:
    def __init__(self) -> None:
        self._messages = Signal("shaken.messages")
        self._deliveries = Signal("shaken.deliveries")

    async def publish_inbound(self, message: ChatMessage) -> None:
        await self._messages.send_async(message.source, message=message)

    async def publish_outbound(self, response: Response) -> bool:
        """Deliver ``response`` to the adapter it came from.

        Returns:
            False when no adapter is routed under ``response.source``.
        """
        delivered = await self._deliveries.send_async(response.source, response=response)
        if not delivered:
            logger.warning("bus.outbound.unrouted source={} channel={}", response.source, response.channel)
            return False
        return True

    def on_message(self, handler: MessageHandler) -> Callable[[], None]:
        """Receive every inbound message, whatever adapter it came from."""

        async def _receiver(source: Any, *, message: ChatMessage) -> None:
            await handler(message)

        self._messages.connect(_receiver, sender=ANY, weak=False)
        return lambda: self._messages.disconnect(_receiver)

    def route(self, source: str, handler: DeliveryHandler) -> Callable[[], None]:
        """Send responses whose ``source`` is ``source`` to ``handler``."""

        async def _receiver(sender: Any, *, response: Response) -> None:
            await handler(response)

        self._deliveries.connect(_receiver, sender=source, weak=False)
        return lambda: self._deliveries.disconnect(_receiver, sender=source)
