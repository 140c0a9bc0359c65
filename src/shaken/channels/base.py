"""Base channel interface."""

from __future__ import annotations

from abc import ABC, abstractmethod

from shaken.bus import MessageBus
from shaken.messages import ChatMessage, Response


class BaseChannel(ABC):
    """Abstract base class for channel adapters."""

    name: str = "base"

    def __init__(self, bus: MessageBus) -> None:
        self.bus = bus
        self._running = False

    @property
    def is_running(self) -> bool:
        return self._running

    @abstractmethod
    async def start(self) -> None:
        """Start receiving messages and publishing them to the bus."""

    @abstractmethod
    async def stop(self) -> None:
        """Stop receiving messages."""

    @abstractmethod
    async def send(self, response: Response) -> None:
        """Deliver one response."""

    async def publish_inbound(self, message: ChatMessage) -> None:
        await self.bus.publish_inbound(message)
