"""The bot: registered commands plus passive handlers."""

from __future__ import annotations

import asyncio
import time
from collections.abc import Callable

from loguru import logger

from shaken.config import Settings
from shaken.dispatch import CommandDispatch, Context, Passives, Responder
from shaken.logging_utils import bind_channel
from shaken.messages import ChatMessage, Response
from shaken.modules import Components, initialize_modules
from shaken.store import ResponseStore


class Bot:
    """Routes one chat message through the commands and passives."""

    def __init__(
        self,
        settings: Settings,
        *,
        store: ResponseStore | None = None,
        clock: Callable[[], float] = time.monotonic,
        load_modules: bool = True,
    ) -> None:
        self.settings = settings
        self.commands = CommandDispatch(settings.leader)
        self.passives = Passives()
        self.store = store or ResponseStore(settings.commands_file)
        if load_modules:
            initialize_modules(
                Components(
                    settings=settings,
                    commands=self.commands,
                    passives=self.passives,
                    store=self.store,
                    clock=clock,
                )
            )
        logger.info(
            "bot.ready identity={} commands={} passives={}",
            settings.identity,
            len(self.commands.schemas()),
            len(self.passives),
        )

    async def handle(self, message: ChatMessage) -> list[Response]:
        """Handle one message and return the responses it produced."""
        bind_channel(message.channel)
        responder = Responder(message)
        ctx = Context(args=message, message=message, responder=responder)
        await asyncio.gather(self.commands.dispatch(ctx), self.passives.run(ctx))
        return responder.responses
