"""Chatter from the text generation service."""

from __future__ import annotations

import asyncio
import random
from collections.abc import Callable

import requests
from loguru import logger

from shaken import http
from shaken.config import Settings
from shaken.dispatch import CommandArgs, Context
from shaken.messages import ChatMessage
from shaken.modules import Components

MAX_WORDS = 45
IGNORED_CONTEXT_PREFIXES = ("http", "!", ".")


def filtered_context(word: str) -> bool:
    return not word.startswith(IGNORED_CONTEXT_PREFIXES)


def fixup_response(response: str) -> str:
    return "~ " + response


class Speak:
    """Talks on ``!speak``, when mentioned, and now and then on its own."""

    def __init__(
        self,
        settings: Settings,
        *,
        clock: Callable[[], float],
        rng: random.Random | None = None,
    ) -> None:
        self.settings = settings
        self.generate_url = f"{settings.generate_host.rstrip('/')}/generate"
        self.clock = clock
        self.rng = rng or random.Random()
        self.last: float | None = None
        self._lock = asyncio.Lock()

    async def speak(self, ctx: Context[CommandArgs]) -> None:
        try:
            response = await self.fetch_response(None)
        except requests.RequestException:
            logger.exception("speak.fetch.error url={}", self.generate_url)
            return
        ctx.say(fixup_response(response))

    async def handle(self, ctx: Context[ChatMessage]) -> None:
        message = ctx.message
        if message.sender == self.settings.identity:
            return
        if message.is_mentioned(self.settings.identity):
            response = await self.fetch_response(None)
            ctx.say(fixup_response(response))
            return
        if message.content.startswith(self.settings.leader):
            return

        response = await self.generate(message.content)
        if response is not None:
            ctx.say(response)

    async def generate(self, context: str) -> str | None:
        async with self._lock:
            if self.last is not None:
                elapsed_ms = (self.clock() - self.last) * 1000
                if elapsed_ms < self.settings.generate_timeout_ms:
                    return None
                if self.rng.random() <= self.settings.ignore_chance:
                    return None
            # claim the slot before the request so concurrent messages back off
            self.last = self.clock()

        response = fixup_response(await self.fetch_response(self.choose_context(context)))
        await asyncio.sleep(self.random_delay())
        self.last = self.clock()
        logger.debug("speak.generated response={!r}", response)
        return response

    def random_delay(self) -> float:
        lower_ms = self.settings.delay_lower_ms
        upper_ms = self.settings.delay_upper_ms
        if upper_ms <= lower_ms:
            return lower_ms / 1000
        ceiling = self.rng.randint(max(lower_ms, upper_ms // 10), upper_ms)
        return self.rng.randint(lower_ms, ceiling) / 1000

    def choose_context(self, context: str) -> str | None:
        choices = [word for word in context.split() if filtered_context(word)]
        if not choices:
            return None
        return self.rng.choice(choices)

    async def fetch_response(self, context: str | None) -> str:
        body = {"min": self.rng.randint(1, 3), "max": MAX_WORDS, "context": context}
        payload = await http.get_json(self.generate_url, body=body, timeout=self.settings.http_timeout_seconds)
        return str(payload["data"])


def initialize(components: Components) -> None:
    speak = Speak(components.settings, clock=components.clock)
    components.commands.command(f"{components.settings.leader}speak", speak.speak)
    components.passives.add(speak.handle)
