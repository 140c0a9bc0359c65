"""Command dispatch and passive handlers."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Generic, TypeVar

from loguru import logger

from shaken.core import DEFAULT_LEADER, CommandSchema, Matched, MissingRequired, build_schema
from shaken.errors import DuplicateCommandError
from shaken.messages import ChatMessage, Response

NOT_ALLOWED = "you cannot do that"

T = TypeVar("T")


@dataclass
class Responder:
    """Collects the responses produced while handling one message."""

    message: ChatMessage
    responses: list[Response] = field(default_factory=list)

    def say(self, text: str) -> None:
        content = text.strip()
        if not content:
            return
        logger.debug("respond.say channel={} content={!r}", self.message.channel, content)
        self.responses.append(
            Response(kind="say", channel=self.message.channel, content=content, source=self.message.source)
        )

    def reply(self, text: str) -> None:
        content = text.strip()
        if not content:
            return
        logger.debug("respond.reply channel={} content={!r}", self.message.channel, content)
        self.responses.append(
            Response(
                kind="reply",
                channel=self.message.channel,
                content=content,
                reply_to=self.message.message_id,
                recipient=self.message.sender,
                source=self.message.source,
            )
        )


@dataclass(frozen=True)
class Context(Generic[T]):
    """What a handler is given: its arguments, the message and a responder."""

    args: T
    message: ChatMessage
    responder: Responder

    @property
    def channel(self) -> str:
        return self.message.channel

    def say(self, text: str) -> None:
        self.responder.say(text)

    def reply(self, text: str) -> None:
        self.responder.reply(text)


@dataclass(frozen=True)
class CommandArgs:
    """Arguments bound for one matched command."""

    schema: CommandSchema
    mapping: dict[str, str] = field(default_factory=dict)

    def __getitem__(self, key: str) -> str:
        return self.mapping[key]

    def __contains__(self, key: object) -> bool:
        return key in self.mapping

    def get(self, key: str, default: str | None = None) -> str | None:
        return self.mapping.get(key, default)

    def get_non_empty(self, key: str) -> str | None:
        value = self.mapping.get(key)
        return value if value else None


CommandHandler = Callable[[Context[CommandArgs]], Awaitable[None]]
PassiveHandler = Callable[[Context[ChatMessage]], Awaitable[None]]


class CommandDispatch:
    """Registry mapping command schemas to their handlers."""

    def __init__(self, leader: str = DEFAULT_LEADER) -> None:
        self.leader = leader
        self._commands: dict[CommandSchema, CommandHandler] = {}

    def add(self, schema: CommandSchema, handler: CommandHandler) -> CommandSchema:
        for existing in self._commands:
            if existing.name == schema.name:
                raise DuplicateCommandError(f"command already registered: {schema.name}")
        self._commands[schema] = handler
        logger.debug("dispatch.register name={} elevated={}", schema.name, schema.requires_elevated_privilege)
        return schema

    def command(self, help_text: str, handler: CommandHandler) -> CommandSchema:
        return self.add(build_schema(help_text, self.leader), handler)

    def elevated(self, help_text: str, handler: CommandHandler) -> CommandSchema:
        return self.add(build_schema(help_text, self.leader, elevated=True), handler)

    def schemas(self) -> list[CommandSchema]:
        return list(self._commands)

    def _candidates(self) -> list[tuple[CommandSchema, CommandHandler]]:
        # Longer names first so `!crates` is not swallowed by `!crate`.
        return sorted(self._commands.items(), key=lambda item: len(item[0].name), reverse=True)

    async def dispatch(self, ctx: Context[ChatMessage]) -> bool:
        """Run the first command matching the message.

        Returns:
            True when a command handled the message.
        """
        line = ctx.message.content
        if not line.startswith(self.leader):
            return False

        for schema, handler in self._candidates():
            match schema.extract(line):
                case MissingRequired():
                    ctx.reply(schema.help_text)
                    return True
                case Matched(mapping=mapping):
                    pass
                case _:
                    continue

            if schema.requires_elevated_privilege and not ctx.message.is_elevated:
                logger.info("dispatch.denied name={} sender={}", schema.name, ctx.message.sender)
                ctx.reply(NOT_ALLOWED)
                return True

            logger.info("dispatch.command name={} sender={}", schema.name, ctx.message.sender)
            args = CommandArgs(schema=schema, mapping=mapping)
            try:
                await handler(Context(args=args, message=ctx.message, responder=ctx.responder))
            except Exception:
                logger.exception("dispatch.handler.error name={}", schema.name)
            return True

        return False


class Passives:
    """Handlers that see every message."""

    def __init__(self) -> None:
        self._handlers: list[PassiveHandler] = []

    def add(self, handler: PassiveHandler) -> None:
        self._handlers.append(handler)

    def __len__(self) -> int:
        return len(self._handlers)

    async def run(self, ctx: Context[ChatMessage]) -> None:
        results = await asyncio.gather(*(handler(ctx) for handler in self._handlers), return_exceptions=True)
        for handler, result in zip(self._handlers, results, strict=True):
            if isinstance(result, Exception):
                logger.opt(exception=result).error("passive.error handler={}", getattr(handler, "__qualname__", handler))
