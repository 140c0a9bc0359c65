"""Per-channel custom responses managed from chat."""

from __future__ import annotations

from loguru import logger

from shaken.dispatch import CommandArgs, Context
from shaken.errors import TemplateError
from shaken.messages import ChatMessage
from shaken.modules import Components
from shaken.store import ResponseStore
from shaken.template import Environment

EMPTY_BODY = "try again. you provided an empty command body"
REFUSED_PREFIXES = (".", "/")


class Responses:
    def __init__(self, store: ResponseStore, leader: str) -> None:
        self.store = store
        self.leader = leader

    async def set_command(self, ctx: Context[CommandArgs]) -> None:
        await self.update(ctx, ctx.args["command"], ctx.args.get_non_empty("body"))

    async def add_command(self, ctx: Context[CommandArgs]) -> None:
        name = ctx.args["command"]
        if self.store.contains(ctx.channel, name):
            ctx.reply(f"'{name}' already exists")
            return
        await self.update(ctx, name, ctx.args.get_non_empty("body"))

    async def edit_command(self, ctx: Context[CommandArgs]) -> None:
        name = ctx.args["command"]
        if not self.store.contains(ctx.channel, name):
            ctx.reply(f"'{name}' does not exist")
            return
        await self.update(ctx, name, ctx.args.get_non_empty("body"))

    async def remove_command(self, ctx: Context[CommandArgs]) -> None:
        name = ctx.args["command"]
        if await self.store.remove(ctx.channel, name):
            logger.info("responses.remove channel={} name={}", ctx.channel, name)
            ctx.reply(f"removed '{name}'")
        else:
            ctx.reply(f"'{name}' does not exist")

    async def update(self, ctx: Context[CommandArgs], name: str, body: str | None) -> None:
        if body is None:
            ctx.reply(EMPTY_BODY)
            return
        if body.startswith(REFUSED_PREFIXES):
            ctx.reply("lol")
            return

        try:
            await self.store.set(ctx.channel, name, body)
        except TemplateError as exc:
            ctx.reply(f"invalid body: {exc}")
            return
        logger.info("responses.update channel={} name={!r} body={!r}", ctx.channel, name, body)
        ctx.reply(f"updated '{name}' -> '{body}'")

    async def handle(self, ctx: Context[ChatMessage]) -> None:
        message = ctx.message
        if not message.content.startswith(self.leader):
            return
        words = message.content.removeprefix(self.leader).split()
        if not words:
            return

        template = self.store.get(message.channel, words[0])
        if template is None:
            return
        env = Environment().insert("name", message.sender).insert("channel", message.channel)
        ctx.say(template.apply(env))


def initialize(components: Components) -> None:
    leader = components.settings.leader
    responses = Responses(components.store, leader)

    commands = components.commands
    commands.elevated(f"{leader}set <command> <body...>", responses.set_command)
    commands.elevated(f"{leader}add <command> <body...>", responses.add_command)
    commands.elevated(f"{leader}edit <command> <body...>", responses.edit_command)
    commands.elevated(f"{leader}remove <command>", responses.remove_command)
    components.passives.add(responses.handle)
