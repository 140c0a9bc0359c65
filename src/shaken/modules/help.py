"""!help lists commands or shows the usage of one."""

from __future__ import annotations

from shaken.core import CommandSchema
from shaken.dispatch import CommandArgs, Context
from shaken.modules import Components
from shaken.store import ResponseStore


class Help:
    def __init__(self, schemas: list[CommandSchema], store: ResponseStore, leader: str) -> None:
        self.schemas = schemas
        self.store = store
        self.leader = leader

    async def handle(self, ctx: Context[CommandArgs]) -> None:
        command = ctx.args.get("command")
        if command is None:
            ctx.say(self.format_commands(ctx.channel))
        else:
            ctx.reply(self.lookup(command, ctx.channel))

    def format_commands(self, channel: str) -> str:
        names = [schema.name for schema in self.schemas]
        names.extend(name for name, _ in self.store.commands(channel))
        return ", ".join(f"{self.leader}{name}" for name in names)

    def lookup(self, command: str, channel: str) -> str:
        search = command.removeprefix(self.leader)
        for schema in self.schemas:
            if schema.name == search:
                return schema.help_text
        template = self.store.get(channel, search)
        if template is not None:
            return template.body
        return f"I don't know what '{command}' is"


def initialize(components: Components) -> None:
    schemas = components.commands.schemas()
    helper = Help(schemas, components.store, components.settings.leader)
    schema = components.commands.command(f"{components.settings.leader}help <command?>", helper.handle)
    schemas.insert(0, schema)
