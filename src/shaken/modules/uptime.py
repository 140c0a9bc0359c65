"""!uptime"""

from __future__ import annotations

from shaken.dispatch import CommandArgs, Context
from shaken.format import relative_time
from shaken.modules import Components


def initialize(components: Components) -> None:
    clock = components.clock
    started = clock()

    async def handle(ctx: Context[CommandArgs]) -> None:
        elapsed = relative_time(clock() - started) or "less than a second"
        ctx.say(f"I've been running for {elapsed}.")

    components.commands.command(f"{components.settings.leader}uptime", handle)
