"""Built-in bot modules."""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass, field

from shaken.config import Settings
from shaken.dispatch import CommandDispatch, Passives
from shaken.store import ResponseStore


@dataclass
class Components:
    """Everything a module may register into or read from."""

    settings: Settings
    commands: CommandDispatch
    passives: Passives
    store: ResponseStore
    clock: Callable[[], float] = field(default=time.monotonic)


def initialize_modules(components: Components) -> None:
    from shaken.modules import crates, help, responses, speak, uptime

    crates.initialize(components)
    responses.initialize(components)
    speak.initialize(components)
    uptime.initialize(components)

    # help snapshots the registered commands, so it goes last
    help.initialize(components)
