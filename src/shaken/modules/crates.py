"""Look up crates on crates.io."""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import urlencode

import requests
from loguru import logger

from shaken import http
from shaken.dispatch import CommandArgs, Context
from shaken.format import shrink_string
from shaken.modules import Components

CRATES_API = "https://crates.io/api/v1/crates"
MAX_DESCRIPTION = 400


@dataclass(frozen=True)
class Crate:
    name: str
    max_version: str
    description: str | None = None
    repository: str | None = None

    @classmethod
    def from_payload(cls, payload: dict[str, object]) -> Crate:
        description = payload.get("description")
        repository = payload.get("repository")
        return cls(
            name=str(payload["name"]),
            max_version=str(payload["max_version"]),
            description=description if isinstance(description, str) else None,
            repository=repository if isinstance(repository, str) else None,
        )

    def summary(self) -> str:
        out = f"{self.name} = {self.max_version}"
        if self.description:
            description = " ".join(line.strip() for line in self.description.splitlines() if line.strip())
            out += " | " + shrink_string(description, MAX_DESCRIPTION)
        return out

    def docs_url(self) -> str:
        return f"https://docs.rs/{self.name}/{self.max_version}/{self.name}"


async def lookup(query: str, *, timeout: float = http.DEFAULT_TIMEOUT_SECONDS) -> list[Crate]:
    url = f"{CRATES_API}?{urlencode({'page': 1, 'per_page': 1, 'q': query})}"
    payload = await http.get_json(url, timeout=timeout)
    return [Crate.from_payload(item) for item in payload.get("crates", [])]


def initialize(components: Components) -> None:
    timeout = components.settings.http_timeout_seconds

    async def handle(ctx: Context[CommandArgs]) -> None:
        query = ctx.args["crate"]
        try:
            crates = await lookup(query, timeout=timeout)
        except (requests.RequestException, KeyError, AttributeError) as exc:
            logger.error("crates.lookup.error query={} error={}", query, exc)
            ctx.reply("I cannot do a lookup on crates.io :(")
            return

        if not crates:
            ctx.reply(f"I cannot find anything for '{query}'")
            return

        found = crates[0]
        ctx.say(found.summary())
        if found.repository:
            ctx.say(f"repository: {found.repository}")
        ctx.say(f"documentation: {found.docs_url()}")

    leader = components.settings.leader
    for usage in (f"{leader}crate <crate>", f"{leader}crates <crate>", f"{leader}lookup <crate>"):
        components.commands.command(usage, handle)
