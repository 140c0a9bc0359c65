import asyncio
from collections.abc import Iterator

import pytest
from loguru import logger

from shaken import logging_utils
from shaken.logging_utils import bind_channel, configure_logging


@pytest.fixture
def records(monkeypatch: pytest.MonkeyPatch) -> Iterator[list[str]]:
    monkeypatch.setattr(logging_utils, "_CONFIGURED_PROFILE", None)
    configure_logging(profile="default", level="DEBUG")
    lines: list[str] = []
    sink_id = logger.add(lambda message: lines.append(str(message).strip()), format="{extra[channel]} {message}")
    yield lines
    logger.remove(sink_id)


@pytest.mark.asyncio
async def test_records_carry_the_channel_of_their_task(records: list[str]) -> None:
    async def handle(channel: str) -> None:
        bind_channel(channel)
        await asyncio.sleep(0)
        logger.info("handled")

    await asyncio.gather(handle("#a"), handle("#b"))
    logger.info("idle")

    assert sorted(records[:2]) == ["#a handled", "#b handled"]
    assert records[2] == "- idle"


def test_configure_is_idempotent_per_profile(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(logging_utils, "_CONFIGURED_PROFILE", None)
    configure_logging(profile="default")
    sink_id = logger.add(lambda message: None)

    configure_logging(profile="default")

    # a repeated call leaves other sinks alone
    logger.remove(sink_id)
