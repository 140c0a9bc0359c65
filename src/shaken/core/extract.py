"""Match one input line against a command schema."""

from __future__ import annotations

from shaken.core.types import (
    ArgumentKind,
    CommandSchema,
    ExtractionResult,
    Matched,
    MissingRequired,
    NoMatch,
)

SEPARATOR = " "


def extract(schema: CommandSchema, line: str, leader: str | None = None) -> ExtractionResult:
    """Bind the arguments of ``line`` to the slots of ``schema``.

    The command name is matched as a plain string prefix. Slots are filled left
    to right, each taking the text up to the next space; a flexible slot, or a
    slot with no space left ahead of it, takes everything that remains and ends
    the walk. Text past the last bound slot is dropped.

    ``leader`` defaults to the one the schema was built with.
    """
    text = line.removeprefix(schema.leader if leader is None else leader)
    if not text.startswith(schema.name):
        return NoMatch()

    remainder = text[len(schema.name) :].lstrip()
    if not remainder and schema.has_kind(ArgumentKind.REQUIRED):
        return MissingRequired()

    mapping: dict[str, str] = {}
    for slot in schema.argument_slots:
        index = remainder.find(SEPARATOR)
        if slot.kind is ArgumentKind.FLEXIBLE or index < 0:
            if remainder:
                mapping[slot.key] = remainder
            break
        # Doubled spaces leave an empty token; it consumes the slot unbound.
        if index:
            mapping[slot.key] = remainder[:index]
        remainder = remainder[index + 1 :]

    return Matched(mapping)
