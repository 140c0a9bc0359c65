"""Build command schemas from example usage strings.

A help string looks like ``!hello <name> <other?> <rest...>``: the first word
after the leader is the command name and every ``<...>`` token declares an
argument slot. A trailing ``?`` makes the slot optional, a trailing ``...``
makes it flexible (it swallows the rest of the line). Tokens that are not
wrapped in angle brackets are descriptive text and are ignored.
"""

from __future__ import annotations

from shaken.core.types import DEFAULT_LEADER, ArgumentKind, ArgumentSlot, CommandSchema
from shaken.errors import (
    DuplicateKeyError,
    InvalidCharactersError,
    MultipleFlexibleError,
    NoCommandError,
    OptionalAfterFlexError,
    RequiredInTailError,
)

SLOT_START = "<"
SLOT_END = ">"
OPTIONAL_SUFFIX = "?"
FLEXIBLE_SUFFIX = "..."


def build_schema(help_text: str, leader: str = DEFAULT_LEADER, *, elevated: bool = False) -> CommandSchema:
    """Compile ``help_text`` into a validated :class:`CommandSchema`.

    Args:
        help_text: Example usage, e.g. ``!set <command> <body...>``.
        leader: Single character that prefixes commands.
        elevated: Whether only privileged users may run the command.

    Returns:
        The frozen schema.

    Raises:
        SchemaError: One of its subclasses, naming the rule that was broken.
    """
    if len(leader) != 1:
        raise ValueError(f"leader must be a single character, got {leader!r}")

    tokens = _split_terminator(help_text.removeprefix(leader))
    if not tokens or not tokens[0]:
        raise NoCommandError()

    name, *rest = tokens
    slots: list[ArgumentSlot] = []
    seen: set[str] = set()
    for token in rest:
        declaration = _unwrap_slot(token)
        if declaration is None:
            continue

        slot = _classify(declaration)
        if not slot.key.isalnum():
            raise InvalidCharactersError()
        if slot.key in seen:
            raise DuplicateKeyError(slot.key)
        _check_order(slots, slot.kind)

        seen.add(slot.key)
        slots.append(slot)

    return CommandSchema(
        name=name,
        help_text=help_text,
        argument_slots=tuple(slots),
        requires_elevated_privilege=elevated,
        leader=leader,
    )


def _split_terminator(text: str) -> list[str]:
    # Split on a literal space and drop a single trailing empty piece.
    parts = text.split(" ")
    if parts and not parts[-1]:
        parts.pop()
    return parts


def _unwrap_slot(token: str) -> str | None:
    if not (token.startswith(SLOT_START) and token.endswith(SLOT_END)):
        return None
    return token.lstrip(SLOT_START).rstrip(SLOT_END)


def _classify(declaration: str) -> ArgumentSlot:
    if declaration.endswith(OPTIONAL_SUFFIX):
        return ArgumentSlot(declaration.rstrip(OPTIONAL_SUFFIX), ArgumentKind.OPTIONAL)
    if declaration.endswith(FLEXIBLE_SUFFIX):
        key = declaration
        while key.endswith(FLEXIBLE_SUFFIX):
            key = key.removesuffix(FLEXIBLE_SUFFIX)
        return ArgumentSlot(key, ArgumentKind.FLEXIBLE)
    return ArgumentSlot(declaration, ArgumentKind.REQUIRED)


def _check_order(slots: list[ArgumentSlot], kind: ArgumentKind) -> None:
    kinds = {slot.kind for slot in slots}
    match kind:
        case ArgumentKind.REQUIRED if kinds & {ArgumentKind.OPTIONAL, ArgumentKind.FLEXIBLE}:
            raise RequiredInTailError()
        case ArgumentKind.OPTIONAL if ArgumentKind.FLEXIBLE in kinds:
            raise OptionalAfterFlexError()
        case ArgumentKind.FLEXIBLE if ArgumentKind.FLEXIBLE in kinds:
            raise MultipleFlexibleError()
