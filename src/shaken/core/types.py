"""Command schema and extraction result types."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator

DEFAULT_LEADER = "!"


class ArgumentKind(Enum):
    """Cardinality of one argument slot."""

    REQUIRED = "required"
    OPTIONAL = "optional"
    FLEXIBLE = "flexible"


@dataclass(frozen=True)
class ArgumentSlot:
    """One declared argument position."""

    key: str
    kind: ArgumentKind


@dataclass(frozen=True, eq=False)
class CommandSchema:
    """Validated, immutable definition of one command.

    Schemas compare by their help text and hash by their name, so two schemas
    built from the same help string are interchangeable.
    """

    name: str
    help_text: str
    argument_slots: tuple[ArgumentSlot, ...] = ()
    requires_elevated_privilege: bool = False
    leader: str = DEFAULT_LEADER

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CommandSchema):
            return NotImplemented
        return self.help_text == other.help_text

    def __hash__(self) -> int:
        return hash(self.name)

    def __str__(self) -> str:
        return self.help_text

    def keys(self) -> Iterator[str]:
        return (slot.key for slot in self.argument_slots)

    def has_kind(self, *kinds: ArgumentKind) -> bool:
        return any(slot.kind in kinds for slot in self.argument_slots)

    def extract(self, line: str) -> ExtractionResult:
        from shaken.core.extract import extract

        return extract(self, line)


@dataclass(frozen=True)
class Matched:
    """The command matched; ``mapping`` holds every non-empty bound slot."""

    mapping: dict[str, str] = field(default_factory=dict)

    def __getitem__(self, key: str) -> str:
        return self.mapping[key]

    def get(self, key: str, default: str | None = None) -> str | None:
        return self.mapping.get(key, default)


@dataclass(frozen=True)
class MissingRequired:
    """The command matched but no arguments were given for required slots."""


@dataclass(frozen=True)
class NoMatch:
    """The input is not this command."""


ExtractionResult = Matched | MissingRequired | NoMatch
