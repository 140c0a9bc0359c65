"""Command grammar: schema builder and argument extractor."""

from shaken.core.extract import extract
from shaken.core.schema import build_schema
from shaken.core.types import (
    DEFAULT_LEADER,
    ArgumentKind,
    ArgumentSlot,
    CommandSchema,
    ExtractionResult,
    Matched,
    MissingRequired,
    NoMatch,
)

__all__ = [
    "DEFAULT_LEADER",
    "ArgumentKind",
    "ArgumentSlot",
    "CommandSchema",
    "ExtractionResult",
    "Matched",
    "MissingRequired",
    "NoMatch",
    "build_schema",
    "extract",
]
