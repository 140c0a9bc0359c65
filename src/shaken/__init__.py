"""Shaken - a chat bot built around a small command grammar."""

from .core import (
    ArgumentKind,
    ArgumentSlot,
    CommandSchema,
    ExtractionResult,
    Matched,
    MissingRequired,
    NoMatch,
    build_schema,
    extract,
)
from .errors import SchemaError

__version__ = "0.1.0"

__all__ = [
    "ArgumentKind",
    "ArgumentSlot",
    "CommandSchema",
    "ExtractionResult",
    "Matched",
    "MissingRequired",
    "NoMatch",
    "SchemaError",
    "build_schema",
    "extract",
]
