"""Placeholder substitution for custom responses.

Bodies may reference ``${name}`` style placeholders which are filled from an
:class:`Environment`. Unknown placeholders are left untouched.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TypeAlias

from shaken.errors import TemplateError

Resolvable: TypeAlias = str | int | float | bool | Callable[[], object] | None


@dataclass(frozen=True)
class Environment:
    values: dict[str, Resolvable] = field(default_factory=dict)

    def insert(self, key: str, value: Resolvable) -> Environment:
        return Environment({**self.values, key: value})

    def resolve(self, key: str) -> str | None:
        if key not in self.values:
            return None
        value = self.values[key]
        if callable(value):
            value = value()
        return "" if value is None else str(value)


def find_keys(body: str) -> list[str]:
    """Return the placeholder keys of ``body`` in order of appearance."""

    keys: list[str] = []
    start: int | None = None
    index = 0
    while index < len(body):
        char = body[index]
        if char == "$" and body[index + 1 : index + 2] == "{":
            if start is not None:
                raise TemplateError("nested templates are not allowed")
            start = index + 2
            index += 2
            continue
        if start is not None and char == "{":
            raise TemplateError("nested templates are not allowed")
        if start is not None and char == "}":
            if index == start:
                raise TemplateError("empty templates are not allowed")
            keys.append(body[start:index])
            start = None
        index += 1

    if start is not None:
        raise TemplateError("non-terminated template found")
    return keys


@dataclass(frozen=True)
class SimpleTemplate:
    name: str
    body: str

    def __post_init__(self) -> None:
        find_keys(self.body)

    def apply(self, env: Environment) -> str:
        out = self.body
        for key in dict.fromkeys(find_keys(self.body)):
            value = env.resolve(key)
            if value is not None:
                out = out.replace(f"${{{key}}}", value)
        return out
