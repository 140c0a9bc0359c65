"""Application-level exception types for Shaken."""

from __future__ import annotations


class ShakenError(Exception):
    """Base exception for Shaken."""


class SchemaError(ShakenError, ValueError):
    """Base exception for malformed command help strings."""

    message = "invalid command"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)


class NoCommandError(SchemaError):
    """Raised when the help string has no command name."""

    message = "a command must be provided"


class DuplicateKeyError(SchemaError):
    """Raised when two argument slots share a key."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"duplicate key found: {key}")


class InvalidCharactersError(SchemaError):
    """Raised when an argument key is empty or not alphanumeric."""

    message = "only alphanumeric keys are allowed"


class RequiredInTailError(SchemaError):
    """Raised when a required argument follows an optional or flexible one."""

    message = "required cannot follow optional or flexible"


class OptionalAfterFlexError(SchemaError):
    """Raised when an optional argument follows a flexible one."""

    message = "optional cannot follow flexible"


class MultipleFlexibleError(SchemaError):
    """Raised when more than one flexible argument is declared."""

    message = "only a single flexible argument can exist"


class ConfigurationError(ShakenError):
    """Base exception for configuration and startup validation errors."""


class DuplicateCommandError(ConfigurationError):
    """Raised when two registered commands share a name."""


class TemplateError(ShakenError):
    """Raised when a response template body is malformed."""
