"""Exceptions and failure values for prisma-sdl."""

from __future__ import annotations

from dataclasses import dataclass


class SDLParseError(Exception):
    """Raised by a strict parser when a document cannot be interpreted."""

    pass


@dataclass(frozen=True)
class ParseFailure:
    """Result returned in place of a Document when parsing faults.

    Attributes:
        message: Human-readable description of the failure.
        error: The underlying exception, if any.
    """

    message: str
    error: Exception | None = None

    def __bool__(self) -> bool:
        return False


class SchemaStoreError(Exception):
    """Error loading or saving schema text through a store."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ConfigError(ValueError):
    """Raised when a project config file is missing required values or invalid."""

    pass
