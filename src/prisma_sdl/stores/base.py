"""Base classes and protocols for schema stores."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol


@dataclass
class SaveResult:
    """Result of a store save operation.

    Attributes:
        location: Where the text was saved (file path or URL)
        bytes_written: Size of the saved text in UTF-8 bytes
        status_code: HTTP status code, for remote stores
        message: Human-readable summary message
        metadata: Additional metadata about the save
    """

    location: str
    bytes_written: int
    status_code: int | None = None
    message: str | None = None
    metadata: dict[str, str] = field(default_factory=dict)


class SchemaStore(Protocol):
    """Protocol for schema stores.

    A store supplies raw document text and accepts generated text, whether
    from a local file or a remote ``/schema`` endpoint. Stores never parse
    or generate; they only move text.
    """

    def load(self) -> str:
        """Load the raw document text.

        Raises:
            SchemaStoreError: If the text cannot be read
        """
        ...

    def save(self, text: str) -> SaveResult:
        """Save document text.

        Args:
            text: Generated SDL text

        Returns:
            SaveResult describing what was written

        Raises:
            SchemaStoreError: If the text cannot be written
        """
        ...

    def describe(self) -> str:
        """Short human-readable description of the store location."""
        ...
