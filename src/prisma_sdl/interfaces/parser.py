"""Abstract base class for all parsers."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path

from prisma_sdl.schemas.document import Document

logger = logging.getLogger(__name__)


class Parser(ABC):
    """Base parser interface for schema document formats."""

    def __init__(self, strict_mode: bool = False) -> None:
        """Initialize the parser.

        Args:
            strict_mode: If True, raise errors on faults.
                        If False, log warnings and continue.
        """
        self.strict_mode = strict_mode

    @abstractmethod
    def parse_text(self, text: str) -> Document:
        """Parse document text into a Document.

        Args:
            text: Full document text.

        Returns:
            The parsed document.
        """
        pass

    @abstractmethod
    def validate(self, text: str) -> bool:
        """Check whether text looks like a document of this format.

        Args:
            text: Raw document text.

        Returns:
            True if valid, False otherwise.
        """
        pass

    def parse_file(self, path: Path) -> Document:
        """Parse a single file into a Document.

        Args:
            path: Path to the file to parse.

        Returns:
            The parsed document.

        Raises:
            FileNotFoundError: If the file doesn't exist.
        """
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")
        return self.parse_text(self.read_text(path))

    # Common utility methods
    def read_text(self, path: Path) -> str:
        """Shared file reading logic.

        Args:
            path: Path to a UTF-8 text file.

        Returns:
            File content.
        """
        with open(path, encoding="utf-8") as f:
            return f.read()

    def handle_error(self, error: Exception, context: str = "") -> None:
        """Common error handling based on strict mode.

        Args:
            error: The exception that occurred.
            context: Additional context about where the error occurred.

        Raises:
            Exception: Re-raises the error if in strict mode.
        """
        if self.strict_mode:
            raise error
        logger.warning("%s: %s", context, error)
