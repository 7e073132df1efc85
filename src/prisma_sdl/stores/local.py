"""Local file schema store."""

from __future__ import annotations

import logging
from pathlib import Path

from prisma_sdl.errors import SchemaStoreError
from prisma_sdl.stores.base import SaveResult

logger = logging.getLogger(__name__)


class FileSchemaStore:
    """Load and save schema text from a file on disk."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def load(self) -> str:
        if not self.path.exists():
            raise SchemaStoreError(f"Schema file not found: {self.path}")
        try:
            return self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise SchemaStoreError(f"Could not read {self.path}: {e}") from e

    def save(self, text: str) -> SaveResult:
        """Write text to the file, creating parent directories as needed."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(text, encoding="utf-8")
        except OSError as e:
            raise SchemaStoreError(f"Could not write {self.path}: {e}") from e

        size = len(text.encode("utf-8"))
        logger.debug("Wrote %d bytes to %s", size, self.path)
        return SaveResult(
            location=str(self.path),
            bytes_written=size,
            message=f"Wrote {self.path}",
        )

    def describe(self) -> str:
        return str(self.path)
