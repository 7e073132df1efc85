"""Parser for SDL schema documents."""

from __future__ import annotations

import logging

from pydantic import ValidationError

from prisma_sdl.errors import ParseFailure, SDLParseError
from prisma_sdl.interfaces.parser import Parser
from prisma_sdl.parsers.blocks import RawBlock, extract_blocks
from prisma_sdl.parsers.entities import (
    parse_datasource,
    parse_enum,
    parse_generator,
    parse_model,
)
from prisma_sdl.schemas.config import Datasource, Generator
from prisma_sdl.schemas.document import Document
from prisma_sdl.types import BlockKind

logger = logging.getLogger(__name__)


class SDLParser(Parser):
    """Parser for SDL schema text.

    Parsing is best-effort: unrecognized lines are dropped. A block that
    fails to build is skipped with a warning, or raises ``SDLParseError`` in
    strict mode.
    """

    def __init__(
        self,
        strict_mode: bool = False,
        datasource: Datasource | None = None,
        generator: Generator | None = None,
    ) -> None:
        """Initialize the parser.

        Args:
            strict_mode: If True, raise on blocks that fail to build.
            datasource: Datasource used when the text has no datasource
                block, and for keys a datasource block leaves out.
            generator: Generator used the same way for the generator block.
        """
        super().__init__(strict_mode=strict_mode)
        self.default_datasource = datasource or Datasource()
        self.default_generator = generator or Generator()

    def parse_text(self, text: str) -> Document:
        """Parse SDL text into a new Document.

        Args:
            text: Full document text.

        Returns:
            The parsed document. Models and enums keep source order;
            the last datasource and generator blocks win.

        Raises:
            SDLParseError: If ``text`` is not text, or in strict mode when a
                block fails to build.
        """
        if not isinstance(text, str):
            raise SDLParseError(f"Expected document text, got {type(text).__name__}")

        document = Document(
            datasource=self.default_datasource.model_copy(deep=True),
            generator=self.default_generator.model_copy(deep=True),
        )

        for block in extract_blocks(text):
            try:
                self._apply_block(document, block)
            except (ValidationError, ValueError) as e:
                self.handle_error(
                    SDLParseError(f"Invalid {block.kind.value} '{block.name}': {e}"),
                    f"Skipping {block.kind.value} '{block.name}'",
                )

        logger.debug(
            "Parsed %d models and %d enums", len(document.models), len(document.enums)
        )
        return document

    def parse(self, text: str) -> Document | ParseFailure:
        """Parse SDL text, returning a ParseFailure instead of raising.

        Args:
            text: Full document text.

        Returns:
            The parsed Document, or a ParseFailure describing the fault.
        """
        try:
            return self.parse_text(text)
        except Exception as e:
            logger.error("Error parsing schema: %s", e)
            return ParseFailure(message=f"Could not parse the schema: {e}", error=e)

    def validate(self, text: str) -> bool:
        """Return True if the text declares at least one recognized block."""
        if not isinstance(text, str) or not text.strip():
            return False
        return bool(extract_blocks(text))

    def _apply_block(self, document: Document, block: RawBlock) -> None:
        if block.kind is BlockKind.DATASOURCE:
            document.datasource = parse_datasource(
                block.body, block.name, self.default_datasource
            )
        elif block.kind is BlockKind.GENERATOR:
            document.generator = parse_generator(
                block.body, block.name, self.default_generator
            )
        elif block.kind is BlockKind.MODEL:
            document.models.append(parse_model(block.body, block.name))
        elif block.kind is BlockKind.ENUM:
            document.enums.append(parse_enum(block.body, block.name))


def parse_document(
    text: str,
    datasource: Datasource | None = None,
    generator: Generator | None = None,
) -> Document | ParseFailure:
    """Parse SDL text into a Document.

    Args:
        text: Full document text.
        datasource: Default datasource for documents without one.
        generator: Default generator for documents without one.

    Returns:
        A new Document, or a ParseFailure if the text could not be
        interpreted at all.
    """
    return SDLParser(datasource=datasource, generator=generator).parse(text)
