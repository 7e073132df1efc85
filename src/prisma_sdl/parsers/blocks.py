"""Block extraction for SDL documents.

Strips ``//`` comments and splits a document into its top-level
``kind name { ... }`` declarations, in source order. Block bodies are found by
counting braces outside quoted strings, so a brace inside an attribute argument
(``@default("{}")``) does not end the block early.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from prisma_sdl.parsers.arguments import QUOTES, is_escaped
from prisma_sdl.types import BlockKind

logger = logging.getLogger(__name__)

# Comments are removed regardless of quote context, so a "//" inside a string
# literal also truncates the line.
COMMENT_PATTERN = re.compile(r"//.*$", re.MULTILINE)

BLOCK_HEADER_PATTERN = re.compile(r"\b(\w+)\s+(\w+)\s*\{")

KNOWN_KINDS = {kind.value: kind for kind in BlockKind}


@dataclass(frozen=True)
class RawBlock:
    """A top-level declaration before entity parsing.

    Attributes:
        kind: Declaration kind.
        name: Declared name.
        body: Raw text between the outer braces.
        start: Offset of the declaration in the comment-stripped text.
    """

    kind: BlockKind
    name: str
    body: str
    start: int


def strip_comments(text: str) -> str:
    """Remove everything from the first ``//`` to the end of each line."""
    return COMMENT_PATTERN.sub("", text)


def find_closing_brace(text: str, open_index: int) -> int:
    """Return the index of the ``}`` closing the ``{`` at ``open_index``.

    Returns ``len(text)`` when the block is never closed.
    """
    depth = 0
    quote: str | None = None

    for index in range(open_index, len(text)):
        char = text[index]
        if quote is not None:
            if char == quote and not is_escaped(text, index):
                quote = None
            elif char == "\n":
                # Strings never span lines; recover from a stray quote.
                quote = None
            continue
        if char in QUOTES:
            quote = char
        elif char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return index

    return len(text)


def extract_blocks(text: str) -> list[RawBlock]:
    """Split a document into top-level blocks, in source order.

    Comments are stripped first. Blocks of kinds other than datasource,
    generator, model and enum are skipped whole.

    Args:
        text: Full document text.

    Returns:
        List of raw blocks ordered by position.
    """
    content = strip_comments(text)
    blocks: list[RawBlock] = []
    position = 0

    while True:
        match = BLOCK_HEADER_PATTERN.search(content, position)
        if match is None:
            break

        open_index = match.end() - 1
        close_index = find_closing_brace(content, open_index)
        kind_name, name = match.group(1), match.group(2)
        kind = KNOWN_KINDS.get(kind_name)

        if kind is None:
            logger.debug("Skipping unsupported block '%s %s'", kind_name, name)
        else:
            blocks.append(
                RawBlock(
                    kind=kind,
                    name=name,
                    body=content[open_index + 1 : close_index],
                    start=match.start(),
                )
            )

        position = close_index + 1

    return blocks
