"""Parsers for SDL documents."""

from prisma_sdl.parsers.arguments import find_closing_paren, scan_arguments
from prisma_sdl.parsers.blocks import RawBlock, extract_blocks, strip_comments
from prisma_sdl.parsers.sdl import SDLParser, parse_document

__all__ = [
    "RawBlock",
    "SDLParser",
    "extract_blocks",
    "find_closing_paren",
    "parse_document",
    "scan_arguments",
    "strip_comments",
]
