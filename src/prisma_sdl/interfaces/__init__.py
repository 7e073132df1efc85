"""Abstract base classes for parsers and generators."""

from prisma_sdl.interfaces.generator import Generator
from prisma_sdl.interfaces.parser import Parser

__all__ = ["Parser", "Generator"]
