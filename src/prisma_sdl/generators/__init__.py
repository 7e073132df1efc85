"""Generators for SDL output."""

from prisma_sdl.generators.sdl import (
    SDLGenerator,
    generate_document,
    generate_enum,
    generate_model,
)

__all__ = [
    "SDLGenerator",
    "generate_document",
    "generate_enum",
    "generate_model",
]
