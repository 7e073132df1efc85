"""
prisma-sdl: bidirectional transform between Prisma-style schema text and a
structured document model.

Pipeline:
    text → extract_blocks → entity parsers → Document
    (scan_arguments runs once per attribute)
    Document → SDLGenerator → canonical text

Usage:
    >>> from prisma_sdl import parse_document, generate_document
    >>> doc = parse_document("model User {\\n  id String @id\\n}")
    >>> doc.models[0].fields[0].name
    'id'
"""

from prisma_sdl.editing import (
    add_enum,
    add_model,
    remove_enum,
    remove_model,
    replace_enum,
    replace_model,
    update_config,
)
from prisma_sdl.errors import ConfigError, ParseFailure, SchemaStoreError, SDLParseError
from prisma_sdl.generators.sdl import (
    SDLGenerator,
    generate_document,
    generate_enum,
    generate_model,
)
from prisma_sdl.parsers.sdl import SDLParser, parse_document
from prisma_sdl.schemas import (
    Attribute,
    AttributeArgument,
    Datasource,
    Document,
    Enum,
    Field,
    Generator,
    Model,
    ModelAttribute,
    ModelAttributeArgument,
)

__version__ = "0.1.0"

__all__ = [
    "Attribute",
    "AttributeArgument",
    "ConfigError",
    "Datasource",
    "Document",
    "Enum",
    "Field",
    "Generator",
    "Model",
    "ModelAttribute",
    "ModelAttributeArgument",
    "ParseFailure",
    "SDLGenerator",
    "SDLParseError",
    "SDLParser",
    "SchemaStoreError",
    "add_enum",
    "add_model",
    "generate_document",
    "generate_enum",
    "generate_model",
    "parse_document",
    "remove_enum",
    "remove_model",
    "replace_enum",
    "replace_model",
    "update_config",
]
