"""Schema definitions for SDL documents.

The schemas are organized into:

- schemas.arguments: Attribute argument values (Literal / Expression union)
- schemas.config: Datasource and Generator blocks (ConfigBlock union)
- schemas.document: Document, Model, Field, Attribute, ModelAttribute, Enum
"""

from __future__ import annotations

from prisma_sdl.schemas.arguments import (
    ArgumentValue,
    AttributeArgument,
    ExpressionValue,
    LiteralValue,
    ModelAttributeArgument,
)
from prisma_sdl.schemas.config import ConfigBlock, Datasource, Generator
from prisma_sdl.schemas.document import (
    Attribute,
    Document,
    Enum,
    Field,
    Model,
    ModelAttribute,
    new_identity,
)

__all__ = [
    # Arguments
    "ArgumentValue",
    "AttributeArgument",
    "ExpressionValue",
    "LiteralValue",
    "ModelAttributeArgument",
    # Config blocks
    "ConfigBlock",
    "Datasource",
    "Generator",
    # Document
    "Attribute",
    "Document",
    "Enum",
    "Field",
    "Model",
    "ModelAttribute",
    "new_identity",
]
