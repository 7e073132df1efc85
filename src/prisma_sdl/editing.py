"""Document editing operations.

Every operation returns a new Document and leaves its input untouched. Models
and enums are addressed by their identity token (``id``), which survives
renames but not a trip through SDL text.

Example:
    >>> doc = add_model(Document())
    >>> doc.models[0].name
    'Model1'
"""

from __future__ import annotations

import logging

from prisma_sdl.schemas.config import ConfigBlock
from prisma_sdl.schemas.document import Document, Enum, Model
from prisma_sdl.types import BlockKind

logger = logging.getLogger(__name__)

__all__ = [
    "add_model",
    "add_enum",
    "replace_model",
    "replace_enum",
    "remove_model",
    "remove_enum",
    "update_config",
]


def add_model(document: Document, name: str | None = None) -> Document:
    """Append an empty model.

    Args:
        document: Document to start from.
        name: Model name. Defaults to ``Model<n+1>`` where n is the current
            number of models.

    Returns:
        New document with the model appended.
    """
    updated = document.model_copy(deep=True)
    updated.models.append(Model(name=name or f"Model{len(document.models) + 1}"))
    return updated


def add_enum(document: Document, name: str | None = None) -> Document:
    """Append an empty enum named ``name`` or ``Enum<n+1>``."""
    updated = document.model_copy(deep=True)
    updated.enums.append(Enum(name=name or f"Enum{len(document.enums) + 1}"))
    return updated


def replace_model(document: Document, model: Model) -> Document:
    """Replace the model sharing ``model.id``.

    Raises:
        KeyError: If no model has that identity token.
    """
    updated = document.model_copy(deep=True)
    for index, existing in enumerate(updated.models):
        if existing.id == model.id:
            updated.models[index] = model.model_copy(deep=True)
            return updated
    raise KeyError(f"No model with id '{model.id}'")


def replace_enum(document: Document, enum: Enum) -> Document:
    """Replace the enum sharing ``enum.id``.

    Raises:
        KeyError: If no enum has that identity token.
    """
    updated = document.model_copy(deep=True)
    for index, existing in enumerate(updated.enums):
        if existing.id == enum.id:
            updated.enums[index] = enum.model_copy(deep=True)
            return updated
    raise KeyError(f"No enum with id '{enum.id}'")


def remove_model(document: Document, model_id: str) -> Document:
    """Drop the model with ``model_id``; an unknown id changes nothing."""
    updated = document.model_copy(deep=True)
    updated.models = [model for model in updated.models if model.id != model_id]
    if len(updated.models) == len(document.models):
        logger.debug("No model with id %s to remove", model_id)
    return updated


def remove_enum(document: Document, enum_id: str) -> Document:
    """Drop the enum with ``enum_id``; an unknown id changes nothing."""
    updated = document.model_copy(deep=True)
    updated.enums = [enum for enum in updated.enums if enum.id != enum_id]
    if len(updated.enums) == len(document.enums):
        logger.debug("No enum with id %s to remove", enum_id)
    return updated


def update_config(document: Document, block: ConfigBlock) -> Document:
    """Replace the datasource or the generator, chosen by ``block.kind``.

    Args:
        document: Document to start from.
        block: A Datasource or Generator.

    Returns:
        New document with the matching config block replaced.
    """
    updated = document.model_copy(deep=True)
    if block.kind == BlockKind.DATASOURCE:
        updated.datasource = block.model_copy(deep=True)
    elif block.kind == BlockKind.GENERATOR:
        updated.generator = block.model_copy(deep=True)
    else:
        raise TypeError(f"Unsupported config block kind: {block.kind!r}")
    return updated
