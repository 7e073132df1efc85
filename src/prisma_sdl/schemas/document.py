"""Document schemas: models, fields, attributes and enums.

Models, fields and enums carry an identity token (``id``) owned by the editing
layer. It is excluded from every dump and is never written to or read from SDL
text, so a document that round-trips through text comes back with fresh
tokens. Compare documents with ``Document.structurally_equal``.
"""

from __future__ import annotations

from uuid import uuid4

from pydantic import BaseModel, ConfigDict
from pydantic import Field as PydanticField
from pydantic.alias_generators import to_camel

from prisma_sdl.schemas.arguments import AttributeArgument, ModelAttributeArgument
from prisma_sdl.schemas.config import Datasource, Generator
from prisma_sdl.types import is_scalar_type

__all__ = [
    "new_identity",
    "Attribute",
    "Field",
    "ModelAttribute",
    "Model",
    "Enum",
    "Document",
]


def new_identity(prefix: str) -> str:
    """Return a fresh identity token such as ``model_1f3a9c0d2b4e``."""
    return f"{prefix}_{uuid4().hex[:12]}"


class _SchemaModel(BaseModel):
    """Base for document schemas, dumped with camelCase keys when by_alias."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Attribute(_SchemaModel):
    """A field-level attribute such as ``@id`` or ``@default(now())``."""

    name: str
    arguments: list[AttributeArgument] = PydanticField(default_factory=list)


class Field(_SchemaModel):
    """A model field.

    Attributes:
        id: Identity token (never serialized).
        name: Field name.
        type: Scalar keyword, enum name or model name (unresolved).
        is_required: False when the ``?`` marker was present.
        is_list: True when the ``[]`` marker was present.
        attributes: Field attributes in source order.
    """

    id: str = PydanticField(
        default_factory=lambda: new_identity("field"), exclude=True
    )
    name: str
    type: str
    is_required: bool = True
    is_list: bool = False
    attributes: list[Attribute] = PydanticField(default_factory=list)

    @property
    def is_scalar(self) -> bool:
        return is_scalar_type(self.type)

    def get_attribute(self, name: str) -> Attribute | None:
        """Return the first attribute called ``name``, if any."""
        for attribute in self.attributes:
            if attribute.name == name:
                return attribute
        return None


class ModelAttribute(_SchemaModel):
    """A model-level attribute such as ``@@index([email])``."""

    type: str
    arguments: list[ModelAttributeArgument] = PydanticField(default_factory=list)


class Model(_SchemaModel):
    """A ``model`` block."""

    id: str = PydanticField(
        default_factory=lambda: new_identity("model"), exclude=True
    )
    name: str
    fields: list[Field] = PydanticField(default_factory=list)
    attributes: list[ModelAttribute] = PydanticField(default_factory=list)

    def get_field(self, name: str) -> Field | None:
        for field in self.fields:
            if field.name == name:
                return field
        return None


class Enum(_SchemaModel):
    """An ``enum`` block; values are kept verbatim in source order."""

    id: str = PydanticField(default_factory=lambda: new_identity("enum"), exclude=True)
    name: str
    values: list[str] = PydanticField(default_factory=list)


class Document(_SchemaModel):
    """A complete schema document."""

    models: list[Model] = PydanticField(default_factory=list)
    enums: list[Enum] = PydanticField(default_factory=list)
    datasource: Datasource = PydanticField(default_factory=Datasource)
    generator: Generator = PydanticField(default_factory=Generator)

    def get_model(self, name: str) -> Model | None:
        for model in self.models:
            if model.name == name:
                return model
        return None

    def get_enum(self, name: str) -> Enum | None:
        for enum in self.enums:
            if enum.name == name:
                return enum
        return None

    def structurally_equal(self, other: Document) -> bool:
        """Compare two documents ignoring identity tokens."""
        return self.model_dump() == other.model_dump()
