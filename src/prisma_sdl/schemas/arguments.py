"""Attribute argument schemas.

An argument value is a tagged union rather than a raw string plus a flag:

- ``LiteralValue``: a quoted string literal, emitted quoted.
- ``ExpressionValue``: a function call, identifier, list or enum member
  reference, emitted verbatim.

Both keep the raw text exactly as it appeared in the source (a literal keeps
its surrounding quotes when it was parsed from text).
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from prisma_sdl.constants import POSITIONAL_ARGUMENT_NAME
from prisma_sdl.types import ArgumentKind

__all__ = [
    "LiteralValue",
    "ExpressionValue",
    "ArgumentValue",
    "AttributeArgument",
    "ModelAttributeArgument",
]


class LiteralValue(BaseModel):
    """A quoted string literal argument value."""

    kind: Literal["literal"] = "literal"
    text: str

    model_config = {"frozen": True}


class ExpressionValue(BaseModel):
    """An argument value emitted unquoted."""

    kind: Literal["expression"] = "expression"
    text: str

    model_config = {"frozen": True}


ArgumentValue = Annotated[
    Union[LiteralValue, ExpressionValue], Field(discriminator="kind")
]


class AttributeArgument(BaseModel):
    """One argument of a field-level attribute.

    Attributes:
        name: Argument name, or ``"value"`` for positional arguments.
        value: Literal or expression value.
    """

    name: str = POSITIONAL_ARGUMENT_NAME
    value: ArgumentValue

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @classmethod
    def literal(
        cls, text: str, name: str = POSITIONAL_ARGUMENT_NAME
    ) -> AttributeArgument:
        """Build an argument holding a string literal.

        ``text`` is wrapped in double quotes unless it is already quoted, so
        the stored value matches what the parser produces.
        """
        if not (len(text) >= 2 and text[0] in "\"'" and text[-1] == text[0]):
            text = f'"{text}"'
        return cls(name=name, value=LiteralValue(text=text))

    @classmethod
    def expression(
        cls, text: str, name: str = POSITIONAL_ARGUMENT_NAME
    ) -> AttributeArgument:
        """Build an argument holding an unquoted expression."""
        return cls(name=name, value=ExpressionValue(text=text))

    @property
    def raw(self) -> str:
        """Raw value text."""
        return self.value.text

    @property
    def kind(self) -> ArgumentKind:
        return ArgumentKind(self.value.kind)

    @property
    def is_expression(self) -> bool:
        return isinstance(self.value, ExpressionValue)

    @property
    def is_positional(self) -> bool:
        return self.name == POSITIONAL_ARGUMENT_NAME


class ModelAttributeArgument(AttributeArgument):
    """One argument of a model-level (``@@``) attribute."""
