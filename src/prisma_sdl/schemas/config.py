"""Datasource and generator configuration block schemas.

The two block kinds share one update path in the editing layer, so they form
a discriminated union (``ConfigBlock``) keyed on ``kind`` instead of being
told apart by shape.
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from prisma_sdl.constants import (
    DEFAULT_BINARY_TARGETS,
    DEFAULT_DATASOURCE_NAME,
    DEFAULT_DATASOURCE_PROVIDER,
    DEFAULT_DATASOURCE_URL,
    DEFAULT_GENERATOR_NAME,
    DEFAULT_GENERATOR_PROVIDER,
)

__all__ = [
    "Datasource",
    "Generator",
    "ConfigBlock",
]


class Datasource(BaseModel):
    """A ``datasource`` block.

    Attributes:
        name: Block name (``db`` unless the source said otherwise).
        provider: Database provider identifier, e.g. ``postgresql``.
        url: Raw url expression, e.g. ``env("DATABASE_URL")`` or a quoted
            literal. Emitted verbatim.
    """

    kind: Literal["datasource"] = "datasource"
    name: str = DEFAULT_DATASOURCE_NAME
    provider: str = DEFAULT_DATASOURCE_PROVIDER
    url: str = DEFAULT_DATASOURCE_URL

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Generator(BaseModel):
    """A ``generator`` block.

    Attributes:
        name: Block name (``client`` unless the source said otherwise).
        provider: Generator provider, e.g. ``prisma-client-js``.
        output: Optional output path.
        preview_features: Enabled preview feature identifiers.
        binary_targets: Binary target identifiers.
    """

    kind: Literal["generator"] = "generator"
    name: str = DEFAULT_GENERATOR_NAME
    provider: str = DEFAULT_GENERATOR_PROVIDER
    output: str | None = None
    preview_features: list[str] = Field(default_factory=list)
    binary_targets: list[str] = Field(
        default_factory=lambda: list(DEFAULT_BINARY_TARGETS)
    )

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


ConfigBlock = Annotated[Union[Datasource, Generator], Field(discriminator="kind")]
