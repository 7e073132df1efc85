"""Load/save stores for schema text."""

from prisma_sdl.stores.base import SaveResult, SchemaStore
from prisma_sdl.stores.http import HttpSchemaStore
from prisma_sdl.stores.local import FileSchemaStore

__all__ = [
    "FileSchemaStore",
    "HttpSchemaStore",
    "SaveResult",
    "SchemaStore",
]
