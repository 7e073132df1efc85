"""Type definitions and enums for prisma-sdl."""

from __future__ import annotations

from enum import Enum


class BlockKind(str, Enum):
    """Top-level declaration kinds understood by the parser."""

    DATASOURCE = "datasource"
    GENERATOR = "generator"
    MODEL = "model"
    ENUM = "enum"


class ArgumentKind(str, Enum):
    """Classification of an attribute argument value."""

    LITERAL = "literal"
    EXPRESSION = "expression"


class ScalarType(str, Enum):
    """Scalar type keywords.

    Any other field type is a reference to an enum or model by name and is
    left unresolved.
    """

    STRING = "String"
    BOOLEAN = "Boolean"
    INT = "Int"
    BIGINT = "BigInt"
    FLOAT = "Float"
    DECIMAL = "Decimal"
    DATETIME = "DateTime"
    JSON = "Json"
    BYTES = "Bytes"


class FieldAttributeName(str, Enum):
    """Field-level attribute names with known meaning."""

    ID = "id"
    UNIQUE = "unique"
    DEFAULT = "default"
    RELATION = "relation"
    MAP = "map"
    DB = "db"
    UPDATED_AT = "updatedAt"
    IGNORE = "ignore"


# Built-in functions accepted as @default(...) expressions
BUILTIN_FUNCTIONS = frozenset({"autoincrement", "cuid", "uuid", "auto", "now"})

SCALAR_TYPES = frozenset(t.value for t in ScalarType)


def is_scalar_type(type_name: str) -> bool:
    """Return True if ``type_name`` is a scalar keyword.

    Examples:
        >>> is_scalar_type("DateTime")
        True
        >>> is_scalar_type("User")
        False
    """
    return type_name in SCALAR_TYPES


def is_builtin_call(value: str) -> bool:
    """Return True if ``value`` is a call to a built-in default function.

    Examples:
        >>> is_builtin_call("cuid()")
        True
        >>> is_builtin_call("dbgenerated(\\"gen_random_uuid()\\")")
        False
    """
    value = value.strip()
    if not value.endswith(")") or "(" not in value:
        return False
    return value[: value.index("(")].strip() in BUILTIN_FUNCTIONS
