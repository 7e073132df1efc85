"""Scanner for attribute argument lists.

Splits the text between an attribute's outer parentheses into top-level
arguments. Commas nested in brackets, braces, parentheses or quoted strings do
not split:

    >>> [a.raw for a in scan_arguments('a: 1, b: [x, y], c: "a,b"')]
    ['1', '[x, y]', '"a,b"']

Every call keeps its scanning state in locals; nothing is shared between calls.
"""

from __future__ import annotations

from prisma_sdl.constants import POSITIONAL_ARGUMENT_NAME
from prisma_sdl.schemas.arguments import (
    AttributeArgument,
    ExpressionValue,
    LiteralValue,
)

QUOTES = frozenset({'"', "'"})
OPENERS = frozenset({"[", "{", "("})
CLOSERS = frozenset({"]", "}", ")"})


def is_escaped(text: str, index: int) -> bool:
    """Return True if the character at ``index`` follows an odd run of backslashes."""
    backslashes = 0
    index -= 1
    while index >= 0 and text[index] == "\\":
        backslashes += 1
        index -= 1
    return backslashes % 2 == 1


def is_quoted(value: str) -> bool:
    """Return True if ``value`` is fully wrapped in matching quotes."""
    return len(value) >= 2 and value[0] in QUOTES and value[-1] == value[0]


def _build_argument(
    chunk: str,
    separator: int | None,
    argument_cls: type[AttributeArgument],
) -> AttributeArgument:
    if separator is None:
        name = POSITIONAL_ARGUMENT_NAME
        text = chunk.strip()
    else:
        name = chunk[:separator].strip()
        text = chunk[separator + 1 :].strip()

    if is_quoted(text):
        return argument_cls(name=name, value=LiteralValue(text=text))
    return argument_cls(name=name, value=ExpressionValue(text=text))


def scan_arguments(
    text: str,
    argument_cls: type[AttributeArgument] = AttributeArgument,
) -> list[AttributeArgument]:
    """Split an argument list into named and positional arguments.

    A ``:`` separates name from value only when it is at the top level, is not
    the first character of the argument, and no separator was seen yet for
    that argument. Arguments without a separator are positional and are named
    ``"value"``.

    Args:
        text: Raw text between the attribute's parentheses (may be empty).
        argument_cls: Argument class to build, so model-level attributes get
            ``ModelAttributeArgument`` instances.

    Returns:
        Arguments in source order. Duplicate names are kept.
    """
    arguments: list[AttributeArgument] = []
    if not text or not text.strip():
        return arguments

    buffer: list[str] = []
    separator: int | None = None
    depth = 0
    quote: str | None = None

    for index, char in enumerate(text):
        if quote is not None:
            buffer.append(char)
            if char == quote and not is_escaped(text, index):
                quote = None
            continue

        if char in QUOTES:
            quote = char
        elif char in OPENERS:
            depth += 1
        elif char in CLOSERS:
            depth -= 1
        elif char == "," and depth == 0:
            chunk = "".join(buffer)
            if chunk.strip():
                arguments.append(_build_argument(chunk, separator, argument_cls))
            buffer = []
            separator = None
            continue
        elif (
            char == ":"
            and depth == 0
            and separator is None
            and "".join(buffer).strip()
        ):
            separator = len(buffer)

        buffer.append(char)

    chunk = "".join(buffer)
    if chunk.strip():
        arguments.append(_build_argument(chunk, separator, argument_cls))

    return arguments


def find_closing_paren(text: str, open_index: int) -> int:
    """Find the ``)`` matching the ``(`` at ``open_index``.

    Uses the same nesting and quoting rules as ``scan_arguments``.

    Returns:
        Index of the matching parenthesis, or -1 if it is never closed.
    """
    depth = 0
    quote: str | None = None

    for index in range(open_index, len(text)):
        char = text[index]
        if quote is not None:
            if char == quote and not is_escaped(text, index):
                quote = None
            continue
        if char in QUOTES:
            quote = char
        elif char in OPENERS:
            depth += 1
        elif char in CLOSERS:
            depth -= 1
            if depth == 0:
                return index

    return -1
