"""Entity parsers turning raw block bodies into document schemas.

Each parser is best-effort: a line that does not have the expected shape is
dropped (and logged at DEBUG) instead of failing the whole block.
"""

from __future__ import annotations

import logging
import re

from prisma_sdl.parsers.arguments import find_closing_paren, is_quoted, scan_arguments
from prisma_sdl.schemas.arguments import AttributeArgument, ModelAttributeArgument
from prisma_sdl.schemas.config import Datasource, Generator
from prisma_sdl.schemas.document import Attribute, Enum, Field, Model, ModelAttribute

logger = logging.getLogger(__name__)

KEY_VALUE_PATTERN = re.compile(r"^(\w+)\s*=\s*(.*?)\s*$")

# <name> <type>[[]][?] [attributes...]; attributes may follow the type directly
FIELD_PATTERN = re.compile(r"^(\w+)\s+(\w+)(\[\])?(\?)?(?:\s+|(?=@)|$)(.*)$")

# Attribute name after "@" or "@@", optionally namespaced: db.VarChar
ATTRIBUTE_NAME_PATTERN = re.compile(r"(\w+)(?:\.(\w+))?")


def _unquote(value: str) -> str:
    return value[1:-1] if is_quoted(value) else value


def _parse_key_values(body: str) -> dict[str, str]:
    """Collect ``key = value`` lines; the first occurrence of a key wins."""
    values: dict[str, str] = {}
    for line in body.splitlines():
        match = KEY_VALUE_PATTERN.match(line.strip())
        if match:
            values.setdefault(match.group(1), match.group(2))
    return values


def _parse_identifier_list(value: str) -> list[str] | None:
    """Parse ``["a", "b"]`` into ``["a", "b"]``; None if not bracketed."""
    if not (value.startswith("[") and value.endswith("]")):
        return None
    items = [item.strip().strip("\"'") for item in value[1:-1].split(",")]
    return [item for item in items if item]


def parse_datasource(body: str, name: str, defaults: Datasource) -> Datasource:
    """Parse a datasource body; keys that are absent keep ``defaults``."""
    values = _parse_key_values(body)
    provider = values.get("provider")
    return Datasource(
        name=name,
        provider=_unquote(provider) if provider is not None else defaults.provider,
        url=values.get("url", defaults.url),
    )


def parse_generator(body: str, name: str, defaults: Generator) -> Generator:
    """Parse a generator body; keys that are absent keep ``defaults``."""
    values = _parse_key_values(body)

    preview_features = None
    if "previewFeatures" in values:
        preview_features = _parse_identifier_list(values["previewFeatures"])
    binary_targets = None
    if "binaryTargets" in values:
        binary_targets = _parse_identifier_list(values["binaryTargets"])

    provider = values.get("provider")
    output = values.get("output")

    return Generator(
        name=name,
        provider=_unquote(provider) if provider is not None else defaults.provider,
        output=_unquote(output) if output is not None else defaults.output,
        preview_features=(
            preview_features
            if preview_features is not None
            else list(defaults.preview_features)
        ),
        binary_targets=(
            binary_targets
            if binary_targets is not None
            else list(defaults.binary_targets)
        ),
    )


def _read_call(text: str, start: int) -> tuple[str | None, int]:
    """Read an optional ``(args)`` group starting at ``start``.

    Returns:
        Tuple of (argument text or None when there is no group, end index).
        An unclosed group takes the rest of the text.
    """
    if start >= len(text) or text[start] != "(":
        return None, start
    close = find_closing_paren(text, start)
    if close == -1:
        return text[start + 1 :], len(text)
    return text[start + 1 : close], close + 1


def parse_field_attributes(text: str) -> list[Attribute]:
    """Scan trailing field text for ``@name`` and ``@name(args)`` occurrences.

    A namespaced attribute such as ``@db.VarChar(255)`` becomes an attribute
    named ``db`` with one positional expression ``VarChar(255)``.
    """
    attributes: list[Attribute] = []
    position = 0

    while True:
        at = text.find("@", position)
        if at == -1:
            break

        match = ATTRIBUTE_NAME_PATTERN.match(text, at + 1)
        if match is None:
            position = at + 1
            continue

        name, member = match.group(1), match.group(2)
        args_text, position = _read_call(text, match.end())

        if member:
            call = member if args_text is None else f"{member}({args_text})"
            arguments = [AttributeArgument.expression(call)]
        else:
            arguments = scan_arguments(args_text or "")

        attributes.append(Attribute(name=name, arguments=arguments))

    return attributes


def parse_model_attribute(line: str) -> ModelAttribute | None:
    """Parse a ``@@type`` or ``@@type(args)`` line."""
    match = ATTRIBUTE_NAME_PATTERN.match(line, 2)
    if not line.startswith("@@") or match is None:
        return None
    args_text, _ = _read_call(line, match.end())
    arguments = scan_arguments(args_text or "", argument_cls=ModelAttributeArgument)
    return ModelAttribute(type=match.group(0), arguments=arguments)


def parse_field(line: str) -> Field | None:
    """Parse a field line, or return None if it is not one."""
    match = FIELD_PATTERN.match(line)
    if match is None:
        return None
    name, type_name, list_marker, optional_marker, rest = match.groups()
    return Field(
        name=name,
        type=type_name,
        is_list=bool(list_marker),
        is_required=not optional_marker,
        attributes=parse_field_attributes(rest or ""),
    )


def parse_model(body: str, name: str) -> Model:
    """Parse a model body into fields and model attributes."""
    model = Model(name=name)

    for raw_line in body.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("//"):
            continue

        if line.startswith("@@"):
            attribute = parse_model_attribute(line)
            if attribute is None:
                logger.debug("Skipping model attribute in %s: %r", name, line)
                continue
            model.attributes.append(attribute)
        else:
            field = parse_field(line)
            if field is None:
                logger.debug("Skipping unrecognized line in model %s: %r", name, line)
                continue
            model.fields.append(field)

    return model


def parse_enum(body: str, name: str) -> Enum:
    """Parse an enum body; every non-blank line is one value."""
    values = [
        line.strip()
        for line in body.splitlines()
        if line.strip() and not line.strip().startswith("//")
    ]
    return Enum(name=name, values=values)
