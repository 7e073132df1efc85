"""Generator for canonical SDL text from documents."""

from __future__ import annotations

import logging

from prisma_sdl.constants import DEFAULT_SCHEMA_FILENAME, INDENT, SECTION_SEPARATOR
from prisma_sdl.errors import SDLParseError
from prisma_sdl.interfaces.generator import Generator as GeneratorInterface
from prisma_sdl.parsers.sdl import SDLParser
from prisma_sdl.schemas.arguments import AttributeArgument
from prisma_sdl.schemas.config import Datasource, Generator
from prisma_sdl.schemas.document import (
    Attribute,
    Document,
    Enum,
    Field,
    Model,
    ModelAttribute,
)
from prisma_sdl.types import FieldAttributeName

logger = logging.getLogger(__name__)


class SDLGenerator(GeneratorInterface):
    """Generates canonical SDL text from a Document.

    Generation is a pure function of the document: it never validates or
    mutates its input, so an incomplete document still produces best-effort
    text. Identity tokens are never emitted.
    """

    def __init__(
        self,
        filename: str = DEFAULT_SCHEMA_FILENAME,
        validate_syntax: bool = True,
        format_output: bool = True,
    ) -> None:
        """Initialize the generator.

        Args:
            filename: Name of the schema file produced by ``generate``.
            validate_syntax: Whether ``write_files`` re-parses output first.
            format_output: Whether ``generate`` ends files with a newline.
        """
        super().__init__(validate_syntax=validate_syntax, format_output=format_output)
        self.filename = filename

    def generate(self, document: Document) -> dict[str, str]:
        """Generate the schema file for a document.

        Args:
            document: Document to generate from.

        Returns:
            Dictionary mapping the schema filename to its content.
        """
        logger.debug(
            "Generating %s from %d models and %d enums",
            self.filename,
            len(document.models),
            len(document.enums),
        )
        content = self.generate_document(document)
        return {self.filename: self.format_content(content)}

    def validate_output(self, content: str) -> tuple[bool, str]:
        """Validate generated text by parsing it back.

        Args:
            content: SDL text to validate.

        Returns:
            Tuple of (is_valid, error_message).
        """
        parser = SDLParser(strict_mode=True)
        try:
            parser.parse_text(content)
        except SDLParseError as e:
            return False, f"Invalid schema syntax: {e}"
        if content.strip() and not parser.validate(content):
            return False, "No datasource, generator, model or enum block found"
        return True, ""

    def format_content(self, content: str) -> str:
        if self.format_output and content and not content.endswith("\n"):
            return content + "\n"
        return content

    def generate_document(self, document: Document) -> str:
        """Render a whole document.

        Sections appear in a fixed order (datasource, generator, models,
        enums) separated by one blank line. The result has no trailing
        newline.
        """
        sections = [
            self.generate_config(document.datasource, document.generator),
            *(self.generate_model(model) for model in document.models),
            *(self.generate_enum(enum) for enum in document.enums),
        ]
        return SECTION_SEPARATOR.join(section for section in sections if section)

    def generate_config(self, datasource: Datasource, generator: Generator) -> str:
        """Render the datasource and generator blocks."""
        return SECTION_SEPARATOR.join(
            [self.generate_datasource(datasource), self.generate_generator(generator)]
        )

    def generate_datasource(self, datasource: Datasource) -> str:
        return (
            f"datasource {datasource.name} {{\n"
            f'{INDENT}provider = "{datasource.provider}"\n'
            f"{INDENT}url      = {datasource.url}\n"
            "}"
        )

    def generate_generator(self, generator: Generator) -> str:
        lines = [f'{INDENT}provider = "{generator.provider}"']
        if generator.output is not None:
            lines.append(f'{INDENT}output = "{generator.output}"')
        if generator.preview_features:
            lines.append(
                f"{INDENT}previewFeatures = {_quoted_list(generator.preview_features)}"
            )
        # emitted even when empty; an absent key parses as the defaults
        lines.append(
            f"{INDENT}binaryTargets = {_quoted_list(generator.binary_targets)}"
        )
        body = "\n".join(lines)
        return f"generator {generator.name} {{\n{body}\n}}"

    def generate_model(self, model: Model) -> str:
        """Render a model block.

        Model attributes follow the field lines, each one preceded by a
        blank line.
        """
        body_lines = [self.render_field(field) for field in model.fields]
        model_attributes = "\n".join(
            self.render_model_attribute(attribute) for attribute in model.attributes
        )
        if model_attributes:
            body_lines.append(model_attributes)
        body = "\n".join(body_lines)
        return f"model {model.name} {{\n{body}\n}}"

    def generate_enum(self, enum: Enum) -> str:
        values = "\n".join(f"{INDENT}{value}" for value in enum.values)
        return f"enum {enum.name} {{\n{values}\n}}"

    def render_field(self, field: Field) -> str:
        """Render one field line, including its indent."""
        type_text = field.type
        if field.is_list:
            type_text += "[]"
        if not field.is_required:
            type_text += "?"

        attributes = " ".join(
            rendered
            for rendered in (self.render_attribute(a) for a in field.attributes)
            if rendered
        )
        line = f"{INDENT}{field.name} {type_text}"
        return f"{line} {attributes}" if attributes else line

    def render_argument(self, argument: AttributeArgument) -> str:
        """Render an argument value.

        Expressions and already-quoted literals are emitted as-is; any other
        literal is wrapped in double quotes.
        """
        raw = argument.raw
        if argument.is_expression or raw.startswith(('"', "'")):
            return raw
        return f'"{raw}"'

    def render_attribute(self, attribute: Attribute) -> str:
        """Render a field attribute.

        Returns:
            The attribute text, or an empty string for a ``db`` attribute
            without arguments.
        """
        args = ", ".join(self.render_argument(arg) for arg in attribute.arguments)

        if attribute.name == FieldAttributeName.DEFAULT:
            # Close a trailing call that lost its parenthesis.
            if "(" in args and not args.endswith(")"):
                return f"@{attribute.name}({args}))"
        elif attribute.name == FieldAttributeName.DB:
            return f"@db.{args}" if args else ""
        elif attribute.name == FieldAttributeName.RELATION:
            args = ", ".join(f"{arg.name}: {arg.raw}" for arg in attribute.arguments)

        return f"@{attribute.name}({args})" if args else f"@{attribute.name}"

    def render_model_attribute(self, attribute: ModelAttribute) -> str:
        """Render a model attribute with a leading newline and indent.

        Arguments are emitted by raw value only; names are not kept.
        """
        args = ", ".join(arg.raw for arg in attribute.arguments)
        suffix = f"({args})" if args else ""
        return f"\n{INDENT}@@{attribute.type}{suffix}"


def _quoted_list(items: list[str]) -> str:
    return "[" + ", ".join(f'"{item}"' for item in items) + "]"


def generate_document(document: Document) -> str:
    """Render a document as canonical SDL text."""
    return SDLGenerator().generate_document(document)


def generate_model(model: Model) -> str:
    """Render a single model block."""
    return SDLGenerator().generate_model(model)


def generate_enum(enum: Enum) -> str:
    """Render a single enum block."""
    return SDLGenerator().generate_enum(enum)
