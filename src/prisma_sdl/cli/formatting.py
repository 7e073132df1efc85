"""Rich formatting utilities for CLI output.

Reusable Rich components for the prisma-sdl commands: syntax highlighting,
example panels, document summary tables and error/warning/success panels.
"""

from __future__ import annotations

from collections.abc import Sequence

from rich.console import Group, RenderableType
from rich.markup import escape
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table
from rich.text import Text

from prisma_sdl.schemas.config import Datasource, Generator
from prisma_sdl.schemas.document import Document, Field, Model
from prisma_sdl.types import FieldAttributeName, is_builtin_call


def syntax_highlight(
    code: str, lexer: str = "bash", line_numbers: bool = False
) -> Syntax:
    """Create a syntax-highlighted code block.

    Args:
        code: Code to highlight
        lexer: Pygments lexer name ("bash", "json", "diff", ...)
        line_numbers: Whether to include line numbers

    Returns:
        Syntax object
    """
    return Syntax(
        code,
        lexer,
        theme="monokai",
        line_numbers=line_numbers,
        background_color="default",
        word_wrap=True,
    )


def create_example_panel(
    title: str,
    examples: Sequence[tuple[str, str]],
    width: int = 78,
) -> Panel:
    """Create panel with shell examples.

    Args:
        title: Panel title
        examples: Sequence of (description, command) tuples
        width: Panel width in characters

    Returns:
        Panel containing formatted examples
    """
    parts: list[RenderableType] = []

    for i, (description, code) in enumerate(examples):
        parts.append(Text(f"{description}:", style="bold cyan"))
        parts.append(syntax_highlight(code))
        if i < len(examples) - 1:
            parts.append(Text(""))

    return Panel(
        Group(*parts),
        title=title,
        border_style="blue",
        width=width,
        expand=False,
    )


def create_options_table(options: Sequence[tuple[str, str, str, bool]]) -> Table:
    """Create table showing command options.

    Args:
        options: Sequence of (option_name, short_flag, description, required) tuples

    Returns:
        Table with formatted options
    """
    table = Table(
        title="Options",
        border_style="blue",
        width=78,
        show_header=True,
    )

    table.add_column("Option", style="cyan", width=20)
    table.add_column("Short", style="cyan", width=10)
    table.add_column("Description", width=35)
    table.add_column("Required", width=10)

    for option_name, short_flag, description, required in options:
        required_text = Text(
            "Yes" if required else "No", style="red" if required else "dim"
        )
        table.add_row(option_name, short_flag or "-", description, required_text)

    return table


def _field_type(field: Field) -> str:
    type_text = field.type
    if field.is_list:
        type_text += "[]"
    if not field.is_required:
        type_text += "?"
    return type_text


def _relation_targets(model: Model, document: Document) -> list[str]:
    targets = {f.type for f in model.fields if document.get_model(f.type) is not None}
    return sorted(targets)


def _enum_types(model: Model, document: Document) -> list[str]:
    types = {f.type for f in model.fields if document.get_enum(f.type) is not None}
    return sorted(types)


def create_document_table(document: Document) -> Table:
    """Create a summary table of the models and enums in a document."""
    table = Table(title="Schema", border_style="blue", show_header=True)

    table.add_column("Kind", style="cyan")
    table.add_column("Name", style="bold")
    table.add_column("Fields / Values", justify="right")
    table.add_column("Attributes", justify="right")
    table.add_column("Relations")
    table.add_column("Enums")

    for model in document.models:
        table.add_row(
            "model",
            model.name,
            str(len(model.fields)),
            str(len(model.attributes)),
            ", ".join(_relation_targets(model, document)) or "-",
            ", ".join(_enum_types(model, document)) or "-",
        )
    for enum in document.enums:
        table.add_row("enum", enum.name, str(len(enum.values)), "-", "-", "-")

    return table


def _default_value(field: Field) -> str:
    """Default value markup; built-in generator calls are highlighted."""
    attribute = field.get_attribute(FieldAttributeName.DEFAULT)
    if attribute is None or not attribute.arguments:
        return "-"
    value = attribute.arguments[0].raw
    if is_builtin_call(value):
        return f"[green]{escape(value)}[/green]"
    return escape(value)


def create_model_table(model: Model) -> Table:
    """Create a per-field table for one model."""
    table = Table(title=f"model {model.name}", border_style="dim", show_header=True)

    table.add_column("Field", style="bold")
    table.add_column("Type", style="cyan")
    table.add_column("Default")
    table.add_column("Attributes")

    for field in model.fields:
        attributes = " ".join(f"@{a.name}" for a in field.attributes)
        table.add_row(
            field.name,
            _field_type(field),
            _default_value(field),
            escape(attributes) or "-",
        )

    return table


def create_config_panel(datasource: Datasource, generator: Generator) -> Panel:
    """Create a panel describing the datasource and generator blocks."""
    lines = [
        f"[bold cyan]datasource[/bold cyan] {escape(datasource.name)}",
        f"  provider: {escape(datasource.provider)}",
        f"  url:      {escape(datasource.url)}",
        "",
        f"[bold cyan]generator[/bold cyan] {escape(generator.name)}",
        f"  provider: {escape(generator.provider)}",
    ]
    if generator.output:
        lines.append(f"  output:   {escape(generator.output)}")
    if generator.preview_features:
        lines.append(f"  preview:  {', '.join(generator.preview_features)}")
    if generator.binary_targets:
        lines.append(f"  targets:  {', '.join(generator.binary_targets)}")

    return Panel(
        "\n".join(lines),
        title="[bold white]Config[/bold white]",
        border_style="cyan",
        expand=False,
    )


def format_error(message: str, context: str | None = None) -> Panel:
    """Create formatted error panel.

    Args:
        message: Error message
        context: Optional context hint for resolution

    Returns:
        Panel with error formatting
    """
    content = f"[bold red]{escape(message)}[/bold red]"
    if context:
        content += f"\n\n[dim]{escape(context)}[/dim]"

    return Panel(
        content,
        title="[bold red]Error[/bold red]",
        border_style="red",
        width=78,
        expand=False,
    )


def format_warning(message: str, context: str | None = None) -> Panel:
    """Create formatted warning panel."""
    content = f"[bold yellow]{escape(message)}[/bold yellow]"
    if context:
        content += f"\n\n[dim]{escape(context)}[/dim]"

    return Panel(
        content,
        title="[bold yellow]Warning[/bold yellow]",
        border_style="yellow",
        width=78,
        expand=False,
    )


def format_success(message: str, details: str | None = None) -> Panel:
    """Create formatted success panel."""
    content = f"[bold green]✓ {escape(message)}[/bold green]"
    if details:
        content += f"\n\n[dim]{escape(details)}[/dim]"

    return Panel(
        content,
        title="[bold green]Success[/bold green]",
        border_style="green",
        width=78,
        expand=False,
    )
