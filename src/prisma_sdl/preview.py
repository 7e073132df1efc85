"""Preview and confirmation utilities for CLI commands."""

from __future__ import annotations

import difflib
from dataclasses import dataclass, field
from typing import Any

from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax

console = Console()


@dataclass
class PreviewData:
    """Structured data for a write preview.

    Attributes:
        source: Where the current text came from (path or URL)
        destination: Where the new text will be written (path or URL)
        model_count: Number of models in the new document
        enum_count: Number of enums in the new document
        diff: Unified diff from the current text to the new text
        command_parts: List of command components for display
        additional_config: Dict of additional configuration options
    """

    source: str
    destination: str
    model_count: int
    enum_count: int
    diff: str
    command_parts: list[str] = field(default_factory=list)
    additional_config: dict[str, Any] = field(default_factory=dict)

    @property
    def has_changes(self) -> bool:
        return bool(self.diff)


def build_diff(
    current: str,
    proposed: str,
    fromfile: str = "current",
    tofile: str = "proposed",
) -> str:
    """Build a unified diff between two texts.

    Returns:
        The diff text, or an empty string when the texts are identical.
    """
    lines = difflib.unified_diff(
        current.splitlines(keepends=True),
        proposed.splitlines(keepends=True),
        fromfile=fromfile,
        tofile=tofile,
    )
    return "".join(lines)


def count_changed_lines(diff: str) -> tuple[int, int]:
    """Count added and removed lines in a unified diff.

    Returns:
        Tuple of (added, removed), not counting the file headers.
    """
    added = removed = 0
    for line in diff.splitlines():
        if line.startswith(("+++", "---")):
            continue
        if line.startswith("+"):
            added += 1
        elif line.startswith("-"):
            removed += 1
    return added, removed


def format_command_parts(
    command_name: str,
    input_path: str,
    output_path: str | None = None,
    strict: bool = False,
    dry_run: bool = False,
) -> list[str]:
    """Format a format command into parts for display.

    Args:
        command_name: Base command (e.g., "prisma-sdl format")
        input_path: Input schema path
        output_path: Output path, when different from the input
        strict: Strict parsing flag
        dry_run: Dry run flag

    Returns:
        List of command parts for line-wrapped display
    """
    parts = [command_name, f"-i {input_path}"]
    if output_path and output_path != input_path:
        parts.append(f"-o {output_path}")
    if strict:
        parts.append("--strict")
    if dry_run:
        parts.append("--dry-run")
    return parts


class CommandPreview:
    """Generates rich-formatted preview panels for write commands."""

    def __init__(self, console: Console | None = None) -> None:
        """Initialize preview generator.

        Args:
            console: Rich console for output (creates new if None)
        """
        self.console = console or Console()

    def render_preview_panel(self, preview_data: PreviewData) -> Panel:
        """Render a preview panel summarizing the pending write."""
        added, removed = count_changed_lines(preview_data.diff)

        lines = [
            f"[bold cyan]Source:[/bold cyan]      {preview_data.source}",
            f"[bold cyan]Destination:[/bold cyan] {preview_data.destination}",
        ]

        if preview_data.additional_config:
            lines.append("")
            lines.append("[bold cyan]Configuration:[/bold cyan]")
            for key, value in preview_data.additional_config.items():
                lines.append(f"  • {key}: {value}")

        lines.append("")
        lines.append("[bold cyan]Document:[/bold cyan]")
        lines.append(f"  • [green]{preview_data.model_count}[/green] models")
        lines.append(f"  • [green]{preview_data.enum_count}[/green] enums")
        if preview_data.has_changes:
            lines.append(
                f"  • [green]+{added}[/green] / [red]-{removed}[/red] lines changed"
            )
        else:
            lines.append("  • [dim]no changes[/dim]")

        return Panel(
            "\n".join(lines),
            title="[bold white]Write Preview[/bold white]",
            border_style="cyan",
            padding=(1, 2),
        )

    def render_diff(self, diff: str) -> Syntax:
        """Render a unified diff with syntax highlighting."""
        return Syntax(
            diff.rstrip("\n"),
            "diff",
            theme="monokai",
            line_numbers=False,
            word_wrap=True,
        )

    def render_command_syntax(self, command_parts: list[str]) -> Syntax:
        command_text = " \\\n  ".join(command_parts)
        return Syntax(
            command_text,
            "bash",
            theme="monokai",
            line_numbers=False,
            word_wrap=True,
        )

    def show(self, preview_data: PreviewData) -> None:
        """Display the preview panel, the diff and the command, if any."""
        self.console.print(self.render_preview_panel(preview_data))

        if preview_data.has_changes:
            self.console.print()
            self.console.print(self.render_diff(preview_data.diff))

        if preview_data.command_parts:
            self.console.print()
            self.console.print(self.render_command_syntax(preview_data.command_parts))


def show_preview_and_confirm(
    preview_data: PreviewData,
    auto_confirm: bool = False,
) -> bool:
    """Show preview panel and prompt for confirmation.

    Args:
        preview_data: Structured preview data
        auto_confirm: Skip confirmation prompt (--yes flag)

    Returns:
        True if user confirmed (or auto_confirm=True), False otherwise
    """
    preview = CommandPreview(console)
    preview.show(preview_data)

    if auto_confirm:
        console.print("\n[yellow]Auto-confirming (--yes flag)[/yellow]")
        return True

    console.print()
    response = console.input(
        "[bold yellow]Write these changes?[/bold yellow] [dim][Y/n][/dim]: "
    )

    # Empty response means yes
    confirmed = response.strip().lower() in ("y", "yes", "")

    if not confirmed:
        console.print("[yellow]Write cancelled[/yellow]")

    return confirmed
