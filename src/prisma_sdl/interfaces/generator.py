"""Abstract base class for document generators."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from prisma_sdl.schemas.document import Document
from prisma_sdl.stores.local import FileSchemaStore

console = Console()

PREVIEW_LINES = 3


class Generator(ABC):
    """Turns a Document into one or more text files."""

    def __init__(
        self, validate_syntax: bool = True, format_output: bool = True
    ) -> None:
        """Initialize the generator.

        Args:
            validate_syntax: Re-check each file with ``validate_output``
                before it is written.
            format_output: Apply ``format_content`` to generated files.
        """
        self.validate_syntax = validate_syntax
        self.format_output = format_output

    @abstractmethod
    def generate(self, document: Document) -> dict[str, str]:
        """Generate files for a document.

        Returns:
            Mapping of file name to file text.
        """
        pass

    @abstractmethod
    def validate_output(self, content: str) -> tuple[bool, str]:
        """Check that generated text reads back as a document.

        Returns:
            ``(True, "")`` when valid, otherwise ``(False, reason)``.
        """
        pass

    def write_files(
        self,
        files: dict[Path, str],
        dry_run: bool = False,
        verbose: bool = True,
    ) -> tuple[list[Path], list[str]]:
        """Validate and write generated files.

        Files are still written when validation fails; the problems are
        returned so the caller can decide how to report them.

        Args:
            files: Destination path to text.
            dry_run: Report what would be written without touching disk.
            verbose: Print one status line per file.

        Returns:
            Tuple of (paths handled, validation problems).
        """
        handled: list[Path] = []
        problems: list[str] = []

        for path, text in files.items():
            if self.validate_syntax:
                ok, reason = self.validate_output(text)
                if not ok:
                    problems.append(f"{path.name}: {reason}")
                    if verbose:
                        console.print(
                            f"    [red]✗[/red] {escape(path.name)} did not "
                            f"parse back: {escape(reason)}"
                        )

            if dry_run:
                if verbose:
                    self._print_dry_run(path, text)
            else:
                FileSchemaStore(path).save(text)
                if verbose:
                    console.print(f"    [green]✓[/green] Wrote {escape(str(path))}")

            handled.append(path)

        return handled, problems

    def _print_dry_run(self, path: Path, text: str) -> None:
        lines = text.splitlines()
        console.print(
            f"    [yellow]Would write:[/yellow] {escape(str(path))} "
            f"[dim]({len(lines)} lines)[/dim]"
        )
        for line in lines[:PREVIEW_LINES]:
            console.print(f"    [dim]  {escape(line)}[/dim]")

    def format_content(self, content: str) -> str:
        """Hook for output normalization; returns ``content`` unchanged."""
        return content
