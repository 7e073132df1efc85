"""Rich-rendered help for click commands.

``@cli.command(cls=RichCommand, examples=[(description, command), ...])``
keeps click's plain help text and appends an examples panel and an options
table below it.
"""

from __future__ import annotations

from collections.abc import Sequence
from io import StringIO
from typing import Any

import click
from rich.console import Console

from prisma_sdl.cli.formatting import create_example_panel, create_options_table

HELP_WIDTH = 80

OptionRow = tuple[str, str, str, bool]


def _option_rows(params: Sequence[click.Parameter]) -> list[OptionRow]:
    """(long flag, short flag, help, required) for every option."""
    rows: list[OptionRow] = []
    for param in params:
        if not isinstance(param, click.Option) or not param.opts:
            continue
        long_flag, *others = param.opts
        short_flag = others[0] if others else ""
        rows.append((long_flag, short_flag, param.help or "", param.required))
    return rows


class RichHelpFormatter(click.HelpFormatter):
    """click formatter whose output ends with Rich renderables."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        kwargs.setdefault("width", HELP_WIDTH)
        super().__init__(*args, **kwargs)
        self.examples: list[tuple[str, str]] = []
        self.option_rows: list[OptionRow] = []

    def add_examples(self, examples: Sequence[tuple[str, str]]) -> None:
        self.examples = list(examples)

    def add_options_table(self, rows: Sequence[OptionRow]) -> None:
        self.option_rows = list(rows)

    def getvalue(self) -> str:
        buffer = StringIO()
        console = Console(file=buffer, width=HELP_WIDTH, force_terminal=True)

        # click's text holds literal brackets such as [OPTIONS]
        console.print(super().getvalue(), soft_wrap=True, markup=False, highlight=False)

        extras = []
        if self.examples:
            extras.append(create_example_panel("Examples", self.examples))
        if self.option_rows:
            extras.append(create_options_table(self.option_rows))
        for renderable in extras:
            console.print()
            console.print(renderable)

        return buffer.getvalue()


class RichCommand(click.Command):
    """click command rendering its help with ``RichHelpFormatter``.

    Args:
        examples: ``(description, command line)`` pairs shown under the help.
    """

    def __init__(
        self,
        *args: Any,
        examples: Sequence[tuple[str, str]] | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(*args, **kwargs)
        self.examples = list(examples or [])

    def get_help(self, ctx: click.Context) -> str:
        formatter = RichHelpFormatter()
        self.format_help(ctx, formatter)
        return formatter.getvalue()

    def format_help(self, ctx: click.Context, formatter: click.HelpFormatter) -> None:
        super().format_help(ctx, formatter)
        if isinstance(formatter, RichHelpFormatter):
            formatter.add_examples(self.examples)
            formatter.add_options_table(_option_rows(self.get_params(ctx)))
