"""CLI utilities for prisma-sdl.

Rich-based formatting for the command line: help formatting, syntax
highlighting and document summaries.
"""

from prisma_sdl.cli.formatting import (
    create_config_panel,
    create_document_table,
    create_example_panel,
    create_model_table,
    create_options_table,
    format_error,
    format_success,
    format_warning,
    syntax_highlight,
)
from prisma_sdl.cli.help_formatter import RichCommand, RichHelpFormatter

__all__ = [
    "RichCommand",
    "RichHelpFormatter",
    "create_config_panel",
    "create_document_table",
    "create_example_panel",
    "create_model_table",
    "create_options_table",
    "format_error",
    "format_success",
    "format_warning",
    "syntax_highlight",
]
