"""Command-line interface for prisma-sdl."""

from __future__ import annotations

import logging
from pathlib import Path

import click
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler

from prisma_sdl.cli.formatting import (
    create_config_panel,
    create_document_table,
    create_model_table,
    format_error,
    format_success,
    format_warning,
)
from prisma_sdl.cli.help_formatter import RichCommand
from prisma_sdl.config import ProjectConfig, load_config, load_last_run, save_last_run
from prisma_sdl.errors import ConfigError, ParseFailure, SchemaStoreError
from prisma_sdl.generators.sdl import SDLGenerator
from prisma_sdl.parsers.sdl import SDLParser
from prisma_sdl.preview import (
    CommandPreview,
    PreviewData,
    build_diff,
    format_command_parts,
    show_preview_and_confirm,
)
from prisma_sdl.schemas.document import Document
from prisma_sdl.stores.http import HttpSchemaStore
from prisma_sdl.stores.local import FileSchemaStore

console = Console()
err_console = Console(stderr=True)
logger = logging.getLogger(__name__)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _fail(message: str, context: str | None = None) -> click.ClickException:
    """Print an error panel and build the exception that ends the command."""
    console.print(format_error(message, context=context))
    return click.ClickException(message)


def _parse_schema(text: str, config: ProjectConfig, strict: bool) -> Document:
    """Parse schema text with the project defaults, or fail the command."""
    parser = SDLParser(
        strict_mode=strict,
        datasource=config.datasource,
        generator=config.generator,
    )
    result = parser.parse(text)
    if isinstance(result, ParseFailure):
        raise _fail("Could not parse schema", context=result.message)
    if not parser.validate(text):
        err_console.print(
            format_warning(
                "No datasource, generator, model or enum block found",
                context="The output will only contain the default config blocks.",
            )
        )
    return result


def _resolve_endpoint(endpoint: str | None, config: ProjectConfig) -> HttpSchemaStore:
    base_url = endpoint or config.endpoint
    if not base_url:
        raise _fail(
            "No endpoint configured",
            context="Pass --endpoint URL or set 'endpoint' in prisma-sdl.yml",
        )
    return HttpSchemaStore(base_url, endpoint=config.endpoint_path)


@click.group()
@click.version_option(package_name="prisma-sdl")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Path to prisma-sdl.yml (default: search from the current directory)",
)
@click.option("--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, config_path: Path | None, verbose: bool) -> None:
    """Parse, format and sync Prisma-style schema files.

    Converts between schema text and a structured document, and regenerates
    canonical schema text from it.

    Quick Start:

      1. Inspect a schema:
         $ prisma-sdl inspect -i prisma/schema.prisma

      2. Rewrite it in canonical form:
         $ prisma-sdl format -i prisma/schema.prisma

      3. Sync with a schema server:
         $ prisma-sdl pull --endpoint http://localhost:3000 -o schema.prisma
         $ prisma-sdl push --endpoint http://localhost:3000 -i schema.prisma

    For more information on a specific command:
      $ prisma-sdl COMMAND --help
    """
    _configure_logging(verbose)
    try:
        ctx.obj = load_config(config_path)
    except (ConfigError, FileNotFoundError) as e:
        raise _fail("Invalid project config", context=str(e))
    logger.debug("Using project config: %s", ctx.obj)


@cli.command(
    cls=RichCommand,
    examples=[
        ("Print the document as JSON", "prisma-sdl parse -i schema.prisma"),
        ("Write JSON to a file", "prisma-sdl parse -i schema.prisma -o schema.json"),
    ],
)
@click.option(
    "--input",
    "-i",
    "input_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    required=True,
    help="Schema file to parse",
)
@click.option(
    "--output",
    "-o",
    "output_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="JSON file to write (default: stdout)",
)
@click.option("--strict", is_flag=True, help="Fail on blocks that cannot be built")
@click.pass_obj
def parse(
    config: ProjectConfig, input_path: Path, output_path: Path | None, strict: bool
) -> None:
    """Parse a schema file into a JSON document.

    Identity tokens are not part of the output.
    """
    try:
        text = FileSchemaStore(input_path).load()
    except SchemaStoreError as e:
        raise _fail("Could not read schema", context=str(e))

    document = _parse_schema(text, config, strict)
    payload = document.model_dump_json(by_alias=True, indent=2)

    if output_path is None:
        click.echo(payload)
        return

    try:
        FileSchemaStore(output_path).save(payload + "\n")
    except SchemaStoreError as e:
        raise _fail("Could not write JSON", context=str(e))
    console.print(
        format_success(
            "Parsed schema",
            details=f"{len(document.models)} models, {len(document.enums)} enums "
            f"written to {output_path}",
        )
    )


@cli.command(
    cls=RichCommand,
    examples=[
        ("Print schema text", "prisma-sdl generate -i schema.json"),
        ("Write a schema file", "prisma-sdl generate -i schema.json -o schema.prisma"),
    ],
)
@click.option(
    "--input",
    "-i",
    "input_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    required=True,
    help="JSON document to generate from",
)
@click.option(
    "--output",
    "-o",
    "output_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Schema file to write (default: stdout)",
)
@click.option(
    "--dry-run",
    is_flag=True,
    help="Preview what would be written without writing files",
)
def generate(input_path: Path, output_path: Path | None, dry_run: bool) -> None:
    """Generate schema text from a JSON document."""
    try:
        document = Document.model_validate_json(input_path.read_text(encoding="utf-8"))
    except ValidationError as e:
        raise _fail(
            "Invalid document JSON",
            context=f"{e.error_count()} validation errors in {input_path}",
        )

    generator = SDLGenerator()
    files = generator.generate(document)

    if output_path is None:
        click.echo(files[generator.filename], nl=False)
        return

    try:
        _, validation_errors = generator.write_files(
            {output_path: files[generator.filename]}, dry_run=dry_run
        )
    except SchemaStoreError as e:
        raise _fail("Could not write schema", context=str(e))
    if validation_errors:
        raise _fail("Generated schema failed validation", "; ".join(validation_errors))


@cli.command(
    name="format",
    cls=RichCommand,
    examples=[
        ("Rewrite in place", "prisma-sdl format -i schema.prisma"),
        ("Check only (CI)", "prisma-sdl format -i schema.prisma --check"),
        ("Write elsewhere", "prisma-sdl format -i in.prisma -o out.prisma -y"),
    ],
)
@click.option(
    "--input",
    "-i",
    "input_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    required=True,
    help="Schema file to format",
)
@click.option(
    "--output",
    "-o",
    "output_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="File to write (default: the input file)",
)
@click.option(
    "--check",
    is_flag=True,
    help="Exit with code 1 if the file is not canonical; never writes",
)
@click.option(
    "--dry-run",
    is_flag=True,
    help="Show the diff without writing files",
)
@click.option(
    "--yes",
    "-y",
    is_flag=True,
    help="Skip confirmation prompt and write immediately",
)
@click.option("--strict", is_flag=True, help="Fail on blocks that cannot be built")
@click.pass_context
def format_schema(
    ctx: click.Context,
    input_path: Path,
    output_path: Path | None,
    check: bool,
    dry_run: bool,
    yes: bool,
    strict: bool,
) -> None:
    """Rewrite a schema file in canonical form.

    The file is parsed and generated again, which normalizes spacing,
    attribute quoting and block order. A diff is shown before writing.
    """
    config: ProjectConfig = ctx.ensure_object(ProjectConfig)
    output_path = output_path or input_path

    try:
        text = FileSchemaStore(input_path).load()
    except SchemaStoreError as e:
        raise _fail("Could not read schema", context=str(e))

    document = _parse_schema(text, config, strict)
    generator = SDLGenerator()
    canonical = generator.generate(document)[generator.filename]

    current = text
    if output_path != input_path:
        current = FileSchemaStore(output_path).load() if output_path.exists() else ""

    diff = build_diff(current, canonical, fromfile=str(output_path), tofile="canonical")

    if check:
        if diff:
            CommandPreview(console).show(
                PreviewData(
                    source=str(input_path),
                    destination=str(output_path),
                    model_count=len(document.models),
                    enum_count=len(document.enums),
                    diff=diff,
                )
            )
            console.print(f"[yellow]{input_path} is not canonical[/yellow]")
            ctx.exit(1)
        console.print(f"[green]✓[/green] {input_path} is canonical")
        return

    if not diff:
        console.print(f"[green]✓[/green] {output_path} is already canonical")
        return

    preview_data = PreviewData(
        source=str(input_path),
        destination=str(output_path),
        model_count=len(document.models),
        enum_count=len(document.enums),
        diff=diff,
        command_parts=format_command_parts(
            "prisma-sdl format",
            str(input_path),
            str(output_path),
            strict=strict,
            dry_run=dry_run,
        ),
    )

    if dry_run:
        CommandPreview(console).show(preview_data)
        console.print("[yellow]Dry-run mode - no files were written[/yellow]")
        return

    if not show_preview_and_confirm(preview_data, auto_confirm=yes):
        return

    try:
        _, validation_errors = generator.write_files(
            {output_path: canonical}, verbose=False
        )
    except SchemaStoreError as e:
        raise _fail("Could not write schema", context=str(e))
    if validation_errors:
        raise _fail("Generated schema failed validation", "; ".join(validation_errors))

    console.print(format_success("Schema formatted", details=f"Wrote {output_path}"))
    save_last_run(input_path, output_path, strict=strict)


@cli.command(
    cls=RichCommand,
    examples=[
        ("Summary table", "prisma-sdl inspect -i schema.prisma"),
        ("Include per-model fields", "prisma-sdl inspect -i schema.prisma -v"),
    ],
)
@click.option(
    "--input",
    "-i",
    "input_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    required=True,
    help="Schema file to inspect",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Show the fields of every model",
)
@click.pass_obj
def inspect(config: ProjectConfig, input_path: Path, verbose: bool) -> None:
    """Show the models, enums and config blocks of a schema file."""
    try:
        text = FileSchemaStore(input_path).load()
    except SchemaStoreError as e:
        raise _fail("Could not read schema", context=str(e))

    document = _parse_schema(text, config, strict=False)

    console.print(create_config_panel(document.datasource, document.generator))
    console.print(create_document_table(document))

    if verbose:
        for model in document.models:
            console.print(create_model_table(model))

    console.print(
        f"\n[bold]{len(document.models)}[/bold] models, "
        f"[bold]{len(document.enums)}[/bold] enums"
    )


@cli.command(
    cls=RichCommand,
    examples=[
        (
            "Download the schema",
            "prisma-sdl pull --endpoint http://localhost:3000 -o schema.prisma",
        ),
    ],
)
@click.option(
    "--endpoint",
    type=str,
    default=None,
    help="Schema server URL (default: 'endpoint' from prisma-sdl.yml)",
)
@click.option(
    "--output",
    "-o",
    "output_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="File to write (default: 'schema' from prisma-sdl.yml)",
)
@click.pass_obj
def pull(config: ProjectConfig, endpoint: str | None, output_path: Path | None) -> None:
    """Download the schema from the server and save it locally.

    The downloaded text must parse before it is written.
    """
    store = _resolve_endpoint(endpoint, config)
    output_path = output_path or config.schema_file

    console.print(f"[bold blue]Pulling schema from {store.describe()}[/bold blue]")
    try:
        text = store.load()
    except SchemaStoreError as e:
        raise _fail("Could not load schema", context=str(e))

    document = _parse_schema(text, config, strict=False)

    try:
        FileSchemaStore(output_path).save(text)
    except SchemaStoreError as e:
        raise _fail("Could not write schema", context=str(e))

    console.print(
        format_success(
            "Schema pulled",
            details=f"{len(document.models)} models, {len(document.enums)} enums "
            f"saved to {output_path}",
        )
    )


@cli.command(
    cls=RichCommand,
    examples=[
        (
            "Upload the canonical schema",
            "prisma-sdl push --endpoint http://localhost:3000 -i schema.prisma",
        ),
    ],
)
@click.option(
    "--endpoint",
    type=str,
    default=None,
    help="Schema server URL (default: 'endpoint' from prisma-sdl.yml)",
)
@click.option(
    "--input",
    "-i",
    "input_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Schema file to upload (default: 'schema' from prisma-sdl.yml)",
)
@click.option(
    "--yes",
    "-y",
    is_flag=True,
    help="Skip confirmation prompt and upload immediately",
)
@click.option("--strict", is_flag=True, help="Fail on blocks that cannot be built")
@click.pass_obj
def push(
    config: ProjectConfig,
    endpoint: str | None,
    input_path: Path | None,
    yes: bool,
    strict: bool,
) -> None:
    """Upload a schema file to the server in canonical form."""
    store = _resolve_endpoint(endpoint, config)
    input_path = input_path or config.schema_file

    try:
        text = FileSchemaStore(input_path).load()
    except SchemaStoreError as e:
        raise _fail("Could not read schema", context=str(e))

    document = _parse_schema(text, config, strict)
    generator = SDLGenerator()
    canonical = generator.generate(document)[generator.filename]

    console.print("[bold]Pushing schema:[/bold]")
    console.print(f"  From:   {input_path}")
    console.print(f"  To:     {store.describe()}")
    console.print(f"  Models: {len(document.models)}")
    console.print(f"  Enums:  {len(document.enums)}")
    console.print("")

    if not yes:
        import questionary

        proceed = questionary.confirm(
            "Upload this schema to the server?",
            default=True,
        ).ask()

        if not proceed:
            console.print("[yellow]Push cancelled[/yellow]")
            return

    try:
        result = store.save(canonical)
    except SchemaStoreError as e:
        context = str(e)
        if e.status_code is not None:
            context = f"{context} (HTTP {e.status_code})"
        raise _fail("Could not save schema", context=context)

    console.print(format_success("Schema pushed", details=result.message))


@cli.command(name="regenerate", cls=RichCommand)
@click.option(
    "--dry-run",
    is_flag=True,
    help="Show what would be run without writing files",
)
@click.option(
    "--yes",
    "-y",
    is_flag=True,
    help="Skip confirmation prompt and execute immediately",
)
def regenerate(dry_run: bool, yes: bool) -> None:
    """Re-run the last successful format command.

    The parameters are loaded from ~/.prisma-sdl/last_run.json.

    Examples:

      Re-run with confirmation prompt:
      $ prisma-sdl regenerate

      Skip confirmation and execute immediately:
      $ prisma-sdl regenerate --yes
    """
    last_run = load_last_run()

    if not last_run:
        console.print(
            "[red]No previous run found.[/red]\n\n"
            "Run this command first:\n"
            "  • prisma-sdl format -i <schema file>"
        )
        raise click.ClickException("No saved configuration")

    input_path = Path(last_run["input"])
    output_path = Path(last_run.get("output", last_run["input"]))
    strict = bool(last_run.get("strict", False))

    console.print("[bold]Regenerating with last parameters:[/bold]")
    console.print(f"  Input:  {input_path}")
    console.print(f"  Output: {output_path}")
    if strict:
        console.print("  Strict: yes")
    console.print("")

    if dry_run:
        console.print("[yellow]Dry-run mode - no files will be written[/yellow]")
        return

    if not input_path.exists():
        raise _fail("Last input file no longer exists", context=str(input_path))

    if not yes:
        import questionary

        proceed = questionary.confirm(
            "Execute format with these parameters?",
            default=True,
        ).ask()

        if not proceed:
            console.print("[yellow]Regeneration cancelled[/yellow]")
            return

    ctx = click.get_current_context()
    ctx.invoke(
        format_schema,
        input_path=input_path,
        output_path=output_path,
        check=False,
        dry_run=False,
        yes=True,
        strict=strict,
    )


def main() -> None:
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
