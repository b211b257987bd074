"""Command-line interface for the yaml-to-od compiler."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from yaml_to_od import __version__
from yaml_to_od.models import (
    ObjectDictionary,
    load_object_dictionary,
    validate_object_dictionary,
)
from yaml_to_od.models.types import ObjectType

# Create Typer app
app = typer.Typer(
    name="yaml-to-od",
    help="Compile CANopen object dictionary YAML to CANopenNode V4 sources.",
    add_completion=True,
    no_args_is_help=True,
)

# Rich consoles for output
console = Console()
error_console = Console(stderr=True, style="bold red")

OUTPUT_FORMATS = ("text", "table", "tree")


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"yaml-to-od version {__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    """Route library logging through Rich; debug output only when verbose."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(name)s: %(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-v",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Compile CANopen object dictionary YAML/JSON to OD.h and OD.c.

    This tool validates object dictionary description files and generates
    the C sources used by the CANopenNode V4 stack.
    """


@app.command()
def validate(
    input_file: Annotated[
        Path,
        typer.Argument(
            help="Input YAML/JSON file to validate.",
            exists=True,
            file_okay=True,
            dir_okay=False,
            readable=True,
            resolve_path=True,
        ),
    ],
    strict: Annotated[
        bool,
        typer.Option(
            "--strict",
            help="Treat build warnings as errors.",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Only output errors, no success messages.",
        ),
    ] = False,
    output_format: Annotated[
        str,
        typer.Option(
            "--format",
            "-f",
            help="Output format for build warnings: text, table, tree.",
        ),
    ] = "text",
) -> None:
    """Validate a YAML/JSON object dictionary file.

    Checks the file against the schema, then compiles it without writing
    anything and reports the build warnings the compiler would emit.

    Examples
    --------
        yaml-to-od validate device.yaml
        yaml-to-od validate device.yaml --strict
        yaml-to-od validate device.yaml --format table

    """
    from yaml_to_od.cli.error_formatter import WarningFormatter, WarningTable, WarningTree
    from yaml_to_od.validation.validator import ObjectDictionaryValidator

    if output_format not in OUTPUT_FORMATS:
        error_console.print(
            f"\n[bold red]✗ Invalid format: {output_format}[/bold red]\n"
            f"Supported: {', '.join(OUTPUT_FORMATS)}"
        )
        raise typer.Exit(code=1)

    # First validate schema
    errors = validate_object_dictionary(input_file)

    if errors:
        error_console.print(f"\n[bold red]✗ Validation failed for {input_file.name}[/bold red]\n")

        table = Table(title="Validation Errors", show_header=True)
        table.add_column("#", style="dim", width=4)
        table.add_column("Location", style="cyan")
        table.add_column("Error", style="red")

        for i, error in enumerate(errors, 1):
            if ": " in error:
                loc, msg = error.split(": ", 1)
            else:
                loc, msg = "", error
            table.add_row(str(i), loc, msg)

        console.print(table)
        raise typer.Exit(code=1)

    # Schema valid - compile once to collect build warnings
    doc = load_object_dictionary(input_file)
    result = ObjectDictionaryValidator(strict=strict).validate(doc)

    if result.has_warnings:
        if output_format == "table":
            WarningTable(error_console).print_result(result)
        elif output_format == "tree":
            WarningTree(error_console).print_result(result)
        else:
            WarningFormatter(error_console).format_result(result, input_file, as_errors=strict)

        if strict:
            raise typer.Exit(code=1)

    if not quiet:
        if result.has_warnings:
            console.print(
                f"\n[bold yellow]⚠ {input_file.name} is valid with warnings[/bold yellow]\n"
            )
        else:
            console.print(f"\n[bold green]✓ {input_file.name} is valid[/bold green]\n")


@app.command()
def generate(
    input_file: Annotated[
        Path,
        typer.Argument(
            help="Input YAML/JSON file to compile.",
            exists=True,
            file_okay=True,
            dir_okay=False,
            readable=True,
            resolve_path=True,
        ),
    ],
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output folder. Defaults to the folder of the input file.",
            file_okay=False,
            resolve_path=True,
        ),
    ] = None,
    filename: Annotated[
        str,
        typer.Option(
            "--filename",
            help="Base name of the generated .h/.c files.",
        ),
    ] = "OD",
    od_name: Annotated[
        str | None,
        typer.Option(
            "--name",
            "-n",
            help="Symbol prefix of the generated objects. Defaults to the document name.",
        ),
    ] = None,
    string_length: Annotated[
        int | None,
        typer.Option(
            "--string-length",
            min=1,
            help="Minimum number of elements reserved for string entries (default 8).",
        ),
    ] = None,
    strict: Annotated[
        bool,
        typer.Option(
            "--strict",
            help="Refuse to write output when build warnings were emitted.",
        ),
    ] = False,
    force: Annotated[
        bool,
        typer.Option(
            "--force",
            help="Overwrite output files if they exist.",
        ),
    ] = False,
    dry_run: Annotated[
        bool,
        typer.Option(
            "--dry-run",
            help="Compile without writing output files.",
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-V",
            help="Show detailed compilation progress.",
        ),
    ] = False,
) -> None:
    """Compile a YAML/JSON object dictionary to OD.h and OD.c.

    Build warnings are printed but do not stop the generation unless
    --strict is given.

    Examples
    --------
        yaml-to-od generate device.yaml
        yaml-to-od generate device.yaml -o generated --force
        yaml-to-od generate device.yaml --name OD_DEV --filename OD_DEV
        yaml-to-od generate device.yaml --dry-run --verbose

    """
    from yaml_to_od.cli.exception_handler import handle_exceptions

    configure_logging(verbose)
    folder = output if output is not None else input_file.parent

    handle_exceptions(verbose)(_generate)(
        input_file,
        folder,
        filename,
        od_name,
        string_length,
        strict,
        force,
        dry_run,
    )


def _generate(
    input_file: Path,
    folder: Path,
    filename: str,
    od_name: str | None,
    string_length: int | None,
    strict: bool,
    force: bool,
    dry_run: bool,
) -> None:
    from yaml_to_od.cli.error_formatter import WarningFormatter
    from yaml_to_od.converters import ODSourceWriter
    from yaml_to_od.transform.transformer import ObjectDictionaryCompiler, fixed_string_length
    from yaml_to_od.validation.errors import BuildWarnings
    from yaml_to_od.validation.validator import ValidationError

    targets = [folder / f"{filename}.h", folder / f"{filename}.c"]
    existing = [path for path in targets if path.exists()]
    if existing and not force and not dry_run:
        error_console.print(
            f"\n[bold red]✗ Output file already exists: {existing[0]}[/bold red]\n"
            "Use --force to overwrite."
        )
        raise typer.Exit(code=1)

    doc = load_object_dictionary(input_file)

    provider = fixed_string_length(string_length) if string_length is not None else None

    warnings = BuildWarnings()
    ir_od = ObjectDictionaryCompiler(string_length=provider).compile(
        doc, warnings=warnings, od_name=od_name
    )

    if warnings.has_warnings:
        if strict:
            raise ValidationError(warnings)
        WarningFormatter(error_console).format_result(warnings, input_file)

    writer = ODSourceWriter()
    if dry_run:
        header, source = writer.write_strings(ir_od, filename)
        console.print(
            f"\n[bold green]✓ Would write {len(header):,} + {len(source):,} characters "
            f"to {targets[0]} and {targets[1]}[/bold green]\n"
        )
        return

    header_path, source_path = writer.write(ir_od, folder, filename)
    console.print(f"\n[bold green]✓ Wrote {header_path} and {source_path}[/bold green]")
    console.print(f"  [dim]{len(ir_od.entries)} entries in {ir_od.name}[/dim]\n")


@app.command()
def info(
    input_file: Annotated[
        Path,
        typer.Argument(
            help="Input YAML/JSON file to inspect.",
            exists=True,
            file_okay=True,
            dir_okay=False,
            readable=True,
            resolve_path=True,
        ),
    ],
) -> None:
    """Display a summary of an object dictionary file.

    Examples
    --------
        yaml-to-od info device.yaml

    """
    try:
        doc = load_object_dictionary(input_file)
    except Exception as e:
        error_console.print(f"\n[bold red]✗ Failed to read file: {e}[/bold red]\n")
        raise typer.Exit(code=1) from None

    console.print(
        Panel.fit(
            f"[bold]CANopen Object Dictionary[/bold]\nFile: {input_file}",
            title="File Info",
        )
    )
    _print_summary(doc)


def _print_summary(doc: ObjectDictionary) -> None:
    """Print a summary of the object dictionary document."""
    table = Table(title="Document Summary", show_header=False, box=None)
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="white")

    enabled = doc.enabled_entries()

    table.add_row("Name", doc.name)
    table.add_row("Objects", str(len(doc.objects)))
    table.add_row("Enabled", str(len(enabled)))
    table.add_row("Disabled", str(len(doc.objects) - len(enabled)))

    table.add_row("", "")  # Spacer
    for object_type in ObjectType:
        count = sum(1 for entry in enabled if entry.object_type == object_type)
        table.add_row(object_type.value, str(count))

    table.add_row("", "")  # Spacer
    locations = sorted({entry.storage_location for entry in enabled})
    table.add_row("Storage groups", ", ".join(locations) or "-")

    if enabled:
        table.add_row("Index range", f"0x{enabled[0].index:04X} - 0x{enabled[-1].index:04X}")

    console.print(table)


if __name__ == "__main__":
    app()
