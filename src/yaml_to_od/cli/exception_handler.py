"""Turn exceptions raised by CLI commands into readable output and exit code 1."""

from __future__ import annotations

import traceback
from collections.abc import Callable
from functools import wraps
from typing import TypeVar

import typer
from pydantic import ValidationError as PydanticValidationError
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from yaml_to_od.models.loader import LoaderError
from yaml_to_od.validation.validator import ValidationError

T = TypeVar("T")

console = Console(stderr=True)


def handle_exceptions(
    verbose: bool = False,
) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """Wrap a command so that failures end in a message and exit code 1.

    ``typer.Exit`` raised by the command passes through unchanged.

    Args:
    ----
        verbose: Print the full pydantic error or traceback as well.

    Returns:
    -------
        Decorator function.

    """

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @wraps(func)
        def wrapper(*args: object, **kwargs: object) -> T:
            try:
                return func(*args, **kwargs)
            except typer.Exit:
                raise
            except ValidationError as e:
                from yaml_to_od.cli.error_formatter import WarningFormatter

                WarningFormatter(console).format_result(e.result, as_errors=True)
            except PydanticValidationError as e:
                _print_schema_errors(e, verbose)
            except LoaderError as e:
                _error_panel("Load Error", str(e))
            except FileNotFoundError as e:
                _error_panel("Error", f"File not found: {e.filename or 'unknown'}")
            except PermissionError as e:
                _error_panel(
                    "Error",
                    f"Permission denied: {e.filename or 'unknown'}\n\n"
                    "Check that the output folder is writable.",
                )
            except Exception as e:
                _error_panel("Error", f"An unexpected error occurred:\n{e}")
                if verbose:
                    console.print(traceback.format_exc())
                else:
                    console.print("[dim]Use --verbose for full traceback[/dim]")
            raise typer.Exit(1)

        return wrapper

    return decorator


def _error_panel(title: str, body: str) -> None:
    console.print(Panel(f"[red]{body}[/red]", title=title, border_style="red"))


def _print_schema_errors(error: PydanticValidationError, verbose: bool) -> None:
    """List schema errors with their location and a hint where one is known."""
    from yaml_to_od.cli.pydantic_errors import (
        format_pydantic_location,
        get_suggestion_for_error,
        translate_pydantic_error,
    )

    console.print("[red bold]Schema Validation Failed[/red bold]")

    table = Table(show_header=True, header_style="bold")
    table.add_column("Location", style="cyan")
    table.add_column("Problem", style="red")
    table.add_column("Hint", style="green")

    for detail in error.errors():
        table.add_row(
            format_pydantic_location(detail["loc"]) or "(document)",
            translate_pydantic_error(detail),
            get_suggestion_for_error(detail) or "",
        )
    console.print(table)

    if verbose:
        console.print(str(error))
