"""Build warning formatting with Rich."""

from __future__ import annotations

import re
from pathlib import Path
from typing import TYPE_CHECKING

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from rich.tree import Tree

if TYPE_CHECKING:
    from yaml_to_od.validation.errors import BuildWarning, BuildWarnings

_LOCATION_PATTERN = re.compile(r"^Error in (0x[0-9A-Fa-f]+): (.*)$", re.DOTALL)


def split_warning(warning: BuildWarning) -> tuple[str, str]:
    """Split a warning into its object index and the remaining message.

    Examples:
    --------
        >>> split_warning(BuildWarning("Error in 0x1003: extIO must be enabled"))
        ('0x1003', 'extIO must be enabled')

    """
    match = _LOCATION_PATTERN.match(warning.message)
    if match is None:
        return "general", warning.message
    return match.group(1), match.group(2)


class WarningFormatter:
    """Formats build warnings for terminal display."""

    def __init__(self, console: Console | None = None) -> None:
        """Initialize formatter.

        Args:
        ----
            console: Rich Console for output.

        """
        self.console = console or Console(stderr=True)

    def format_result(
        self,
        result: BuildWarnings,
        source_path: Path | None = None,
        as_errors: bool = False,
    ) -> None:
        """Format and print the collected warnings.

        Args:
        ----
            result: The warnings to format.
            source_path: Path to source file (for display).
            as_errors: Render the warnings as errors (strict mode).

        """
        if not result.has_warnings:
            self._print_success("Validation passed")
            return

        color = "red" if as_errors else "yellow"
        label = "ERROR" if as_errors else "WARNING"

        self.console.print(self._build_summary(len(result), source_path, color, as_errors))
        self.console.print()

        for warning in result.warnings:
            location, message = split_warning(warning)
            self.console.print(f"[{color} bold]{label}[/{color} bold] {message}")
            self.console.print(f"  [dim]at {location}[/dim]")

        self.console.print()
        self.console.print(f"[{color}]{len(result)} warning(s)[/{color}]")

    def _build_summary(
        self,
        count: int,
        source_path: Path | None,
        color: str,
        as_errors: bool,
    ) -> Panel:
        """Build summary panel."""
        title = "Validation Failed" if as_errors else "Build Warnings"

        content = Text()
        if source_path:
            content.append(f"File: {source_path}\n", style="dim")
        content.append(f"Warnings: {count}", style=color)

        return Panel(content, title=title, border_style=color)

    def _print_success(self, message: str) -> None:
        """Print success message."""
        self.console.print(f"[green]✓ {message}[/green]")


class WarningTree:
    """Display warnings as a tree grouped by object index."""

    def __init__(self, console: Console | None = None) -> None:
        """Initialize warning tree formatter.

        Args:
        ----
            console: Rich Console for output.

        """
        self.console = console or Console(stderr=True)

    def print_result(self, result: BuildWarnings) -> None:
        """Print warnings as tree."""
        tree = Tree("[bold]Build Warnings[/bold]")

        by_object: dict[str, list[str]] = {}
        for warning in result.warnings:
            location, message = split_warning(warning)
            by_object.setdefault(location, []).append(message)

        for location, messages in sorted(by_object.items()):
            node = tree.add(f"[cyan]{location}[/cyan] ({len(messages)} warnings)")
            for message in messages:
                node.add(f"[yellow]{message}[/yellow]")

        self.console.print(tree)


class WarningTable:
    """Display warnings as a table."""

    def __init__(self, console: Console | None = None) -> None:
        """Initialize warning table formatter.

        Args:
        ----
            console: Rich Console for output.

        """
        self.console = console or Console(stderr=True)

    def print_result(self, result: BuildWarnings) -> None:
        """Print warnings as table."""
        table = Table(title="Build Warnings")

        table.add_column("#", style="dim", width=4)
        table.add_column("Object", style="cyan", width=8)
        table.add_column("Message")

        for i, warning in enumerate(result.warnings, 1):
            location, message = split_warning(warning)
            table.add_row(str(i), location, message)

        self.console.print(table)
