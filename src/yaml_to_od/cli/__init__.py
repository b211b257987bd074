"""CLI module for yaml-to-od."""

from yaml_to_od.cli.error_formatter import WarningFormatter, WarningTable, WarningTree
from yaml_to_od.cli.exception_handler import handle_exceptions
from yaml_to_od.cli.pydantic_errors import (
    format_pydantic_location,
    get_suggestion_for_error,
    translate_pydantic_error,
)
from yaml_to_od.cli_main import app

__all__ = [
    "app",
    "WarningFormatter",
    "WarningTable",
    "WarningTree",
    "handle_exceptions",
    "format_pydantic_location",
    "get_suggestion_for_error",
    "translate_pydantic_error",
]
