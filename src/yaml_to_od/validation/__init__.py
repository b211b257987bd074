"""Build warnings and validation of object dictionaries.

The dry-run validator lives in ``yaml_to_od.validation.validator``; it
depends on the compiler, which itself reports into the types below.
"""

from yaml_to_od.validation.errors import (
    BuildWarning,
    BuildWarnings,
    WarningClass,
    WarningSink,
)

__all__ = [
    "BuildWarning",
    "BuildWarnings",
    "WarningClass",
    "WarningSink",
]
