"""Build warning types and the warning sink."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol


class WarningClass(Enum):
    """Category of a generator warning."""

    BUILD = "build"


@dataclass(frozen=True)
class BuildWarning:
    """A single problem found while compiling the object dictionary."""

    message: str
    """Human-readable message, prefixed with the object index."""

    severity: WarningClass = WarningClass.BUILD
    """Warning category; always BUILD for the compiler."""

    def __str__(self) -> str:
        """Format warning as string."""
        return f"[{self.severity.value.upper()}] {self.message}"


class WarningSink(Protocol):
    """Anything that accepts build warnings."""

    def add_warning(self, message: str) -> None:
        """Append one warning."""
        ...


@dataclass
class BuildWarnings:
    """List-backed warning sink, kept in emission order."""

    warnings: list[BuildWarning] = field(default_factory=list)

    @property
    def messages(self) -> list[str]:
        """Get the plain warning messages."""
        return [w.message for w in self.warnings]

    @property
    def has_warnings(self) -> bool:
        """Check if anything was reported."""
        return len(self.warnings) > 0

    def add_warning(self, message: str) -> None:
        """Add a build warning."""
        self.warnings.append(BuildWarning(message=message))

    def merge(self, other: BuildWarnings) -> None:
        """Merge another collector into this one."""
        self.warnings.extend(other.warnings)

    def __len__(self) -> int:
        return len(self.warnings)
