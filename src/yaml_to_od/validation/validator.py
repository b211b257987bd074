"""Dry-run validation of an object dictionary."""

from __future__ import annotations

from typing import TYPE_CHECKING

from yaml_to_od.transform.transformer import ObjectDictionaryCompiler, StringLengthProvider
from yaml_to_od.validation.errors import BuildWarnings

if TYPE_CHECKING:
    from yaml_to_od.models.root import ObjectDictionary


class ObjectDictionaryValidator:
    """Report the build warnings a document would produce.

    Compiles the document into a throw-away IR and returns the collected
    warnings.
    """

    def __init__(
        self,
        strict: bool = False,
        string_length: StringLengthProvider | None = None,
    ) -> None:
        """Initialize validator.

        Args:
        ----
            strict: If True, treat warnings as errors.
            string_length: String length provider passed to the compiler.

        """
        self.strict = strict
        self._compiler = ObjectDictionaryCompiler(string_length=string_length)

    def validate(self, doc: ObjectDictionary) -> BuildWarnings:
        """Compile ``doc`` with a fresh collector and return what it reported."""
        result = BuildWarnings()
        self._compiler.compile(doc, warnings=result)
        return result

    def validate_and_raise(self, doc: ObjectDictionary) -> BuildWarnings:
        """Validate and raise exception in strict mode if anything was reported.

        Args:
        ----
            doc: The document to validate.

        Returns:
        -------
            BuildWarnings with all warnings found.

        Raises:
        ------
            ValidationError: If strict and warnings were found.

        """
        result = self.validate(doc)

        if self.strict and result.has_warnings:
            raise ValidationError(result)

        return result


class ValidationError(Exception):
    """Raised when strict validation finds build warnings."""

    def __init__(self, result: BuildWarnings) -> None:
        self.result = result
        super().__init__(f"Validation failed: {len(result)} warning(s)")

    def format_issues(self) -> str:
        """Format all warnings as a string."""
        return "\n".join(f"WARNING: {warning.message}" for warning in self.result.warnings)
