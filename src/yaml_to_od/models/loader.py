"""Reading object dictionary documents from YAML or JSON.

JSON is a subset of YAML, so both go through ``yaml.safe_load``. Files are
checked for suffix and shape before the pydantic models see them; schema
problems are left to pydantic.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from yaml_to_od.models.root import ObjectDictionary

logger = logging.getLogger(__name__)

SUPPORTED_SUFFIXES = (".yaml", ".yml", ".json")


class LoaderError(Exception):
    """An object dictionary file could not be read or is not a mapping."""

    def __init__(self, message: str, path: Path | None = None) -> None:
        self.path = path
        super().__init__(f"{path}: {message}" if path else message)


def parse_document(text: str, path: Path | None = None) -> dict[str, Any]:
    """Parse document text and check that its root is a mapping.

    Args:
    ----
        text: YAML or JSON text.
        path: File the text came from, only used in error messages.

    Returns:
    -------
        The root mapping.

    Raises:
    ------
        LoaderError: On a syntax error, an empty document or a non-mapping root.

    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise LoaderError(f"YAML parsing error: {e}", path) from e

    if data is None:
        raise LoaderError("File is empty", path)
    if not isinstance(data, dict):
        raise LoaderError(f"Expected dictionary at root level, got {type(data).__name__}", path)
    return data


def load_yaml_file(path: Path) -> dict[str, Any]:
    """Read a ``.yaml``, ``.yml`` or ``.json`` file into its root mapping.

    Raises:
    ------
        LoaderError: If the file is missing, has another suffix, cannot be
            read or does not hold a mapping.

    """
    if not path.exists():
        raise LoaderError(f"File not found: {path}", path)
    if not path.is_file():
        raise LoaderError(f"Not a file: {path}", path)

    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise LoaderError(
            f"Unsupported file extension: {suffix}. Use {', '.join(SUPPORTED_SUFFIXES)}",
            path,
        )

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise LoaderError(f"File read error: {e}", path) from e
    return parse_document(text, path)


def loads_object_dictionary(text: str) -> ObjectDictionary:
    """Build an ObjectDictionary from YAML or JSON text."""
    return ObjectDictionary.model_validate(parse_document(text))


def load_object_dictionary(path: Path) -> ObjectDictionary:
    """Load an object dictionary file.

    Raises:
    ------
        LoaderError: If the file cannot be read.
        pydantic.ValidationError: If the document does not match the schema.

    """
    doc = ObjectDictionary.model_validate(load_yaml_file(path))
    logger.debug(
        "Loaded %d objects (%d disabled) from %s",
        len(doc.objects),
        len(doc.objects) - len(doc.enabled_entries()),
        path,
    )
    return doc


def _schema_messages(error: ValidationError) -> list[str]:
    messages = []
    for detail in error.errors():
        location = ".".join(str(part) for part in detail["loc"])
        messages.append(f"{location}: {detail['msg']}" if location else detail["msg"])
    return messages


def validate_object_dictionary(path: Path) -> list[str]:
    """Check a file without raising.

    Returns:
    -------
        ``location: message`` strings, empty when the document loads cleanly.

    """
    try:
        data = load_yaml_file(path)
    except LoaderError as e:
        return [str(e)]

    try:
        ObjectDictionary.model_validate(data)
    except ValidationError as e:
        return _schema_messages(e)
    return []
