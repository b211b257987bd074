"""Readable messages for schema errors reported by pydantic."""

from __future__ import annotations

from pydantic_core import ErrorDetails

from yaml_to_od.models.types import ObjectType

_OBJECT_TYPES = ", ".join(t.value for t in ObjectType)

# Messages that replace pydantic's wording; types not listed keep pydantic's own text
MESSAGES: dict[str, str] = {
    "missing": "This field is required but was not provided",
    "extra_forbidden": "This field is not allowed in this context",
    "string_type": "Must be a string",
    "int_type": "Must be an integer",
    "int_parsing": "Must be an integer or a hex string such as 0x1000",
    "bool_type": "Must be true or false",
    "list_type": "Must be a list",
    "string_pattern_mismatch": "Must be a C identifier",
}

SUGGESTIONS: dict[str, str] = {
    "missing": "Add the required field to your YAML",
    "extra_forbidden": "Remove this field or check for typos",
    "union_tag_invalid": "Set object_type to VAR, ARRAY or RECORD",
    "int_parsing": "Write indices as integers or hex strings (0x1018)",
    "string_pattern_mismatch": "Use letters, digits and underscores only",
}


def translate_pydantic_error(error: ErrorDetails) -> str:
    """Describe one pydantic error in terms of the object dictionary document."""
    error_type = error["type"]
    ctx = error.get("ctx") or {}

    if error_type in ("literal_error", "enum"):
        return f"Must be one of: {ctx.get('expected', 'unknown')}"
    if error_type == "union_tag_invalid":
        return f"Unknown object type {ctx.get('tag', '')!r}, expected one of: {_OBJECT_TYPES}"
    if error_type == "value_error":
        return str(ctx.get("error", error["msg"]))
    return MESSAGES.get(error_type, error["msg"])


def format_pydantic_location(loc: tuple[str | int, ...]) -> str:
    """Format a pydantic location as a path into the document.

    The union tag pydantic inserts after a list position is dropped, since
    it is not a key of the document.

    Examples:
    --------
        >>> format_pydantic_location(("objects", 2, "RECORD", "sub_entries", 0, "name"))
        'objects[2].sub_entries[0].name'

    """
    path = ""
    for part in loc:
        if isinstance(part, int):
            path += f"[{part}]"
        elif part in ObjectType.__members__:
            continue
        else:
            path += f".{part}" if path else part
    return path


def get_suggestion_for_error(error: ErrorDetails) -> str | None:
    """Get a hint for fixing the error, if one is known."""
    if error["type"] in ("literal_error", "enum"):
        return f"Use one of the allowed values: {(error.get('ctx') or {}).get('expected', '')}"
    return SUGGESTIONS.get(error["type"])
