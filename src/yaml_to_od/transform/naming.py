"""Convert free-form parameter names into C identifiers."""

from __future__ import annotations

import re

_NON_WORD = re.compile(r"\W+", re.ASCII)


def make_cname(name: str | None) -> str:
    """Turn a parameter name into a camelCase C identifier.

    Words are split on runs of non-word characters and capitalized. An
    underscore separates two words when both the previous character and
    the next word start are upper case, so acronyms do not run together.
    The first character is lower-cased only when the second one is lower
    case already.

    Args:
    ----
        name: Parameter name as written in the object dictionary.

    Returns:
    -------
        The identifier, or an empty string for an empty name.

    Examples:
    --------
        >>> make_cname("Device Type")
        'deviceType'
        >>> make_cname("COB-ID SYNC message")
        'COB_ID_SYNCMessage'
        >>> make_cname("X")
        'x'

    """
    if not name:
        return ""

    output = ""
    last_char = " "
    for token in _NON_WORD.split(name):
        if not token:
            continue

        if last_char.isupper() and token[0].isupper():
            output += "_"

        if len(token) > 1:
            output += token[0].upper() + token[1:]
        else:
            output += token

        last_char = output[-1]

    if len(output) > 1:
        if output[1].islower():
            output = output[0].lower() + output[1:]
    else:
        output = output.lower()

    return output
