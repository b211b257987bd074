"""Object dictionary to IR (Intermediate Representation) compilation.

This module compiles validated Pydantic models (from YAML/JSON) into an
IR that the C writer renders into ``OD.h`` and ``OD.c``.

The compilation process, per enabled entry in ascending index order:
    1. Build the variable name from the index and the normalized name
    2. Force the external I/O extension for objects that require it
    3. Register the entry's storage group
    4. Encode default values and compose attributes (VAR/ARRAY/RECORD)
    5. Append descriptor, OD list row, shortcut macros and counters

Primary Class:
    ObjectDictionaryCompiler: Main compiler class

Example:
-------
    >>> from yaml_to_od.models import load_object_dictionary
    >>> from yaml_to_od.transform import ObjectDictionaryCompiler
    >>>
    >>> doc = load_object_dictionary("device.yaml")
    >>> ir_od = ObjectDictionaryCompiler().compile(doc)
    >>> print(f"Entries: {len(ir_od.entries)}")
"""

from yaml_to_od.transform.transformer import ObjectDictionaryCompiler

__all__ = ["ObjectDictionaryCompiler"]
