"""Converters for writing IR data as CANopenNode V4 sources.

This package provides the final stage of the compilation pipeline:
rendering the Intermediate Representation (IR) as C text.

Output Files:
    OD.h: Counters, storage group types, extern declarations and the
        ``<OD>_ENTRY_*`` shortcut macros.
    OD.c: Storage group initializers, IO extensions, object descriptors
        and the OD list with its terminating row.

Example:
-------
    >>> from yaml_to_od.converters import ODSourceWriter
    >>> from yaml_to_od.transform import ObjectDictionaryCompiler
    >>>
    >>> ir_od = ObjectDictionaryCompiler().compile(doc)
    >>>
    >>> # Write OD.h and OD.c into a folder
    >>> ODSourceWriter().write(ir_od, Path("generated"))
    >>>
    >>> # Get the text without writing files
    >>> header, source = ODSourceWriter().write_strings(ir_od)

"""

from yaml_to_od.converters.c_writer import ODSourceWriter, convert_yaml_to_od

__all__ = [
    "ODSourceWriter",
    "convert_yaml_to_od",
]
