"""yaml-to-od: Compiler from CANopen object dictionary YAML to CANopenNode V4 C sources.

This package provides tools for:
- Loading and validating YAML/JSON object dictionary descriptions
- Compiling them to an Intermediate Representation (IR)
- Writing the IR as the OD.h / OD.c pair used by CANopenNode V4

Quick Start:
    >>> from yaml_to_od.models import load_object_dictionary
    >>> from yaml_to_od.transform import ObjectDictionaryCompiler
    >>> from yaml_to_od.converters import ODSourceWriter
    >>>
    >>> doc = load_object_dictionary("device.yaml")
    >>> ir_od = ObjectDictionaryCompiler().compile(doc)
    >>> ODSourceWriter().write(ir_od, Path("generated"), "OD")

Modules:
    models: Pydantic models for YAML schema validation
    transform: Value encoding and object dictionary to IR compilation
    converters: IR to C source emission
    validation: Build warnings and the strict-mode validator
    ir: Intermediate Representation data structures
    cli: Command-line interface
"""

__version__ = "0.1.0"
