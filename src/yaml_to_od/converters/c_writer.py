"""Write CANopenNode V4 object dictionary sources (OD.h / OD.c).

The writer only formats text: every type, initializer and attribute comes
from the IR built by the compiler.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from yaml_to_od import __version__
from yaml_to_od.ir.objects import (
    IRArrayObject,
    IRDataRef,
    IRObject,
    IRRecordObject,
    IRStorageField,
    IRVarObject,
)
from yaml_to_od.ir.types import render_attributes

if TYPE_CHECKING:
    from yaml_to_od.ir.database import IRObjectDictionary
    from yaml_to_od.ir.objects import IRExtension, IRStorageGroup

INDENT = "    "

_RULE = "*" * 79


def _section(title: str) -> list[str]:
    return ["", "", f"/{_RULE}", f"{INDENT}{title}", f"{_RULE}/"]


class ODSourceWriter:
    """Render an IRObjectDictionary into OD.h and OD.c.

    Usage:
        writer = ODSourceWriter()
        writer.write(ir_od, Path("generated"), "OD")

    Or for in-memory rendering:
        header, source = writer.write_strings(ir_od, "OD")
    """

    def __init__(self, version: str = __version__) -> None:
        """Initialize the writer.

        Args:
        ----
            version: Generator version written into the file banners.

        """
        self._version = version

    def write(
        self,
        ir_od: IRObjectDictionary,
        folder: Path,
        filename: str = "OD",
    ) -> tuple[Path, Path]:
        """Write ``<filename>.h`` and ``<filename>.c`` into a folder.

        Args:
        ----
            ir_od: The compiled object dictionary.
            folder: Output folder. Created if missing.
            filename: Base name of both files.

        Returns:
        -------
            Paths of the header and the source file.

        """
        header, source = self.write_strings(ir_od, filename)

        folder.mkdir(parents=True, exist_ok=True)
        header_path = folder / f"{filename}.h"
        source_path = folder / f"{filename}.c"
        header_path.write_text(header, encoding="utf-8")
        source_path.write_text(source, encoding="utf-8")
        return header_path, source_path

    def write_strings(self, ir_od: IRObjectDictionary, filename: str = "OD") -> tuple[str, str]:
        """Render both files without writing them."""
        return self.render_header(ir_od), self.render_source(ir_od, filename)

    def render_header(self, ir_od: IRObjectDictionary) -> str:
        """Render the contents of OD.h."""
        od = ir_od.name
        lines = [
            f"/{_RULE}",
            f"{INDENT}CANopen Object Dictionary definition for CANopenNode V4",
            "",
            f"{INDENT}{INDENT}This file was automatically generated by yaml-to-od v{self._version}",
            "",
            f"{INDENT}DON'T EDIT THIS FILE MANUALLY !!!!",
            f"{_RULE}/",
            "",
            f"#ifndef {od}_H",
            f"#define {od}_H",
        ]

        lines += _section("Counters of OD objects")
        lines += [f"#define {od}_CNT_{label} {total}" for label, total in ir_od.sorted_counters()]

        lines += _section("OD data declaration of all groups")
        groups = self._used_groups(ir_od)
        for group in groups:
            lines.append("typedef struct {")
            for storage_field in group.fields:
                lines += self._declaration(storage_field, 1)
            lines.append(f"}} {od}_{group.name}_t;")
            lines.append("")

        lines += [f"extern {od}_{group.name}_t {od}_{group.name};" for group in groups]
        lines.append(f"extern const OD_t {od};")

        lines += _section("Object dictionary entries - shortcuts")
        lines += [
            f"#define {od}_ENTRY_{shortcut.name} &{od}.list[{shortcut.position}]"
            for shortcut in ir_od.shortcuts
        ]

        lines += _section("Object dictionary entries - shortcuts with names")
        lines += [
            f"#define {od}_ENTRY_{shortcut.name} &{od}.list[{shortcut.position}]"
            for shortcut in ir_od.long_shortcuts
        ]

        lines += ["", f"#endif /* {od}_H */", ""]
        return "\n".join(lines)

    def render_source(self, ir_od: IRObjectDictionary, filename: str = "OD") -> str:
        """Render the contents of OD.c."""
        od = ir_od.name
        lines = [
            f"/{_RULE}",
            f"{INDENT}CANopen Object Dictionary definition for CANopenNode V4",
            "",
            f"{INDENT}{INDENT}This file was automatically generated by yaml-to-od v{self._version}",
            "",
            f"{INDENT}DON'T EDIT THIS FILE MANUALLY, UNLESS YOU KNOW WHAT YOU ARE DOING !!!!",
            f"{_RULE}/",
            "",
            "#define OD_DEFINITION",
            '#include "301/CO_ODinterface.h"',
            f'#include "{filename}.h"',
        ]

        lines += _section("OD data initialization of all groups")
        for group in self._used_groups(ir_od):
            lines.append(f"{od}_{group.name}_t {od}_{group.name} = {{")
            initializers = [self._initializer(f, 1) for f in group.fields]
            lines += self._join_blocks(initializers)
            lines.append("};")
            lines.append("")

        if ir_od.extensions:
            lines += _section("IO extensions and flagsPDO (configurable by application)")
            lines.append("typedef struct {")
            for extension in ir_od.extensions:
                if extension.ext_io:
                    lines.append(f"{INDENT}OD_extensionIO_t xio_{extension.var_name};")
                if extension.flags_pdo:
                    lines.append(
                        f"{INDENT}OD_flagsPDO_t flp_{extension.var_name}[{extension.sub_count}];"
                    )
            lines.append(f"}} {od}Exts_t;")
            lines.append("")
            lines.append(f"static {od}Exts_t {od}Exts = {{0}};")

        extensions = {extension.var_name: extension for extension in ir_od.extensions}
        if ir_od.objects:
            lines += _section("All OD objects (const)")
            lines.append("typedef struct {")
            blocks: list[list[str]] = []
            for obj in ir_od.objects:
                lines.append(f"{INDENT}{self._object_declaration(obj)}")
                blocks.append(self._object_initializer(od, obj))
                extension = extensions.get(obj.var_name)
                if extension is not None:
                    lines.append(f"{INDENT}OD_obj_extended_t oE_{obj.var_name};")
                    blocks.append(self._extension_initializer(od, extension))
            lines.append(f"}} {od}Objs_t;")
            lines.append("")
            lines.append(f"static const {od}Objs_t {od}Objs = {{")
            lines += self._join_blocks(blocks)
            lines.append("};")

        lines += _section("Object dictionary")
        lines.append(f"static const OD_entry_t {od}List[] = {{")
        for entry in ir_od.entries:
            prefix = "oE" if entry.extended else "o"
            lines.append(
                f"{INDENT}{{0x{entry.index:04X}, 0x{entry.sub_count:02X}, {entry.type_tag}, "
                f"&{od}Objs.{prefix}_{entry.var_name}}},"
            )
        lines.append(f"{INDENT}{{0x0000, 0x00, 0, NULL}}")
        lines.append("};")
        lines.append("")
        lines.append(f"const OD_t {od} = {{")
        lines.append(f"{INDENT}(sizeof({od}List) / sizeof({od}List[0])) - 1,")
        lines.append(f"{INDENT}&{od}List[0]")
        lines.append("};")
        lines.append("")
        return "\n".join(lines)

    @staticmethod
    def _used_groups(ir_od: IRObjectDictionary) -> list[IRStorageGroup]:
        """Get the storage groups that hold at least one member."""
        return [group for group in ir_od.storage_groups.values() if group.fields]

    @staticmethod
    def _join_blocks(blocks: list[list[str]]) -> list[str]:
        """Join initializer blocks with commas after all but the last one."""
        lines: list[str] = []
        for i, block in enumerate(blocks):
            lines += block[:-1]
            lines.append(block[-1] + ("," if i < len(blocks) - 1 else ""))
        return lines

    def _declaration(self, storage_field: IRStorageField, level: int) -> list[str]:
        indent = INDENT * level
        if not storage_field.members:
            return [f"{indent}{storage_field.c_type} {storage_field.name}{storage_field.array};"]
        lines = [f"{indent}struct {{"]
        for member in storage_field.members:
            lines += self._declaration(member, level + 1)
        lines.append(f"{indent}}} {storage_field.name}{storage_field.array};")
        return lines

    def _initializer(self, storage_field: IRStorageField, level: int) -> list[str]:
        indent = INDENT * level
        if not storage_field.members:
            return [f"{indent}.{storage_field.name} = {storage_field.initializer}"]
        lines = [f"{indent}.{storage_field.name} = {{"]
        lines += self._join_blocks([self._initializer(m, level + 1) for m in storage_field.members])
        lines.append(f"{indent}}}")
        return lines

    @staticmethod
    def _pointer(od: str, data: IRDataRef | None) -> str:
        return data.render(od) if data is not None else "NULL"

    @staticmethod
    def _object_declaration(obj: IRObject) -> str:
        if isinstance(obj, IRVarObject):
            return f"OD_obj_var_t o_{obj.var_name};"
        if isinstance(obj, IRArrayObject):
            return f"OD_obj_array_t o_{obj.var_name};"
        return f"OD_obj_record_t o_{obj.var_name}[{len(obj.subs)}];"

    def _object_initializer(self, od: str, obj: IRObject) -> list[str]:
        inner = INDENT * 2
        lines = [f"{INDENT}.o_{obj.var_name} = {{"]

        if isinstance(obj, IRVarObject):
            lines += [
                f"{inner}.data = {self._pointer(od, obj.data)},",
                f"{inner}.attribute = {render_attributes(obj.attribute)},",
                f"{inner}.dataLength = {obj.data_length}",
            ]
        elif isinstance(obj, IRArrayObject):
            sizeof = f"sizeof({obj.element_c_type})" if obj.element_c_type else "0"
            lines += [
                f"{inner}.data0 = {self._pointer(od, obj.data0)},",
                f"{inner}.data = {self._pointer(od, obj.data)},",
                f"{inner}.attribute0 = {render_attributes(obj.attribute0)},",
                f"{inner}.attribute = {render_attributes(obj.attribute)},",
                f"{inner}.dataElementLength = {obj.element_length},",
                f"{inner}.dataElementSizeof = {sizeof}",
            ]
        elif isinstance(obj, IRRecordObject):
            deeper = INDENT * 3
            blocks = [
                [
                    f"{inner}{{",
                    f"{deeper}.data = {self._pointer(od, sub.data)},",
                    f"{deeper}.subIndex = {sub.sub_index},",
                    f"{deeper}.attribute = {render_attributes(sub.attribute)},",
                    f"{deeper}.dataLength = {sub.data_length}",
                    f"{inner}}}",
                ]
                for sub in obj.subs
            ]
            lines += self._join_blocks(blocks)

        lines.append(f"{INDENT}}}")
        return lines

    @staticmethod
    def _extension_initializer(od: str, extension: IRExtension) -> list[str]:
        inner = INDENT * 2
        ext_io = f"&{od}Exts.xio_{extension.var_name}" if extension.ext_io else "NULL"
        flags_pdo = f"&{od}Exts.flp_{extension.var_name}[0]" if extension.flags_pdo else "NULL"
        return [
            f"{INDENT}.oE_{extension.var_name} = {{",
            f"{inner}.extIO = {ext_io},",
            f"{inner}.flagsPDO = {flags_pdo},",
            f"{inner}.odObjectOriginal = &{od}Objs.o_{extension.var_name}",
            f"{INDENT}}}",
        ]


def convert_yaml_to_od(
    input_path: Path,
    output_folder: Path,
    filename: str = "OD",
    od_name: str | None = None,
) -> tuple[Path, Path]:
    """Load, compile and write an object dictionary in one call.

    Args:
    ----
        input_path: YAML/JSON object dictionary.
        output_folder: Folder receiving the generated files.
        filename: Base name of the generated files.
        od_name: Symbol prefix overriding the document name.

    Returns:
    -------
        Paths of the header and the source file.

    """
    from yaml_to_od.models.loader import load_object_dictionary
    from yaml_to_od.transform.transformer import ObjectDictionaryCompiler

    doc = load_object_dictionary(input_path)
    ir_od = ObjectDictionaryCompiler().compile(doc, od_name=od_name)
    return ODSourceWriter().write(ir_od, output_folder, filename)
