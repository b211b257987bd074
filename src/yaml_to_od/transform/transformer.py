"""Main object dictionary to IR compiler."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import assert_never

from yaml_to_od.ir.database import IRObjectDictionary
from yaml_to_od.ir.objects import (
    IRArrayObject,
    IRDataRef,
    IREntry,
    IRExtension,
    IRRecordObject,
    IRRecordSubObject,
    IRStorageField,
    IRStorageGroup,
    IRVarObject,
)
from yaml_to_od.ir.types import IRAttribute, IREncodedValue
from yaml_to_od.models.entries import ArrayEntry, RecordEntry, SubEntry, VarEntry
from yaml_to_od.models.root import ObjectDictionary
from yaml_to_od.transform.attributes import compose_attributes
from yaml_to_od.transform.naming import make_cname
from yaml_to_od.transform.value_encoder import data_type_name, encode_value
from yaml_to_od.validation.errors import BuildWarnings, WarningSink

logger = logging.getLogger(__name__)

# CANopenNode accesses these objects only through OD_extensionIO_t
EXT_IO_REQUIRED_INDICES = frozenset({0x1003, 0x1012, 0x1014, 0x1200})

DEFAULT_STRING_LENGTH = 8

StringLengthProvider = Callable[[VarEntry | SubEntry], int]


def constant_string_length(item: VarEntry | SubEntry) -> int:
    """Reserve the same number of string elements for every entry."""
    return DEFAULT_STRING_LENGTH


def fixed_string_length(length: int) -> StringLengthProvider:
    """Build a provider that reserves `length` elements for every entry."""

    def provider(item: VarEntry | SubEntry) -> int:
        return length

    return provider


class ObjectDictionaryCompiler:
    """Compile a validated object dictionary into IR format.

    This is the main entry point for turning an ObjectDictionary (from
    YAML/JSON) into an IRObjectDictionary ready for the C writer.

    The compiler holds configuration only. Every call to ``compile`` builds
    a fresh IRObjectDictionary and passes it to each step, so independent
    runs never share storage groups, counters or warnings.

    Usage:
        compiler = ObjectDictionaryCompiler()
        ir_od = compiler.compile(object_dictionary)
    """

    def __init__(self, string_length: StringLengthProvider | None = None) -> None:
        """Initialize the compiler.

        Args:
        ----
            string_length: Returns the number of elements to reserve for
                string-typed entries; defaults to 8 for every entry.

        """
        self._string_length = string_length or constant_string_length

    def compile(
        self,
        doc: ObjectDictionary,
        warnings: WarningSink | None = None,
        od_name: str | None = None,
    ) -> IRObjectDictionary:
        """Compile an ObjectDictionary to IRObjectDictionary.

        Entries are processed one by one in ascending index order. Problems
        are reported to ``warnings`` and never stop the run.

        Args:
        ----
            doc: Validated Pydantic model from YAML/JSON.
            warnings: Sink for build warnings; a new BuildWarnings is used
                when omitted.
            od_name: Symbol prefix overriding the document name.

        Returns:
        -------
            IRObjectDictionary ready for the C writer.

        """
        ir_od = IRObjectDictionary(
            name=od_name or doc.name,
            warnings=warnings if warnings is not None else BuildWarnings(),
        )

        for entry in doc.enabled_entries():
            self._process_entry(ir_od, entry)

        logger.info(
            "Compiled %d of %d objects into %d storage groups",
            len(ir_od.entries),
            len(doc.objects),
            len(ir_od.storage_groups),
        )
        return ir_od

    def _process_entry(
        self,
        ir_od: IRObjectDictionary,
        entry: VarEntry | ArrayEntry | RecordEntry,
    ) -> None:
        """Compile one entry and append it to the OD list."""
        index_h = f"{entry.index:04X}"
        var_name = f"{index_h}_{make_cname(entry.name)}"
        ext_io = entry.ext_io
        # No input field carries PDO flags yet; the extension slot stays unused.
        flags_pdo = False

        if not ext_io and entry.index in EXT_IO_REQUIRED_INDICES:
            ext_io = True
            ir_od.warnings.add_warning(
                f"Error in 0x{index_h}: extIO must be enabled for this object!"
            )

        group = ir_od.storage_group(entry.storage_location)

        if isinstance(entry, VarEntry):
            sub_count = self._prepare_var(ir_od, entry, index_h, var_name, group)
        elif isinstance(entry, ArrayEntry):
            sub_count = self._prepare_array(ir_od, entry, index_h, var_name, group)
        elif isinstance(entry, RecordEntry):
            sub_count = self._prepare_record(ir_od, entry, index_h, var_name, group)
        else:
            assert_never(entry)

        if sub_count < 1:
            logger.debug("Skipping 0x%s: no sub-entries compiled", index_h)
            return

        extended = ext_io or flags_pdo
        if extended:
            ir_od.add_extension(
                IRExtension(
                    var_name=var_name,
                    group=group.name,
                    ext_io=ext_io,
                    flags_pdo=flags_pdo,
                    sub_count=sub_count,
                )
            )

        position = ir_od.add_entry(
            IREntry(
                index=entry.index,
                sub_count=sub_count,
                object_type=entry.object_type,
                extended=extended,
                var_name=var_name,
            )
        )
        ir_od.count(entry.count_label)
        logger.debug("Compiled 0x%s as %s at list position %d", index_h, var_name, position)

    def _prepare_var(
        self,
        ir_od: IRObjectDictionary,
        entry: VarEntry,
        index_h: str,
        var_name: str,
        group: IRStorageGroup,
    ) -> int:
        """Compile storage and descriptor of a VAR."""
        data = encode_value(
            entry.data_type,
            entry.default,
            self._string_length(entry),
            index_h,
            ir_od.warnings,
        )
        attribute = compose_attributes(entry.access, entry.pdo_mapping, data.multibyte)

        data_ref = None
        if data.c_value is not None:
            group.add(
                IRStorageField(
                    c_type=data.c_type or "",
                    name=f"x{var_name}",
                    array=data.c_type_array,
                    initializer=data.c_value,
                )
            )
            data_ref = IRDataRef(group.name, f"x{var_name}{data.c_type_array0}")

        ir_od.add_object(
            IRVarObject(
                var_name=var_name,
                data=data_ref,
                attribute=attribute,
                data_length=data.length,
            )
        )
        return 1

    def _prepare_array(
        self,
        ir_od: IRObjectDictionary,
        entry: ArrayEntry,
        index_h: str,
        var_name: str,
        group: IRStorageGroup,
    ) -> int:
        """Compile storage and descriptor of an ARRAY.

        Sub-entry 0 is the UNSIGNED8 element count; all other sub-entries
        must encode exactly like sub-entry 1, which defines the element.
        """
        sub_count = len(entry.sub_entries)
        if sub_count < 2:
            ir_od.warnings.add_warning(
                f"Error in 0x{index_h}: ARRAY must have minimum two sub entries, "
                f"not {sub_count}!"
            )
            return 0

        value0: str | None = None
        attribute0: tuple[IRAttribute, ...] = ()
        element = IREncodedValue()
        element_attribute: tuple[IRAttribute, ...] = ()
        values: list[str] = []
        reported: set[str] = set()

        def report_once(key: str, message: str) -> None:
            if key not in reported:
                reported.add(key)
                ir_od.warnings.add_warning(f"Error in 0x{index_h}: {message}")

        for i, sub in enumerate(entry.sub_entries):
            data_type = sub.data_type if i == 0 else entry.data_type or sub.data_type
            data = encode_value(
                data_type,
                sub.default,
                self._string_length(sub),
                index_h,
                ir_od.warnings,
            )
            attribute = compose_attributes(sub.access, sub.pdo_mapping, data.multibyte)

            if sub.subindex != i:
                ir_od.warnings.add_warning(
                    f"Error in 0x{index_h}: SubIndexes in ARRAY must be in sequence!"
                )

            if i == 0:
                if data.c_type != "uint8_t" or data.length != 1:
                    ir_od.warnings.add_warning(
                        f"Error in 0x{index_h}: Data type in ARRAY in subIndex 0 must be "
                        f"UNSIGNED8, not {data_type_name(sub.data_type)}!"
                    )
                value0 = data.c_value
                attribute0 = attribute
                continue

            if i == 1:
                element = data
                element_attribute = attribute
            else:
                if data.c_type != element.c_type or data.length != element.length:
                    report_once("type", "Data type of elements in ARRAY must be equal!")
                if data.defined != element.defined:
                    report_once(
                        "value",
                        "Default value must be defined on all ARRAY elements "
                        "or must be undefined on all ARRAY elements!",
                    )
                if attribute != element_attribute:
                    report_once("attribute", "Attributes of elements in ARRAY must be equal!")

            if data.c_value is not None:
                values.append(data.c_value)
            else:
                values.append("{0}" if element.c_type_array else "0")

        data0_ref = None
        if value0 is not None:
            group.add(IRStorageField(c_type="uint8_t", name=f"x{var_name}_sub0", initializer=value0))
            data0_ref = IRDataRef(group.name, f"x{var_name}_sub0")

        data_ref = None
        if element.c_value is not None:
            group.add(
                IRStorageField(
                    c_type=element.c_type or "",
                    name=f"x{var_name}",
                    array=f"[{sub_count - 1}]{element.c_type_array}",
                    initializer="{" + ", ".join(values) + "}",
                )
            )
            data_ref = IRDataRef(group.name, f"x{var_name}[0]{element.c_type_array0}")

        element_c_type = None
        if element.c_type is not None:
            element_c_type = f"{element.c_type}{element.c_type_array}"

        ir_od.add_object(
            IRArrayObject(
                var_name=var_name,
                data0=data0_ref,
                data=data_ref,
                attribute0=attribute0,
                attribute=element_attribute,
                element_length=element.length,
                element_c_type=element_c_type,
            )
        )
        return sub_count

    def _prepare_record(
        self,
        ir_od: IRObjectDictionary,
        entry: RecordEntry,
        index_h: str,
        var_name: str,
        group: IRStorageGroup,
    ) -> int:
        """Compile storage and descriptors of a RECORD.

        Every sub-entry gets a descriptor; only sub-entries with a default
        value become a member of the record's storage struct.
        """
        sub_count = len(entry.sub_entries)
        if sub_count < 2:
            ir_od.warnings.add_warning(
                f"Error in 0x{index_h}: RECORD must have minimum two sub entries, "
                f"not {sub_count}!"
            )
            return 0

        members: list[IRStorageField] = []
        subs: list[IRRecordSubObject] = []

        for i, sub in enumerate(entry.sub_entries):
            data = encode_value(
                sub.data_type,
                sub.default,
                self._string_length(sub),
                index_h,
                ir_od.warnings,
            )
            attribute = compose_attributes(sub.access, sub.pdo_mapping, data.multibyte)

            if i == 0 and (sub.subindex != 0 or data.c_type != "uint8_t" or data.length != 1):
                ir_od.warnings.add_warning(
                    f"Error in 0x{index_h}: Data type in RECORD, first sub-entry, subIndex 0 "
                    f"must be UNSIGNED8, not {data_type_name(sub.data_type)}!"
                )

            sub_name = make_cname(sub.name)
            data_ref = None
            if data.c_value is not None:
                members.append(
                    IRStorageField(
                        c_type=data.c_type or "",
                        name=sub_name,
                        array=data.c_type_array,
                        initializer=data.c_value,
                    )
                )
                data_ref = IRDataRef(group.name, f"x{var_name}.{sub_name}{data.c_type_array0}")

            subs.append(
                IRRecordSubObject(
                    data=data_ref,
                    sub_index=sub.subindex,
                    attribute=attribute,
                    data_length=data.length,
                )
            )

        ir_od.add_object(IRRecordObject(var_name=var_name, subs=tuple(subs)))

        if members:
            group.add(IRStorageField(c_type="struct", name=f"x{var_name}", members=tuple(members)))

        return sub_count
