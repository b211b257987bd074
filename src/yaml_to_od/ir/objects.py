"""IR models for OD storage and object descriptors.

Each descriptor mirrors one CANopenNode ``OD_obj_*_t`` initializer.
Data pointers are kept as references into a storage group and only
rendered into C expressions by the writer, once the OD name is known.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from yaml_to_od.ir.types import IRAttribute
from yaml_to_od.models.types import ObjectType

# Suffix of the ODT_* object type tag
OBJECT_TYPE_TAGS: dict[ObjectType, str] = {
    ObjectType.VAR: "VAR",
    ObjectType.ARRAY: "ARR",
    ObjectType.RECORD: "REC",
}


@dataclass(frozen=True)
class IRDataRef:
    """Address of a default value inside a storage group.

    ``member`` is the path below the group variable, for example
    ``x1018_identity.vendorID`` or ``x1003_preDefinedErrorField[0]``.
    """

    group: str
    member: str

    def render(self, od_name: str) -> str:
        """Render as a C address expression."""
        return f"&{od_name}_{self.group}.{self.member}"


@dataclass(frozen=True)
class IRStorageField:
    """One member of a storage group struct.

    RECORD objects use ``c_type="struct"`` with ``members`` instead of an
    initializer of their own.
    """

    c_type: str
    name: str
    array: str = ""
    initializer: str = ""
    members: tuple[IRStorageField, ...] = ()


@dataclass
class IRStorageGroup:
    """Storage location bucket: ordered declaration/initializer pairs."""

    name: str
    fields: list[IRStorageField] = field(default_factory=list)

    def add(self, storage_field: IRStorageField) -> None:
        """Append a member to the group."""
        self.fields.append(storage_field)


@dataclass(frozen=True)
class IRVarObject:
    """Descriptor of a VAR object (``OD_obj_var_t``)."""

    var_name: str
    data: IRDataRef | None
    attribute: tuple[IRAttribute, ...]
    data_length: int


@dataclass(frozen=True)
class IRArrayObject:
    """Descriptor of an ARRAY object (``OD_obj_array_t``)."""

    var_name: str
    data0: IRDataRef | None
    data: IRDataRef | None
    attribute0: tuple[IRAttribute, ...]
    attribute: tuple[IRAttribute, ...]
    element_length: int
    element_c_type: str | None


@dataclass(frozen=True)
class IRRecordSubObject:
    """One sub-entry descriptor of a RECORD object (``OD_obj_record_t``)."""

    data: IRDataRef | None
    sub_index: int
    attribute: tuple[IRAttribute, ...]
    data_length: int


@dataclass(frozen=True)
class IRRecordObject:
    """Descriptor of a RECORD object: one record per sub-entry."""

    var_name: str
    subs: tuple[IRRecordSubObject, ...]


IRObject = IRVarObject | IRArrayObject | IRRecordObject


@dataclass(frozen=True)
class IRExtension:
    """Extended descriptor (``OD_obj_extended_t``) wrapping a plain one.

    Attributes
    ----------
        var_name: Variable name of the wrapped object.
        group: Storage group of the object (holds the flagsPDO array).
        ext_io: Allocate an ``OD_extensionIO_t`` hook.
        flags_pdo: Allocate ``OD_flagsPDO_t`` per sub-entry; never set by the
            compiler until the input model carries the information.
        sub_count: Number of sub-entries, sizes the flagsPDO array.

    """

    var_name: str
    group: str
    ext_io: bool
    flags_pdo: bool = False
    sub_count: int = 1


@dataclass(frozen=True)
class IREntry:
    """One row of the OD list: ``{index, subEntriesCount, type, object}``."""

    index: int
    sub_count: int
    object_type: ObjectType
    extended: bool
    var_name: str

    @property
    def type_tag(self) -> str:
        """Get the ``ODT_*`` tag, e.g. ``ODT_EREC`` for an extended RECORD."""
        prefix = "E" if self.extended else ""
        return f"ODT_{prefix}{OBJECT_TYPE_TAGS[self.object_type]}"


@dataclass(frozen=True)
class IRShortcut:
    """A ``<OD>_ENTRY_<name>`` macro bound to a position in the OD list."""

    name: str
    position: int
