"""Compose OD attribute flags from access type and PDO mapping."""

from __future__ import annotations

from yaml_to_od.ir.types import IRAttribute
from yaml_to_od.models.types import AccessType, PDOMapping

ACCESS_ATTRIBUTES: dict[AccessType, IRAttribute] = {
    AccessType.RW: IRAttribute.SDO_RW,
    AccessType.RWR: IRAttribute.SDO_RW,
    AccessType.RWW: IRAttribute.SDO_RW,
    AccessType.RO: IRAttribute.SDO_R,
    AccessType.CONST: IRAttribute.SDO_R,
    AccessType.WO: IRAttribute.SDO_W,
}

PDO_ATTRIBUTES: dict[PDOMapping, IRAttribute] = {
    PDOMapping.OPTIONAL: IRAttribute.TRPDO,
    PDOMapping.TPDO: IRAttribute.TPDO,
    PDOMapping.RPDO: IRAttribute.RPDO,
}


def compose_attributes(
    access: AccessType | None,
    pdo_mapping: PDOMapping | None,
    multibyte: bool,
) -> tuple[IRAttribute, ...]:
    """Build the attribute flags of an entry or sub-entry.

    The order is fixed: the SDO access flag, then the PDO flag, then
    ``ODA_MB`` for multibyte scalars. Missing or unknown classifications
    add nothing. SRDO access is not supported.

    Args:
    ----
        access: SDO access type.
        pdo_mapping: PDO mapping classification.
        multibyte: Whether the value is a scalar wider than one byte.

    Returns:
    -------
        Tuple of attribute flags.

    """
    attributes: list[IRAttribute] = []

    if access in ACCESS_ATTRIBUTES:
        attributes.append(ACCESS_ATTRIBUTES[access])

    if pdo_mapping in PDO_ATTRIBUTES:
        attributes.append(PDO_ATTRIBUTES[pdo_mapping])

    if multibyte:
        attributes.append(IRAttribute.MB)

    return tuple(attributes)
