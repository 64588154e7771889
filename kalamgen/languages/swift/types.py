"""Swift (swift-protobuf) type table."""

from ...core.descriptors import Kind
from ...core.types import SIGNED_32, SIGNED_64, UNSIGNED_32, UNSIGNED_64, TypeTable, expand_kinds

SWIFT_SCALAR_TYPES = expand_kinds(
    {
        Kind.BOOL: "Bool",
        SIGNED_32: "Int32",
        SIGNED_64: "Int64",
        UNSIGNED_32: "UInt32",
        UNSIGNED_64: "UInt64",
        Kind.FLOAT: "Float",
        Kind.DOUBLE: "Double",
        Kind.STRING: "String",
        Kind.BYTES: "Data",
    }
)

SWIFT_DEFAULT_VALUES = expand_kinds(
    {
        Kind.BOOL: "false",
        (SIGNED_32 + SIGNED_64 + UNSIGNED_32 + UNSIGNED_64): "0",
        (Kind.FLOAT, Kind.DOUBLE): "0",
        Kind.STRING: '""',
        Kind.BYTES: "Data()",
    }
)


def create_swift_type_table() -> TypeTable:
    return TypeTable(
        scalar_types=SWIFT_SCALAR_TYPES,
        default_values=SWIFT_DEFAULT_VALUES,
        list_type="[{}]",
        empty_list="[]",
        any_type="Any",
        null_literal="nil",
    )
