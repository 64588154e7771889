"""Kotlin (kotlinx-serialization) type table."""

from ...core.descriptors import Kind
from ...core.types import SIGNED_32, SIGNED_64, UNSIGNED_32, UNSIGNED_64, TypeTable, expand_kinds

KOTLIN_SCALAR_TYPES = expand_kinds(
    {
        Kind.BOOL: "Boolean",
        SIGNED_32: "Int",
        SIGNED_64: "Long",
        UNSIGNED_32: "UInt",
        UNSIGNED_64: "ULong",
        Kind.FLOAT: "Float",
        Kind.DOUBLE: "Double",
        Kind.STRING: "String",
        Kind.BYTES: "ByteArray",
    }
)

KOTLIN_DEFAULT_VALUES = expand_kinds(
    {
        Kind.BOOL: "false",
        SIGNED_32: "0",
        SIGNED_64: "0L",
        UNSIGNED_32: "0u",
        UNSIGNED_64: "0uL",
        Kind.FLOAT: "0f",
        Kind.DOUBLE: "0.0",
        Kind.STRING: '""',
        Kind.BYTES: "byteArrayOf()",
    }
)


def create_kotlin_type_table() -> TypeTable:
    return TypeTable(
        scalar_types=KOTLIN_SCALAR_TYPES,
        default_values=KOTLIN_DEFAULT_VALUES,
        list_type="List<{}>",
        empty_list="emptyList()",
        any_type="Any",
        null_literal="null",
    )
