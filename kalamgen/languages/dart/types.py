"""Dart (protoc-gen-dart) type table."""

from ...core.descriptors import Kind
from ...core.types import SIGNED_32, SIGNED_64, UNSIGNED_32, UNSIGNED_64, TypeTable, expand_kinds

# 64-bit integers use fixnum's Int64, as protoc-gen-dart does
DART_SCALAR_TYPES = expand_kinds(
    {
        Kind.BOOL: "bool",
        (SIGNED_32 + UNSIGNED_32): "int",
        (SIGNED_64 + UNSIGNED_64): "Int64",
        (Kind.FLOAT, Kind.DOUBLE): "double",
        Kind.STRING: "String",
        Kind.BYTES: "List<int>",
    }
)

DART_DEFAULT_VALUES = expand_kinds(
    {
        Kind.BOOL: "false",
        (SIGNED_32 + UNSIGNED_32): "0",
        (SIGNED_64 + UNSIGNED_64): "Int64.ZERO",
        (Kind.FLOAT, Kind.DOUBLE): "0.0",
        Kind.STRING: "''",
        Kind.BYTES: "<int>[]",
    }
)


def create_dart_type_table() -> TypeTable:
    return TypeTable(
        scalar_types=DART_SCALAR_TYPES,
        default_values=DART_DEFAULT_VALUES,
        list_type="List<{}>",
        empty_list="const []",
        any_type="dynamic",
        null_literal="null",
    )
