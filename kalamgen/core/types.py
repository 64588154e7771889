"""
Table driven type mapping.

Each target language supplies a TypeTable; TypeMapper turns a descriptor
field into the target type name and default-value literal. Unknown kinds
degrade to the table's "any" type and null literal instead of failing.
"""

from dataclasses import dataclass
from typing import Dict

from .descriptors import Kind, ProtoEnum, ProtoField


# Kind groups shared by every table
SIGNED_32 = (Kind.INT32, Kind.SINT32, Kind.SFIXED32)
SIGNED_64 = (Kind.INT64, Kind.SINT64, Kind.SFIXED64)
UNSIGNED_32 = (Kind.UINT32, Kind.FIXED32)
UNSIGNED_64 = (Kind.UINT64, Kind.FIXED64)
MESSAGE_KINDS = (Kind.MESSAGE, Kind.GROUP)


def expand_kinds(table: Dict[object, str]) -> Dict[Kind, str]:
    """Expand tuple keys (kind groups) into one entry per kind."""
    expanded = {}
    for key, value in table.items():
        kinds = key if isinstance(key, tuple) else (key,)
        for kind in kinds:
            expanded[kind] = value
    return expanded


@dataclass(frozen=True)
class TypeTable:
    """Per-language type names and default literals for scalar kinds."""

    scalar_types: Dict[Kind, str]
    default_values: Dict[Kind, str]
    list_type: str  # format string with one {} for the element type
    empty_list: str
    any_type: str
    null_literal: str
    message_default: str = "{}()"
    enum_fallback_value: str = "UNKNOWN"


class TypeMapper:
    """Maps descriptor fields to target-language types and defaults."""

    def __init__(self, table: TypeTable):
        self.table = table

    def scalar_type(self, fd: ProtoField) -> str:
        """Type of a single element, ignoring cardinality."""
        if fd.kind == Kind.ENUM and fd.enum is not None:
            return fd.enum.name
        if fd.kind in MESSAGE_KINDS and fd.message is not None:
            return fd.message.name
        return self.table.scalar_types.get(fd.kind, self.table.any_type)

    def field_type(self, fd: ProtoField) -> str:
        if fd.is_list:
            return self.table.list_type.format(self.scalar_type(fd))
        return self.scalar_type(fd)

    def default_value(self, fd: ProtoField) -> str:
        # Repeated wins over every scalar rule.
        if fd.is_list:
            return self.table.empty_list
        if fd.kind == Kind.ENUM and fd.enum is not None:
            return self.enum_default(fd.enum)
        if fd.kind in MESSAGE_KINDS and fd.message is not None:
            return self.table.message_default.format(fd.message.name)
        return self.table.default_values.get(fd.kind, self.table.null_literal)

    def enum_default(self, enum: ProtoEnum) -> str:
        """First declared value, or ``<Enum>.UNKNOWN`` for an empty enum."""
        if enum.values:
            return f"{enum.name}.{enum.values[0].name}"
        return f"{enum.name}.{self.table.enum_fallback_value}"

    def describe(self) -> Dict[str, str]:
        """Scalar kind name -> target type, in Kind order, for --language-info."""
        return {
            kind.name.lower(): self.table.scalar_types[kind]
            for kind in Kind
            if kind in self.table.scalar_types
        }
