"""
Intermediate representation handed to the templates.

One FileData per schema file, built fresh each run and never mutated.
Cross references (method input/output, field types) are plain names.
"""

from dataclasses import dataclass, replace
from pathlib import PurePosixPath
from typing import Tuple


@dataclass(frozen=True)
class EnumValue:
    name: str
    number: int


@dataclass(frozen=True)
class Enum:
    name: str
    values: Tuple[EnumValue, ...] = ()


@dataclass(frozen=True)
class Field:
    """A message field, already in target-language terms."""

    name: str
    type: str
    proto_number: int
    default_value: str


@dataclass(frozen=True)
class Message:
    name: str
    fields: Tuple[Field, ...] = ()


@dataclass(frozen=True)
class Method:
    """
    A service method.

    ``method_name`` is the generated member name (``lower_first`` of
    ``name``); ``input``/``output`` carry the flat-namespace prefix when the
    target needs one.
    """

    name: str
    method_name: str
    input: str
    output: str
    server_streaming: bool = False


@dataclass(frozen=True)
class Service:
    name: str
    prefix: str
    methods: Tuple[Method, ...] = ()

    def route(self, method: Method) -> str:
        """Wire name the runtime dispatches on, e.g. ``Chat/Send``."""
        return f"{self.prefix}{method.name}"


@dataclass(frozen=True)
class TypeRef:
    """
    A message or enum declared in another schema file.

    ``package`` already has the namespace fallback applied; ``proto_name``
    is the declaring file without its extension.
    """

    name: str
    package: str
    proto_name: str


@dataclass(frozen=True)
class FileData:
    """Everything a template needs to render one schema file."""

    file_name: str
    proto_name: str
    package_name: str
    enums: Tuple[Enum, ...] = ()
    messages: Tuple[Message, ...] = ()
    services: Tuple[Service, ...] = ()
    external_types: Tuple[TypeRef, ...] = ()

    @property
    def stem(self) -> str:
        """Base name of the schema file without directories or extension."""
        return PurePosixPath(self.proto_name).name

    @property
    def depth(self) -> int:
        """Number of directories between the output root and this file."""
        return len(PurePosixPath(self.proto_name).parts) - 1

    def for_service(self, service: Service) -> "FileData":
        """Projection holding a single service, used for per-service output."""
        return replace(self, enums=(), messages=(), services=(service,))
