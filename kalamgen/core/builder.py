"""
IR builder: descriptor graph file -> FileData.

Every step is a small function so each policy (namespace fallback, type
prefix, enum/message emission) can be exercised on its own.
"""

from dataclasses import dataclass
from typing import Iterator, Optional, Tuple, Union

from .descriptors import ProtoEnum, ProtoFile, ProtoMessage, ProtoMethod, ProtoService
from .ir import Enum, EnumValue, Field, FileData, Message, Method, Service, TypeRef
from .naming import lower_camel, lower_first, type_prefix
from .types import TypeMapper

PROTO_EXTENSION = ".proto"


@dataclass(frozen=True)
class BuildOptions:
    """The per-language knobs the builder needs."""

    type_mapper: TypeMapper
    namespace_fallback: Optional[str] = None
    emits_types: bool = False
    flat_namespace: bool = False


def strip_extension(path: str) -> str:
    """``pkg/thing.proto`` -> ``pkg/thing``; other names are kept whole."""
    if path.endswith(PROTO_EXTENSION):
        return path[: -len(PROTO_EXTENSION)]
    return path


def resolve_package(package: str, namespace_fallback: Optional[str]) -> str:
    """Substitute the fallback namespace only for an empty package."""
    if not package and namespace_fallback:
        return namespace_fallback
    return package


def build_enum(enum: ProtoEnum) -> Enum:
    return Enum(
        name=enum.name,
        values=tuple(EnumValue(name=v.name, number=v.number) for v in enum.values),
    )


def build_message(message: ProtoMessage, type_mapper: TypeMapper) -> Message:
    return Message(
        name=message.name,
        fields=tuple(
            Field(
                name=lower_camel(fd.name),
                type=type_mapper.field_type(fd),
                proto_number=fd.number,
                default_value=type_mapper.default_value(fd),
            )
            for fd in message.fields
        ),
    )


def build_method(method: ProtoMethod, prefix: str = "") -> Method:
    return Method(
        name=method.name,
        method_name=lower_first(method.name),
        input=prefix + method.input.name,
        output=prefix + method.output.name,
        server_streaming=method.server_streaming,
    )


def build_service(service: ProtoService, prefix: str = "") -> Service:
    """
    Build a service; ``prefix`` only touches input/output references,
    never the service or method names.
    """
    return Service(
        name=service.name,
        prefix=f"{service.name}/",
        methods=tuple(build_method(m, prefix) for m in service.methods),
    )


def _referenced_types(
    proto_file: ProtoFile, emits_types: bool
) -> Iterator[Union[ProtoEnum, ProtoMessage]]:
    for service in proto_file.services:
        for method in service.methods:
            yield method.input
            yield method.output
    if emits_types:
        for message in proto_file.messages:
            for fd in message.fields:
                if fd.enum is not None:
                    yield fd.enum
                if fd.message is not None:
                    yield fd.message


def collect_external_types(
    proto_file: ProtoFile, options: BuildOptions
) -> Tuple[TypeRef, ...]:
    """
    Types the rendered file names but another schema file declares, in
    first-reference order. Field types only count when the language emits
    messages.
    """
    refs = {}
    for decl in _referenced_types(proto_file, options.emits_types):
        if decl.file == proto_file.name:
            continue
        ref = TypeRef(
            name=decl.name,
            package=resolve_package(decl.package, options.namespace_fallback),
            proto_name=strip_extension(decl.file),
        )
        refs.setdefault(ref, None)
    return tuple(refs)


def build_file_data(proto_file: ProtoFile, options: BuildOptions) -> FileData:
    """
    Convert one schema file into its FileData.

    The flat-namespace prefix comes from the referencing file's package,
    whatever file the referenced message was declared in.
    """
    package_name = resolve_package(proto_file.package, options.namespace_fallback)

    enums = ()
    messages = ()
    if options.emits_types:
        enums = tuple(build_enum(e) for e in proto_file.enums)
        messages = tuple(
            build_message(m, options.type_mapper) for m in proto_file.messages
        )

    prefix = type_prefix(package_name) if options.flat_namespace else ""

    return FileData(
        file_name=proto_file.name,
        proto_name=strip_extension(proto_file.name),
        package_name=package_name,
        enums=enums,
        messages=messages,
        services=tuple(build_service(s, prefix) for s in proto_file.services),
        external_types=collect_external_types(proto_file, options),
    )
