"""
Descriptor graph loading.

protobuf's DescriptorPool links the raw FileDescriptorProto messages handed
over by protoc: every enum/message-typed field and every method
input/output points at the declaration it names. The Proto* classes here
are a thin view over the resolved descriptors holding just what the
builder reads. Nothing here validates the schema beyond what the pool
checks while linking.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, List, Optional, Sequence

from google.protobuf import descriptor, descriptor_pb2, descriptor_pool
from google.protobuf.compiler import plugin_pb2

from ..logging_config import get_logger

logger = get_logger(__name__)


class Kind(Enum):
    """Value kinds of a field, numbered as FieldDescriptorProto.Type."""

    DOUBLE = 1
    FLOAT = 2
    INT64 = 3
    UINT64 = 4
    INT32 = 5
    FIXED64 = 6
    FIXED32 = 7
    BOOL = 8
    STRING = 9
    GROUP = 10
    MESSAGE = 11
    BYTES = 12
    UINT32 = 13
    ENUM = 14
    SFIXED32 = 15
    SFIXED64 = 16
    SINT32 = 17
    SINT64 = 18


class Cardinality(Enum):
    """Field cardinality, numbered as FieldDescriptorProto.Label."""

    OPTIONAL = 1
    REQUIRED = 2
    REPEATED = 3


class ResolutionError(Exception):
    """Raised when a schema file cannot be linked into the descriptor graph."""

    def __init__(self, file: str, detail: str):
        super().__init__(f"{file}: {detail}")
        self.file = file
        self.detail = detail


@dataclass
class ProtoEnumValue:
    name: str
    number: int


@dataclass
class ProtoEnum:
    name: str
    full_name: str
    values: List[ProtoEnumValue] = field(default_factory=list)
    file: str = ""
    package: str = ""


@dataclass
class ProtoField:
    """A message field; ``enum``/``message`` point at the resolved type."""

    name: str
    number: int
    kind: Optional[Kind]
    cardinality: Cardinality
    enum: Optional[ProtoEnum] = None
    message: Optional["ProtoMessage"] = None

    @property
    def is_list(self) -> bool:
        return self.cardinality == Cardinality.REPEATED


@dataclass
class ProtoMessage:
    """
    A message declaration.

    ``file`` and ``package`` name where it was declared (enums carry the
    same pair), which is what generated code imports when another file
    refers to it.
    """

    name: str
    full_name: str
    file: str = ""
    package: str = ""
    fields: List[ProtoField] = field(default_factory=list)
    messages: List["ProtoMessage"] = field(default_factory=list)
    enums: List[ProtoEnum] = field(default_factory=list)
    is_map_entry: bool = False


@dataclass
class ProtoMethod:
    name: str
    input: ProtoMessage
    output: ProtoMessage
    server_streaming: bool = False


@dataclass
class ProtoService:
    name: str
    full_name: str
    methods: List[ProtoMethod] = field(default_factory=list)


@dataclass
class ProtoFile:
    """One schema file of the descriptor graph."""

    name: str
    package: str
    generate: bool = False
    enums: List[ProtoEnum] = field(default_factory=list)
    messages: List[ProtoMessage] = field(default_factory=list)
    services: List[ProtoService] = field(default_factory=list)


class _GraphView:
    """
    Converts pool descriptors into Proto* objects.

    Each declaration is converted once, so a message referenced from
    several places (or from itself) is the same object everywhere.
    """

    def __init__(self):
        self._enums: Dict[str, ProtoEnum] = {}
        self._messages: Dict[str, ProtoMessage] = {}

    def enum(self, desc: descriptor.EnumDescriptor) -> ProtoEnum:
        enum = self._enums.get(desc.full_name)
        if enum is None:
            enum = ProtoEnum(
                name=desc.name,
                full_name=desc.full_name,
                values=[ProtoEnumValue(name=v.name, number=v.number) for v in desc.values],
                file=desc.file.name,
                package=desc.file.package,
            )
            self._enums[desc.full_name] = enum
        return enum

    def message(self, desc: descriptor.Descriptor) -> ProtoMessage:
        message = self._messages.get(desc.full_name)
        if message is not None:
            return message

        message = ProtoMessage(
            name=desc.name,
            full_name=desc.full_name,
            file=desc.file.name,
            package=desc.file.package,
            is_map_entry=desc.GetOptions().map_entry,
        )
        # Registered before the fields so recursive messages terminate
        self._messages[desc.full_name] = message
        message.fields = [self.field(fd) for fd in desc.fields]
        message.messages = [self.message(m) for m in desc.nested_types]
        message.enums = [self.enum(e) for e in desc.enum_types]
        return message

    def field(self, desc: descriptor.FieldDescriptor) -> ProtoField:
        try:
            kind = Kind(desc.type)
        except ValueError:
            kind = None
        return ProtoField(
            name=desc.name,
            number=desc.number,
            kind=kind,
            cardinality=Cardinality(desc.label),
            enum=self.enum(desc.enum_type) if desc.enum_type is not None else None,
            message=self.message(desc.message_type) if desc.message_type is not None else None,
        )

    def service(self, desc: descriptor.ServiceDescriptor) -> ProtoService:
        return ProtoService(
            name=desc.name,
            full_name=desc.full_name,
            methods=[
                ProtoMethod(
                    name=m.name,
                    input=self.message(m.input_type),
                    output=self.message(m.output_type),
                    server_streaming=m.server_streaming,
                )
                for m in desc.methods
            ],
        )

    def file(self, desc: descriptor.FileDescriptor, generate: bool) -> ProtoFile:
        return ProtoFile(
            name=desc.name,
            package=desc.package,
            generate=generate,
            enums=[self.enum(e) for e in desc.enum_types_by_name.values()],
            messages=[self.message(m) for m in desc.message_types_by_name.values()],
            services=[self.service(s) for s in desc.services_by_name.values()],
        )


def _add_to_pool(
    pool: descriptor_pool.DescriptorPool, proto: descriptor_pb2.FileDescriptorProto
) -> descriptor.FileDescriptor:
    try:
        pool.AddSerializedFile(proto.SerializeToString())
        return pool.FindFileByName(proto.name)
    except (TypeError, KeyError) as e:
        # TypeError from the upb and cpp pools, KeyError from the pure python one
        raise ResolutionError(proto.name, str(e)) from e


def load_files(
    protos: Sequence[descriptor_pb2.FileDescriptorProto],
    files_to_generate: Iterable[str],
) -> List[ProtoFile]:
    """
    Link the descriptor graph.

    Args:
        protos: Every file of the request, dependencies first (protoc order)
        files_to_generate: Names of the files generation was requested for

    Returns:
        ProtoFile list in input order

    Raises:
        ResolutionError: A file names a type or dependency the pool cannot find
    """
    wanted = set(files_to_generate)
    pool = descriptor_pool.DescriptorPool()
    view = _GraphView()

    descriptors = [_add_to_pool(pool, proto) for proto in protos]
    files = [view.file(desc, desc.name in wanted) for desc in descriptors]

    logger.debug(
        "Loaded %d descriptor files (%d marked for generation)",
        len(files),
        sum(1 for f in files if f.generate),
    )
    return files


def load_request(request: plugin_pb2.CodeGeneratorRequest) -> List[ProtoFile]:
    """Load the descriptor graph carried by a protoc plugin request."""
    return load_files(request.proto_file, request.file_to_generate)


def load_file_set(
    file_set: descriptor_pb2.FileDescriptorSet,
    files_to_generate: Optional[Iterable[str]] = None,
) -> List[ProtoFile]:
    """
    Load the descriptor graph from a FileDescriptorSet.

    Without explicit names, every file that no other file in the set
    imports is marked for generation.
    """
    if files_to_generate is None:
        imported = {dep for proto in file_set.file for dep in proto.dependency}
        files_to_generate = [p.name for p in file_set.file if p.name not in imported]
    else:
        files_to_generate = list(files_to_generate)
        known = {p.name for p in file_set.file}
        missing = [name for name in files_to_generate if name not in known]
        if missing:
            raise ResolutionError(
                "<descriptor set>", f"files not in the set: {', '.join(missing)}"
            )
    return load_files(file_set.file, files_to_generate)
