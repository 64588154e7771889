"""Tests for building FileData from the descriptor graph."""

from __future__ import annotations

from kalamgen.core.builder import BuildOptions, build_file_data, resolve_package, strip_extension
from kalamgen.core.descriptors import ProtoFile, load_request
from kalamgen.core.ir import TypeRef
from kalamgen.core.types import TypeMapper
from kalamgen.languages.kotlin.types import create_kotlin_type_table
from kalamgen.languages.swift.types import create_swift_type_table
from tests._fixtures.protos import (
    FieldProto,
    add_enum,
    add_message,
    add_service,
    chat_file,
    empty_enum_file,
    field,
    health_files,
    make_request,
    new_file,
    rpc,
)

KOTLIN = BuildOptions(
    type_mapper=TypeMapper(create_kotlin_type_table()),
    namespace_fallback="generated",
    emits_types=True,
)
SWIFT = BuildOptions(
    type_mapper=TypeMapper(create_swift_type_table()),
    flat_namespace=True,
)


def test_strip_extension() -> None:
    assert strip_extension("pkg/thing.proto") == "pkg/thing"
    assert strip_extension("README") == "README"


def test_resolve_package_only_replaces_empty_package() -> None:
    assert resolve_package("", "generated") == "generated"
    assert resolve_package("chat", "generated") == "chat"
    assert resolve_package("", None) == ""


def test_chat_file_for_kotlin(chat_proto_file: ProtoFile) -> None:
    data = build_file_data(chat_proto_file, KOTLIN)

    assert data.package_name == "chat"
    assert data.proto_name == "chat"
    assert [m.name for m in data.messages] == ["Msg"]
    (text,) = data.messages[0].fields
    assert (text.name, text.type, text.proto_number, text.default_value) == ("text", "String", 1, '""')

    (service,) = data.services
    assert service.prefix == "Chat/"
    (send,) = service.methods
    assert (send.method_name, send.input, send.output, send.server_streaming) == (
        "send",
        "Msg",
        "Msg",
        False,
    )
    assert service.route(send) == "Chat/Send"


def test_kotlin_empty_package_falls_back_to_generated() -> None:
    (proto,) = load_request(make_request(chat_file(package="")))
    assert build_file_data(proto, KOTLIN).package_name == "generated"


def test_field_names_become_lower_camel() -> None:
    proto = new_file("user.proto", "acme")
    add_enum(proto, "Role", "GUEST", "ADMIN")
    add_message(
        proto,
        "User",
        field("user_id", 1, FieldProto.TYPE_UINT64),
        field("role", 2, FieldProto.TYPE_ENUM, type_name=".acme.Role"),
        field("nick_names", 3, repeated=True),
    )
    (loaded,) = load_request(make_request(proto))

    data = build_file_data(loaded, KOTLIN)

    user_id, role, nick_names = data.messages[0].fields
    assert (user_id.name, user_id.type, user_id.default_value) == ("userId", "ULong", "0uL")
    assert role.default_value == "Role.GUEST"
    assert (nick_names.name, nick_names.type, nick_names.default_value) == (
        "nickNames",
        "List<String>",
        "emptyList()",
    )
    assert data.enums[0].name == "Role"
    assert [v.name for v in data.enums[0].values] == ["GUEST", "ADMIN"]


def test_empty_enum_defaults_to_unknown() -> None:
    data = build_file_data(empty_enum_file(), KOTLIN)

    assert data.enums[0].values == ()
    assert data.messages[0].fields[0].default_value == "Nothing.UNKNOWN"
    assert data.external_types == ()


def test_types_are_skipped_when_language_does_not_emit_them(chat_proto_file: ProtoFile) -> None:
    data = build_file_data(chat_proto_file, SWIFT)
    assert data.enums == ()
    assert data.messages == ()
    assert len(data.services) == 1


def test_flat_namespace_prefixes_method_types_only() -> None:
    (proto,) = load_request(make_request(chat_file(package="chat.v1")))

    data = build_file_data(proto, SWIFT)

    (service,) = data.services
    assert service.name == "Chat"
    assert service.prefix == "Chat/"
    (send,) = service.methods
    assert (send.name, send.method_name, send.input, send.output) == (
        "Send",
        "send",
        "Chat_V1_Msg",
        "Chat_V1_Msg",
    )


def test_prefix_follows_the_referencing_file_package() -> None:
    common = new_file("common.proto", "common")
    add_message(common, "Ping")
    api = new_file("api.proto", "api", dependencies=["common.proto"])
    add_service(api, "Health", rpc("Check", ".common.Ping", ".common.Ping"))
    files = load_request(make_request(common, api, generate=["api.proto"]))

    data = build_file_data(files[1], SWIFT)

    assert data.services[0].methods[0].input == "Api_Ping"


def test_file_data_helpers() -> None:
    (proto,) = load_request(make_request(chat_file(name="a/b/chat.proto")))
    data = build_file_data(proto, SWIFT)

    assert data.stem == "chat"
    assert data.depth == 2
    projection = data.for_service(data.services[0])
    assert projection.services == data.services
    assert projection.messages == ()


def test_types_from_other_files_are_collected_once() -> None:
    common, api = health_files()
    files = load_request(make_request(common, api, generate=["api/health.proto"]))

    data = build_file_data(files[1], SWIFT)

    assert data.external_types == (
        TypeRef(name="Ping", package="common", proto_name="shared/common"),
        TypeRef(name="Pong", package="common", proto_name="shared/common"),
    )


def test_field_types_count_only_when_messages_are_emitted() -> None:
    common = new_file("common.proto", "common")
    add_message(common, "Pong")
    api = new_file("api.proto", "", dependencies=["common.proto"])
    add_message(api, "Status", field("last", 1, FieldProto.TYPE_MESSAGE, type_name=".common.Pong"))
    files = load_request(make_request(common, api))

    assert build_file_data(files[1], SWIFT).external_types == ()
    assert build_file_data(files[1], KOTLIN).external_types == (
        TypeRef(name="Pong", package="common", proto_name="common"),
    )


def test_external_types_get_the_namespace_fallback() -> None:
    common = new_file("common.proto")
    add_message(common, "Ping")
    api = new_file("api.proto", "api", dependencies=["common.proto"])
    add_service(api, "Health", rpc("Check", ".Ping", ".Ping"))
    files = load_request(make_request(common, api))

    (ref,) = build_file_data(files[1], KOTLIN).external_types
    assert ref.package == "generated"
