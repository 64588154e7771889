from __future__ import annotations

import pytest

from kalamgen.core.config import GeneratorConfig
from kalamgen.core.descriptors import ProtoFile, load_request
from tests._fixtures.protos import chat_file, make_request, user_file


@pytest.fixture
def chat_proto_file() -> ProtoFile:
    """The resolved ``chat.proto`` schema, marked for generation."""
    return load_request(make_request(chat_file()))[0]


@pytest.fixture
def user_proto_file() -> ProtoFile:
    """The resolved ``testdata/user.proto`` schema, marked for generation."""
    return load_request(make_request(user_file()))[0]


@pytest.fixture
def config_factory():
    """Build a GeneratorConfig for a language with keyword overrides."""

    def _factory(language: str, **overrides) -> GeneratorConfig:
        return GeneratorConfig(language=language, **overrides)

    return _factory
