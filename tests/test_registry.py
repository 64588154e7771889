"""Tests for language registration and lookup."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from kalamgen.core.config import GeneratorConfig
from kalamgen.languages import DartGenerator, KotlinGenerator, SwiftGenerator
from kalamgen.registry import (
    GeneratorRegistry,
    RegistryError,
    get_generator,
    get_language_info,
    is_language_supported,
    list_all_language_info,
    list_supported_languages,
)


def test_builtin_languages() -> None:
    assert list_supported_languages() == ["dart", "kotlin", "swift"]
    assert is_language_supported("KT")
    assert not is_language_supported("go")


def test_alias_resolves_to_kotlin() -> None:
    generator = get_generator("kt")
    assert isinstance(generator, KotlinGenerator)
    assert generator.config.language == "kotlin"


def test_unknown_language_lists_alternatives() -> None:
    with pytest.raises(RegistryError, match="Available: dart, kotlin, swift"):
        get_generator("cobol")


def test_create_generator_config_forms(tmp_path: Path) -> None:
    explicit = get_generator("swift", GeneratorConfig(language="swift", add_comments=False))
    assert isinstance(explicit, SwiftGenerator)
    assert explicit.config.add_comments is False

    overrides = get_generator("dart", {"bundle_runtime": "no"})
    assert isinstance(overrides, DartGenerator)
    assert overrides.config.bundle_runtime is False

    path = tmp_path / "kalam.json"
    path.write_text(json.dumps({"namespace_fallback": "app"}), encoding="utf-8")
    from_file = get_generator("kotlin", path)
    assert from_file.effective_namespace_fallback == "app"

    with pytest.raises(RegistryError, match="Invalid config type"):
        get_generator("dart", 42)


def test_register_rejects_non_generators() -> None:
    registry = GeneratorRegistry()
    with pytest.raises(RegistryError):
        registry.register("text", str)


def test_alias_conflicts() -> None:
    registry = GeneratorRegistry()
    registry.register("kotlin", KotlinGenerator, aliases=["kt"])
    registry.register("swift", SwiftGenerator)

    with pytest.raises(RegistryError, match="conflicts"):
        registry.register("dart", DartGenerator, aliases=["swift"])
    with pytest.raises(RegistryError, match="already points"):
        registry.register("dart", DartGenerator, aliases=["kt"])

    assert not registry.is_supported("dart")
    assert registry.resolve_name("kt") == "kotlin"


def test_aliases_are_case_insensitive() -> None:
    registry = GeneratorRegistry()
    registry.register("kotlin", KotlinGenerator, aliases=["kt", "KOTLIN"])

    assert registry.get_aliases_for_language("kotlin") == ["kt"]
    assert registry.resolve_name("KT") == "kotlin"
    assert registry.list_languages() == ["kotlin"]


def test_language_info_carries_capabilities() -> None:
    info = get_language_info("kt")
    assert info["name"] == "kotlin"
    assert info["class"] == "KotlinGenerator"
    assert info["aliases"] == ["kt"]
    assert info["file_extension"] == ".klm.kt"
    assert info["namespace_fallback"] == "generated"
    assert info["emits_types"] is True
    assert info["runtime"] is None

    all_info = list_all_language_info()
    assert all_info["swift"]["flat_namespace"] is True
    assert all_info["swift"]["runtime"] == "kalam.swift"
    assert all_info["dart"]["runtime"] == "kalam.dart"
    assert all_info["dart"]["granularity"] == "per_file"
    assert all_info["dart"]["scalar_types"]["uint64"] == "Int64"
