"""Tests for the generation driver."""

from __future__ import annotations

from pathlib import Path

import pytest

from kalamgen.core.config import GeneratorConfig
from kalamgen.core.descriptors import load_request
from kalamgen.core.driver import Driver, generate_code
from kalamgen.core.generator import RenderError
from kalamgen.core.runtime import RuntimeAssetError, RuntimeBundler
from kalamgen.core.templates import TemplateError
from kalamgen.languages import DartGenerator, KotlinGenerator
from tests._fixtures.protos import chat_file, make_request

# Fails only for b.proto: StrictUndefined rejects the missing attribute
FAIL_ON_B = "{% if file.file_name == 'b.proto' %}{{ file.no_such_field }}{% endif %}ok {{ file.file_name }}\n"


class InMemoryKotlinGenerator(KotlinGenerator):
    template_source = FAIL_ON_B

    def get_template_directory(self):
        return None

    def _setup_templates(self):
        super()._setup_templates()
        self._template_engine.add_template(self.template_name, self.template_source)


class MissingTemplateGenerator(KotlinGenerator):
    @property
    def template_name(self) -> str:
        return "missing.j2"


def three_files():
    return load_request(
        make_request(
            chat_file(name="a.proto", package="a"),
            chat_file(name="b.proto", package="b"),
            chat_file(name="c.proto", package="c"),
        )
    )


def test_files_not_marked_are_never_built(monkeypatch: pytest.MonkeyPatch) -> None:
    files = load_request(
        make_request(
            chat_file(name="a.proto", package="a"),
            chat_file(name="b.proto", package="b"),
            generate=["b.proto"],
        )
    )
    generator = KotlinGenerator(GeneratorConfig(language="kotlin"))
    seen = []
    original = generator.build_file_data

    def spy(proto_file):
        seen.append(proto_file.name)
        return original(proto_file)

    monkeypatch.setattr(generator, "build_file_data", spy)

    result = Driver(generator).run(files)

    assert seen == ["b.proto"]
    assert result.file_names == ["b.klm.kt"]
    assert result.metadata["skipped_files"] == 1


def test_render_failure_on_second_file_returns_nothing() -> None:
    generator = InMemoryKotlinGenerator(GeneratorConfig(language="kotlin"))
    outputs = None

    with pytest.raises(RenderError) as excinfo:
        outputs = Driver(generator).run(three_files())

    assert outputs is None
    assert excinfo.value.file == "b.proto"
    assert "b.proto" in str(excinfo.value)


def test_template_is_acquired_before_any_file(monkeypatch: pytest.MonkeyPatch) -> None:
    generator = MissingTemplateGenerator(GeneratorConfig(language="kotlin"))
    calls = []
    monkeypatch.setattr(generator, "generate_file", lambda f: calls.append(f))

    with pytest.raises(TemplateError, match="missing.j2"):
        Driver(generator).run(three_files())

    assert calls == []


def test_runtime_is_bundled_once_after_all_files() -> None:
    generator = DartGenerator(GeneratorConfig(language="dart"))

    result = generate_code(generator, three_files())

    assert result.file_names == ["a.klm.dart", "b.klm.dart", "c.klm.dart", "kalam.dart"]
    assert result.metadata["runtime"] == "kalam.dart"
    assert result.metadata["schema_files"] == 3


def test_runtime_output_name_and_opt_out() -> None:
    renamed = DartGenerator(GeneratorConfig(language="dart", runtime_output="lib/kalam.dart"))
    assert generate_code(renamed, three_files()).file_names[-1] == "lib/kalam.dart"

    disabled = DartGenerator(GeneratorConfig(language="dart", bundle_runtime=False))
    result = generate_code(disabled, three_files())
    assert "kalam.dart" not in result.file_names
    assert result.metadata["runtime"] is None


def test_languages_without_runtime_skip_bundling() -> None:
    result = generate_code(KotlinGenerator(GeneratorConfig(language="kotlin")), three_files())
    assert result.file_names == ["a.klm.kt", "b.klm.kt", "c.klm.kt"]


def test_unreadable_runtime_aborts_the_run(tmp_path: Path) -> None:
    generator = DartGenerator(GeneratorConfig(language="dart"))
    with pytest.raises(RuntimeAssetError):
        Driver(generator, RuntimeBundler(tmp_path)).run(three_files())


def test_output_is_deterministic() -> None:
    generator = DartGenerator(GeneratorConfig(language="dart"))
    first = generate_code(generator, three_files())
    second = generate_code(generator, three_files())
    assert first.files == second.files
