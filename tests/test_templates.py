"""Tests for the jinja2 template engine wrapper."""

from __future__ import annotations

from pathlib import Path

import pytest

from kalamgen.core.templates import TemplateError, create_template_engine


def test_in_memory_templates() -> None:
    engine = create_template_engine()
    engine.add_template("hello.j2", "hello {{ name }}")
    template = engine.get_template("hello.j2")
    assert engine.render(template, {"name": "kalam"}) == "hello kalam"


def test_directory_templates(tmp_path: Path) -> None:
    (tmp_path / "file.j2").write_text("package {{ pkg }}\n", encoding="utf-8")
    engine = create_template_engine(tmp_path)
    assert engine.render(engine.get_template("file.j2"), {"pkg": "chat"}) == "package chat\n"


def test_block_tags_do_not_leave_blank_lines() -> None:
    engine = create_template_engine()
    engine.add_template("loop.j2", "{% for x in items %}\n  {{ x }}\n{% endfor %}\n")
    assert engine.render(engine.get_template("loop.j2"), {"items": ["a", "b"]}) == "  a\n  b\n"


def test_missing_template_raises() -> None:
    with pytest.raises(TemplateError, match="not found"):
        create_template_engine().get_template("nope.j2")


def test_unparseable_template_raises() -> None:
    engine = create_template_engine()
    engine.add_template("broken.j2", "{% for x in %}")
    with pytest.raises(TemplateError, match="parse"):
        engine.get_template("broken.j2")


def test_undefined_variable_fails_rendering() -> None:
    engine = create_template_engine()
    engine.add_template("strict.j2", "{{ file.missing_attribute }}")
    with pytest.raises(TemplateError, match="render"):
        engine.render(engine.get_template("strict.j2"), {"file": object()})
