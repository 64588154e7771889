"""Tests for the runtime support file bundler."""

from __future__ import annotations

from pathlib import Path

import pytest

from kalamgen.core.runtime import RUNTIME_DIR, RuntimeAssetError, RuntimeBundler


def test_bundled_assets_ship_with_the_package() -> None:
    assert RuntimeBundler().available() == ["kalam.dart", "kalam.swift"]


def test_bundle_copies_bytes_verbatim() -> None:
    bundled = RuntimeBundler().bundle("kalam.swift")
    assert bundled.name == "kalam.swift"
    assert bundled.content == (RUNTIME_DIR / "kalam.swift").read_bytes()
    assert b"protocol ServiceRouter" in bundled.content


def test_bundle_under_another_name(tmp_path: Path) -> None:
    (tmp_path / "kalam.dart").write_bytes(b"// runtime\n")
    bundled = RuntimeBundler(tmp_path).bundle("kalam.dart", "lib/src/kalam.dart")
    assert bundled.name == "lib/src/kalam.dart"
    assert bundled.text == "// runtime\n"


def test_missing_asset_raises(tmp_path: Path) -> None:
    (tmp_path / "kalam.swift").write_bytes(b"")
    with pytest.raises(RuntimeAssetError, match=r"kalam.dart.*available: kalam.swift"):
        RuntimeBundler(tmp_path).read("kalam.dart")


def test_available_without_directory(tmp_path: Path) -> None:
    assert RuntimeBundler(tmp_path / "absent").available() == []
