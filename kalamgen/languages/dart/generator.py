"""
Dart code generator implementation.

Services only; messages come from the ``.pb.dart`` file protoc-gen-dart
writes next to ours.
"""

import posixpath
from pathlib import Path
from typing import Any, Dict, List

from ...core.generator import CodeGenerator
from ...core.ir import FileData
from ...core.types import TypeTable
from .types import create_dart_type_table

MESSAGES_SUFFIX = ".pb.dart"


class DartGenerator(CodeGenerator):
    """Code generator for Dart Future/Stream clients and routers."""

    runtime_asset = "kalam.dart"

    @property
    def language_name(self) -> str:
        """Return the language name."""
        return "dart"

    @property
    def file_extension(self) -> str:
        return ".klm.dart"

    @property
    def template_name(self) -> str:
        return "file.klm.dart.j2"

    def type_table(self) -> TypeTable:
        return create_dart_type_table()

    def get_template_directory(self) -> Path:
        """Return the Dart templates directory."""
        return Path(__file__).parent / "templates"

    def dependency_imports(self, file_data: FileData) -> List[str]:
        """
        Relative ``.pb.dart`` paths of the other schema files whose messages
        this file uses, in first-reference order.
        """
        here = posixpath.dirname(file_data.proto_name) or "."
        imports = []
        for ref in file_data.external_types:
            target = posixpath.relpath(ref.proto_name + MESSAGES_SUFFIX, here)
            if target not in imports:
                imports.append(target)
        return imports

    def get_template_context(self, file_data: FileData) -> Dict[str, Any]:
        context = super().get_template_context(file_data)
        # Runtime sits at the output root; imports are relative to this file
        context["runtime_import"] = "../" * file_data.depth + (
            self.runtime_output_name or "kalam.dart"
        )
        context["messages_import"] = file_data.stem + MESSAGES_SUFFIX
        context["dependency_imports"] = self.dependency_imports(file_data)
        return context
