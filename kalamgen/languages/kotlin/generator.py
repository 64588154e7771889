"""
Kotlin code generator implementation.

Emits kotlinx-serialization enums and data classes plus coroutine based
client objects, handler interfaces and routers for every service.
"""

from pathlib import Path
from typing import Any, Dict, List

from ...core.generator import CodeGenerator
from ...core.ir import FileData
from ...core.types import TypeTable
from .types import create_kotlin_type_table


class KotlinGenerator(CodeGenerator):
    """Code generator for Kotlin clients and servers."""

    namespace_fallback = "generated"
    emits_types = True

    @property
    def language_name(self) -> str:
        """Return the language name."""
        return "kotlin"

    @property
    def file_extension(self) -> str:
        return ".klm.kt"

    @property
    def template_name(self) -> str:
        return "file.klm.kt.j2"

    def type_table(self) -> TypeTable:
        return create_kotlin_type_table()

    def get_template_directory(self) -> Path:
        """Return the Kotlin templates directory."""
        return Path(__file__).parent / "templates"

    def type_imports(self, file_data: FileData) -> List[str]:
        """``import`` targets for types living in another Kotlin package."""
        return sorted(
            {
                f"{ref.package}.{ref.name}"
                for ref in file_data.external_types
                if ref.package and ref.package != file_data.package_name
            }
        )

    def get_template_context(self, file_data: FileData) -> Dict[str, Any]:
        context = super().get_template_context(file_data)
        context["type_imports"] = self.type_imports(file_data)
        return context
