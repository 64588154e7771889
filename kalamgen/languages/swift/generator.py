"""
Swift code generator implementation.

Message and enum types come from swift-protobuf, so only service bindings
are rendered. Those types live in one flat namespace, hence the
package-derived ``A_B_`` prefix on every referenced type.
"""

from pathlib import Path

from ...core.generator import CodeGenerator
from ...core.types import TypeTable
from .types import create_swift_type_table


class SwiftGenerator(CodeGenerator):
    """Code generator for Swift async clients and callback routers."""

    flat_namespace = True
    runtime_asset = "kalam.swift"

    @property
    def language_name(self) -> str:
        """Return the language name."""
        return "swift"

    @property
    def file_extension(self) -> str:
        return ".klm.swift"

    @property
    def template_name(self) -> str:
        return "file.klm.swift.j2"

    def type_table(self) -> TypeTable:
        return create_swift_type_table()

    def get_template_directory(self) -> Path:
        """Return the Swift templates directory."""
        return Path(__file__).parent / "templates"
