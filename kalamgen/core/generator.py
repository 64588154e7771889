"""
Base generator interface for all code generation targets.

A CodeGenerator subclass is the whole per-language policy: type table,
output suffix, namespace fallback, flat-namespace prefixing, enum/message
emission, runtime asset and file granularity. Nothing outside the
language packages branches on a language name.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

from jinja2 import Template

from ..logging_config import get_logger
from .builder import BuildOptions, build_file_data
from .config import FileGranularity, GeneratorConfig, load_config
from .descriptors import ProtoFile
from .ir import FileData
from .naming import to_snake_case
from .templates import TemplateEngine, TemplateError, create_template_engine
from .types import TypeMapper, TypeTable

logger = get_logger(__name__)

GENERATOR_NAME = "protoc-gen-klm"


class GeneratorError(Exception):
    """Base exception for code generation errors."""

    pass


class RenderError(GeneratorError):
    """A template failed against a built FileData."""

    def __init__(self, file: str, message: str, service: Optional[str] = None):
        where = f"{file} ({service})" if service else file
        super().__init__(f"Failed to render {where}: {message}")
        self.file = file
        self.service = service


@dataclass(frozen=True)
class GeneratedFile:
    """One output file: name relative to the output root, and its content."""

    name: str
    content: bytes

    @property
    def text(self) -> str:
        return self.content.decode("utf-8")


class CodeGenerator(ABC):
    """Abstract base class for all code generators."""

    #: Empty package replacement, for languages with mandatory namespaces
    namespace_fallback: Optional[str] = None
    #: Whether enums and messages are rendered, not only services
    emits_types: bool = False
    #: Whether cross references get a package derived ``A_B_`` prefix
    flat_namespace: bool = False
    #: Bundled runtime file name under kalamgen/runtime, or None
    runtime_asset: Optional[str] = None
    granularity: FileGranularity = FileGranularity.PER_FILE

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """Initialize generator with optional configuration."""
        self.config = config or load_config(self.language_name)
        self.type_mapper = TypeMapper(self.type_table())
        self._template_engine = None
        self._template = None
        self._setup_templates()

    def _setup_templates(self):
        """Setup template engine for this generator."""
        self._template_engine = create_template_engine(self.get_template_directory())

    @property
    @abstractmethod
    def language_name(self) -> str:
        """Return the name of the target language (e.g., 'kotlin')."""
        pass

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """Return the compound suffix of generated files (e.g., '.klm.kt')."""
        pass

    @property
    @abstractmethod
    def template_name(self) -> str:
        """Return the name of the file template."""
        pass

    @abstractmethod
    def type_table(self) -> TypeTable:
        """Return the scalar type and default-literal table."""
        pass

    def get_template_directory(self) -> Optional[Path]:
        """
        Return the directory containing templates for this generator.

        Subclasses should override this to provide their template directory.
        Return None to use in-memory templates only.
        """
        return None

    @property
    def template_engine(self) -> TemplateEngine:
        """Get the template engine for this generator."""
        if self._template_engine is None:
            self._setup_templates()
        return self._template_engine

    # Effective policy: config overrides first, class defaults second

    @property
    def effective_namespace_fallback(self) -> Optional[str]:
        if self.config.namespace_fallback is not None:
            return self.config.namespace_fallback
        return self.namespace_fallback

    @property
    def effective_granularity(self) -> FileGranularity:
        return self.config.granularity or self.granularity

    @property
    def needs_runtime(self) -> bool:
        return self.runtime_asset is not None and self.config.bundle_runtime

    @property
    def runtime_output_name(self) -> Optional[str]:
        if self.runtime_asset is None:
            return None
        return self.config.runtime_output or self.runtime_asset

    def build_options(self) -> BuildOptions:
        return BuildOptions(
            type_mapper=self.type_mapper,
            namespace_fallback=self.effective_namespace_fallback,
            emits_types=self.emits_types,
            flat_namespace=self.flat_namespace,
        )

    def load_template(self) -> Template:
        """
        Acquire the file template once per run.

        Raises:
            TemplateError: If the template is missing or does not parse
        """
        if self._template is None:
            self._template = self.template_engine.get_template(self.template_name)
        return self._template

    def build_file_data(self, proto_file: ProtoFile) -> FileData:
        return build_file_data(proto_file, self.build_options())

    def output_name(self, file_data: FileData, service_name: Optional[str] = None) -> str:
        """
        ``pkg/thing`` + ``.klm.kt`` -> ``pkg/thing.klm.kt``; per-service output
        adds ``_<service_in_snake_case>`` before the suffix.
        """
        base = file_data.proto_name
        if service_name:
            base = f"{base}_{to_snake_case(service_name)}"
        return base + self.file_extension

    def get_template_context(self, file_data: FileData) -> Dict[str, Any]:
        """Variables handed to the template besides the FileData itself."""
        return {
            "file": file_data,
            "generator": GENERATOR_NAME,
            "add_comments": self.config.add_comments,
            "language": self.language_name,
        }

    def render(self, file_data: FileData, service_name: Optional[str] = None) -> str:
        """Render one FileData (or per-service projection) to text."""
        template = self.load_template()
        try:
            code = self.template_engine.render(
                template, self.get_template_context(file_data)
            )
        except TemplateError as e:
            raise RenderError(file_data.file_name, str(e), service_name) from e
        return self.format_code(code)

    def generate_file(self, proto_file: ProtoFile) -> List[GeneratedFile]:
        """
        Build the IR for one schema file and render it under the configured
        granularity.
        """
        file_data = self.build_file_data(proto_file)
        logger.debug(
            "Built IR for %s: %d enums, %d messages, %d services",
            proto_file.name,
            len(file_data.enums),
            len(file_data.messages),
            len(file_data.services),
        )

        if self.effective_granularity == FileGranularity.PER_SERVICE:
            outputs = []
            for service in file_data.services:
                projection = file_data.for_service(service)
                code = self.render(projection, service.name)
                outputs.append(
                    GeneratedFile(
                        self.output_name(file_data, service.name), code.encode("utf-8")
                    )
                )
            return outputs

        code = self.render(file_data)
        return [GeneratedFile(self.output_name(file_data), code.encode("utf-8"))]

    def format_code(self, code: str) -> str:
        """
        Apply basic formatting to generated code.

        Strips trailing whitespace, collapses runs of more than two blank
        lines and ends the file with exactly one newline.
        """
        lines = code.split("\n")
        formatted_lines = []
        blank_count = 0

        for line in lines:
            stripped = line.rstrip()
            if not stripped:
                blank_count += 1
                if blank_count <= 2:
                    formatted_lines.append("")
            else:
                blank_count = 0
                formatted_lines.append(stripped)

        return "\n".join(formatted_lines).strip("\n") + "\n"

    def describe(self) -> Dict[str, Any]:
        """Capability summary, shown by the CLI."""
        return {
            "name": self.language_name,
            "file_extension": self.file_extension,
            "template": self.template_name,
            "namespace_fallback": self.effective_namespace_fallback,
            "emits_types": self.emits_types,
            "flat_namespace": self.flat_namespace,
            "runtime": self.runtime_output_name if self.needs_runtime else None,
            "granularity": self.effective_granularity.value,
            "scalar_types": self.type_mapper.describe(),
        }
