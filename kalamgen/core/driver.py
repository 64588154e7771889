"""
Generation driver.

Runs one language over every schema file marked for generation and returns
the complete output set, or raises without returning anything.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from ..logging_config import get_logger
from .descriptors import ProtoFile
from .generator import CodeGenerator, GeneratedFile
from .runtime import RuntimeBundler, get_runtime_bundler

logger = get_logger(__name__)


@dataclass
class GenerationResult:
    """Container for generated files and metadata about the run."""

    files: List[GeneratedFile] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def file_names(self) -> List[str]:
        return [f.name for f in self.files]


class Driver:
    """Orchestrates builder, renderer and runtime bundler for one language."""

    def __init__(
        self,
        generator: CodeGenerator,
        bundler: Optional[RuntimeBundler] = None,
    ):
        self.generator = generator
        self.bundler = bundler or get_runtime_bundler()

    def run(self, files: Iterable[ProtoFile]) -> GenerationResult:
        """
        Generate every file whose ``generate`` flag is set, in input order.

        The template is acquired before any file is touched and the runtime
        asset is added once at the end. Any failure propagates and leaves
        the caller with no output.

        Raises:
            TemplateError: The language template is missing or broken
            RenderError: A file failed to render
            RuntimeAssetError: The runtime asset cannot be read
        """
        generator = self.generator
        generator.load_template()

        outputs: List[GeneratedFile] = []
        processed = 0
        skipped = 0
        for proto_file in files:
            if not proto_file.generate:
                skipped += 1
                continue
            logger.debug("Generating %s for %s", generator.language_name, proto_file.name)
            try:
                outputs.extend(generator.generate_file(proto_file))
            except Exception:
                logger.error("Generation failed on %s", proto_file.name)
                raise
            processed += 1

        if generator.needs_runtime:
            outputs.append(
                self.bundler.bundle(generator.runtime_asset, generator.runtime_output_name)
            )

        logger.info(
            "Generated %d file(s) from %d schema file(s) for %s (%d skipped)",
            len(outputs),
            processed,
            generator.language_name,
            skipped,
        )
        result = GenerationResult(
            files=outputs,
            metadata={
                "language": generator.language_name,
                "file_extension": generator.file_extension,
                "schema_files": processed,
                "skipped_files": skipped,
                "granularity": generator.effective_granularity.value,
                "runtime": generator.runtime_output_name if generator.needs_runtime else None,
            },
        )
        logger.debug("Outputs: %s", ", ".join(result.file_names))
        return result


def generate_code(
    generator: CodeGenerator, files: Iterable[ProtoFile]
) -> GenerationResult:
    """
    Generate code for a descriptor graph with the given generator.

    Args:
        generator: Code generator instance
        files: Loaded schema files, in request order

    Returns:
        GenerationResult with every output file
    """
    return Driver(generator).run(files)
