"""protoc plugin entry point (``protoc-gen-klm``).

Reads a ``CodeGeneratorRequest`` from stdin and writes a
``CodeGeneratorResponse`` to stdout. Failures are reported through the
response's ``error`` field with no files attached.
"""

import sys

from google.protobuf.compiler import plugin_pb2

from .core.config import ConfigError, config_from_parameter
from .core.descriptors import ResolutionError, load_request
from .core.driver import Driver, GenerationResult
from .core.generator import GeneratorError
from .core.templates import TemplateError
from .logging_config import configure_logging, get_logger
from .registry import RegistryError, get_generator

logger = get_logger(__name__)

PLUGIN_ERRORS = (ConfigError, GeneratorError, RegistryError, ResolutionError, TemplateError)


def run_request(request: plugin_pb2.CodeGeneratorRequest) -> GenerationResult:
    """Generate every requested file; raises on the first failure."""
    config = config_from_parameter(request.parameter)
    generator = get_generator(config.language, config)
    files = load_request(request)
    return Driver(generator).run(files)


def generate_code(
    request: plugin_pb2.CodeGeneratorRequest,
) -> plugin_pb2.CodeGeneratorResponse:
    """Produce the plugin response for ``request``."""

    response = plugin_pb2.CodeGeneratorResponse()
    response.supported_features = plugin_pb2.CodeGeneratorResponse.FEATURE_PROTO3_OPTIONAL

    try:
        result = run_request(request)
    except PLUGIN_ERRORS as exc:
        logger.error("%s", exc)
        response.error = str(exc)
        return response

    for generated in result.files:
        out = response.file.add()
        out.name = generated.name
        out.content = generated.content.decode("utf-8")
    return response


def main() -> None:
    """Execute the protoc plugin workflow."""

    configure_logging()

    request_payload = sys.stdin.buffer.read()

    request = plugin_pb2.CodeGeneratorRequest()
    if request_payload:
        request.ParseFromString(request_payload)

    response = generate_code(request)
    sys.stdout.buffer.write(response.SerializeToString())


if __name__ == "__main__":  # pragma: no cover - convenience execution entry.
    main()
