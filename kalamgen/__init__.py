"""
kalamgen: protoc plugin emitting kalam RPC bindings.

Generates Kotlin, Swift and Dart client stubs, handler interfaces and
routers from protobuf service definitions.
"""

__version__ = "0.1.0"

from .core.config import GeneratorConfig, load_config
from .core.driver import Driver, GenerationResult, generate_code
from .core.generator import CodeGenerator, GeneratorError
from .registry import (
    GeneratorRegistry,
    get_generator,
    get_language_info,
    list_all_language_info,
    list_supported_languages,
)

__all__ = [
    "CodeGenerator",
    "Driver",
    "GenerationResult",
    "GeneratorConfig",
    "GeneratorError",
    "GeneratorRegistry",
    "generate_code",
    "get_generator",
    "get_language_info",
    "list_all_language_info",
    "list_supported_languages",
    "load_config",
]
