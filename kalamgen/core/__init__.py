"""
Language independent building blocks: descriptor graph, IR, type mapping,
templates, configuration and the generation driver.
"""

from .config import ConfigError, FileGranularity, GeneratorConfig, load_config
from .descriptors import ResolutionError, load_file_set, load_request
from .driver import Driver, GenerationResult, generate_code
from .generator import CodeGenerator, GeneratedFile, GeneratorError, RenderError
from .ir import Enum, EnumValue, Field, FileData, Message, Method, Service, TypeRef
from .runtime import RuntimeAssetError, RuntimeBundler
from .templates import TemplateEngine, TemplateError

__all__ = [
    "CodeGenerator",
    "ConfigError",
    "Driver",
    "Enum",
    "EnumValue",
    "Field",
    "FileData",
    "FileGranularity",
    "GeneratedFile",
    "GenerationResult",
    "GeneratorConfig",
    "GeneratorError",
    "Message",
    "Method",
    "RenderError",
    "ResolutionError",
    "RuntimeAssetError",
    "RuntimeBundler",
    "Service",
    "TemplateEngine",
    "TemplateError",
    "TypeRef",
    "generate_code",
    "load_config",
    "load_file_set",
    "load_request",
]
