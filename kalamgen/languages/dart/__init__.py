"""
Dart code generator module.

Generates kalam service bindings over protoc-gen-dart message classes.
"""

from .generator import DartGenerator
from .types import create_dart_type_table

__all__ = ["DartGenerator", "create_dart_type_table"]
