"""
Kotlin code generator module.

Generates kotlinx-serialization types and kalam service bindings.
"""

from .generator import KotlinGenerator
from .types import create_kotlin_type_table

__all__ = ["KotlinGenerator", "create_kotlin_type_table"]
