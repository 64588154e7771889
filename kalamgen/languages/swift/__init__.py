"""
Swift code generator module.

Generates kalam service bindings over swift-protobuf message types.
"""

from .generator import SwiftGenerator
from .types import create_swift_type_table

__all__ = ["SwiftGenerator", "create_swift_type_table"]
