"""
Language-specific code generators.

One package per target language; each exports its CodeGenerator subclass.
"""

from .dart import DartGenerator
from .kotlin import KotlinGenerator
from .swift import SwiftGenerator

__all__ = ["DartGenerator", "KotlinGenerator", "SwiftGenerator"]
