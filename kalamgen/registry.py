"""
Generator registry system for managing available code generators.

Maps language selectors (and their aliases) to CodeGenerator classes.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Type, Union

from .core.config import GeneratorConfig, load_config
from .core.generator import CodeGenerator


class RegistryError(Exception):
    """Exception raised for registry-related errors."""

    pass


class GeneratorRegistry:
    """Registry for managing available code generators."""

    def __init__(self):
        """Initialize empty registry."""
        self._generators: Dict[str, Type[CodeGenerator]] = {}
        self._aliases: Dict[str, str] = {}

    def register(
        self,
        language: str,
        generator_class: Type[CodeGenerator],
        aliases: Optional[List[str]] = None,
        replace: bool = False,
    ):
        """
        Register a generator for a language.

        Args:
            language: Primary language name (e.g., 'kotlin', 'swift')
            generator_class: Generator class implementing CodeGenerator
            aliases: Alternative names for this language
            replace: If True, replace existing registration. If False, skip if exists.

        Raises:
            RegistryError: If generator class is invalid or conflicts exist
        """
        if not (isinstance(generator_class, type) and issubclass(generator_class, CodeGenerator)):
            raise RegistryError("Generator class must inherit from CodeGenerator")

        language_key = language.lower()

        if language_key in self._generators and not replace:
            return

        alias_keys = [a.lower() for a in aliases or [] if a.lower() != language_key]

        # Check every alias before touching the registry
        if not replace:
            for alias_key in alias_keys:
                if alias_key in self._generators:
                    raise RegistryError(
                        f"Alias '{alias_key}' conflicts with existing primary language"
                    )
                if alias_key in self._aliases and self._aliases[alias_key] != language_key:
                    raise RegistryError(
                        f"Alias '{alias_key}' already points to '{self._aliases[alias_key]}'"
                    )

        self._generators[language_key] = generator_class
        for alias_key in alias_keys:
            self._aliases[alias_key] = language_key

    def resolve_name(self, language: str) -> str:
        """
        Map a selector or alias to the primary language name.

        Raises:
            RegistryError: If language not found
        """
        language_key = language.lower()
        if language_key in self._generators:
            return language_key
        if language_key in self._aliases:
            return self._aliases[language_key]

        raise RegistryError(
            f"No generator registered for language: {language}. "
            f"Available: {', '.join(self.list_languages())}"
        )

    def create_generator(
        self,
        language: str,
        config: Optional[Union[GeneratorConfig, Dict[str, Any], str, Path]] = None,
    ) -> CodeGenerator:
        """
        Create generator instance for language.

        Args:
            language: Language name or alias
            config: Configuration as GeneratorConfig, dict of overrides, or
                JSON file path

        Returns:
            Configured generator instance

        Raises:
            RegistryError: Unknown language or unusable config argument
            ConfigError: The configuration itself is invalid
        """
        primary = self.resolve_name(language)
        generator_class = self._generators[primary]

        if isinstance(config, GeneratorConfig):
            final_config = config
        elif isinstance(config, (str, Path)):
            final_config = load_config(primary, config_file=config)
        elif isinstance(config, dict):
            final_config = load_config(primary, custom_config=config)
        elif config is None:
            final_config = load_config(primary)
        else:
            raise RegistryError(f"Invalid config type: {type(config)}")

        return generator_class(final_config)

    def list_languages(self) -> List[str]:
        """Get list of registered primary language names."""
        return sorted(self._generators.keys())

    def get_aliases_for_language(self, language: str) -> List[str]:
        """Get all aliases for a specific primary language."""
        language_key = language.lower()
        return sorted(alias for alias, target in self._aliases.items() if target == language_key)

    def is_supported(self, language: str) -> bool:
        """Check if a language name or alias is registered."""
        language_key = language.lower()
        return language_key in self._generators or language_key in self._aliases

    def get_language_info(self, language: str) -> Dict[str, Any]:
        """
        Get information about a registered language.

        Raises:
            RegistryError: If language not found
        """
        primary = self.resolve_name(language)
        generator_class = self._generators[primary]
        generator = generator_class(load_config(primary))

        info = generator.describe()
        info.update(
            {
                "class": generator_class.__name__,
                "aliases": self.get_aliases_for_language(primary),
                "module": generator_class.__module__,
            }
        )
        return info


# Global registry instance - created once
_global_registry: Optional[GeneratorRegistry] = None


def get_registry() -> GeneratorRegistry:
    """Get the global generator registry, initializing if needed."""
    global _global_registry
    if _global_registry is None:
        _global_registry = GeneratorRegistry()
        _auto_register_generators(_global_registry)
    return _global_registry


def _auto_register_generators(registry: GeneratorRegistry):
    """Register the built-in languages with their aliases."""
    from .languages.dart import DartGenerator
    from .languages.kotlin import KotlinGenerator
    from .languages.swift import SwiftGenerator

    registry.register("kotlin", KotlinGenerator, aliases=["kt"])
    registry.register("swift", SwiftGenerator)
    registry.register("dart", DartGenerator)


# Public API functions using the global registry


def get_generator(
    language: str,
    config: Optional[Union[GeneratorConfig, Dict[str, Any], str, Path]] = None,
) -> CodeGenerator:
    """Get generator instance from global registry."""
    return get_registry().create_generator(language, config)


def list_supported_languages() -> List[str]:
    """List all supported languages from global registry."""
    return get_registry().list_languages()


def is_language_supported(language: str) -> bool:
    """Check if language is supported by global registry."""
    return get_registry().is_supported(language)


def get_language_info(language: str) -> Dict[str, Any]:
    """Get information about a supported language."""
    return get_registry().get_language_info(language)


def list_all_language_info() -> Dict[str, Dict[str, Any]]:
    """Get information about all supported languages."""
    return {language: get_language_info(language) for language in list_supported_languages()}
