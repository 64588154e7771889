"""
Configuration management for code generation.

Handles the protoc parameter string, JSON config files and per-language
defaults, merging them into one GeneratorConfig per run.
"""

import json
from dataclasses import dataclass, fields
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, Union

from ..logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_LANGUAGE = "dart"
LANGUAGE_KEY = "lang"
CONFIG_FILE_KEY = "config"


class ConfigError(Exception):
    """Exception raised for configuration-related errors."""

    pass


class FileGranularity(Enum):
    """How many output files one schema file turns into."""

    PER_FILE = "per_file"
    PER_SERVICE = "per_service"


@dataclass
class GeneratorConfig:
    """Options for one generation run."""

    language: str = DEFAULT_LANGUAGE

    # None keeps the language's own policy
    namespace_fallback: Optional[str] = None
    granularity: Optional[FileGranularity] = None

    # Runtime support file
    bundle_runtime: bool = True
    runtime_output: Optional[str] = None

    # Header comment in generated files
    add_comments: bool = True


def parse_parameter(parameter: str) -> Dict[str, str]:
    """
    Parse a protoc parameter string.

    ``"lang=swift, granularity=per_file"`` -> ``{"lang": "swift", ...}``.
    Pairs are comma separated and split on the first ``=``; a bare key
    maps to the empty string and empty chunks are skipped.
    """
    values: Dict[str, str] = {}
    if not parameter:
        return values
    for chunk in parameter.split(","):
        chunk = chunk.strip()
        if not chunk:
            continue
        key, _, value = chunk.partition("=")
        key = key.strip()
        if not key:
            continue
        values[key] = value.strip()
    return values


_TRUE = {"1", "true", "yes", "on", ""}
_FALSE = {"0", "false", "no", "off"}


def _to_bool(key: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ConfigError(f"Invalid boolean for {key}: {value!r}")


class ConfigManager:
    """Manages configuration loading and merging."""

    def __init__(self):
        """Initialize configuration manager."""
        self._configs: Dict[str, Dict[str, Any]] = {}
        self._load_defaults()

    def _load_defaults(self):
        """Load default configurations for supported languages."""
        self._configs["kotlin"] = {
            "add_comments": True,
            "bundle_runtime": True,
        }
        self._configs["swift"] = {
            "add_comments": True,
            "bundle_runtime": True,
        }
        self._configs["dart"] = {
            "add_comments": True,
            "bundle_runtime": True,
        }

    def get_config(
        self,
        language: str,
        custom_config: Optional[Dict[str, Any]] = None,
        config_file: Optional[Union[str, Path]] = None,
    ) -> GeneratorConfig:
        """
        Get complete configuration for a language.

        Args:
            language: Target language name
            custom_config: Custom configuration overrides
            config_file: Path to JSON configuration file

        Returns:
            Merged configuration for the language
        """
        base_config = dict(self._configs.get(language, {}))

        if config_file:
            base_config.update(self._load_config_file(config_file))

        if custom_config:
            base_config.update(custom_config)

        # The selector itself always wins over a language key in a file.
        base_config["language"] = language
        return self._dict_to_config(base_config)

    def _load_config_file(self, config_path: Union[str, Path]) -> Dict[str, Any]:
        """Load configuration from JSON file."""
        path = Path(config_path)

        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        if not path.suffix.lower() == ".json":
            raise ConfigError(f"Configuration file must be JSON: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                config = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in configuration file {path}: {e}") from e
        except OSError as e:
            raise ConfigError(f"Failed to load configuration file {path}: {e}") from e

        if not isinstance(config, dict):
            raise ConfigError(f"Configuration file must contain a JSON object: {path}")

        logger.debug("Loaded configuration file %s", path)
        return config

    def _dict_to_config(self, config_dict: Dict[str, Any]) -> GeneratorConfig:
        """Convert dictionary to GeneratorConfig instance."""
        known_fields = {f.name for f in fields(GeneratorConfig)}

        config_args = {}
        for key, value in config_dict.items():
            if key in known_fields:
                config_args[key] = value
            else:
                logger.warning("Ignoring unknown option %r", key)

        granularity = config_args.get("granularity")
        if granularity is not None and not isinstance(granularity, FileGranularity):
            try:
                config_args["granularity"] = FileGranularity(str(granularity).lower())
            except ValueError:
                raise ConfigError(f"Invalid granularity: {granularity!r}") from None

        for key in ("bundle_runtime", "add_comments"):
            if key in config_args:
                config_args[key] = _to_bool(key, config_args[key])

        for key in ("namespace_fallback", "runtime_output"):
            if config_args.get(key) == "":
                config_args[key] = None

        return GeneratorConfig(**config_args)


# Global configuration manager instance
_config_manager = None


def get_config_manager() -> ConfigManager:
    """Get the global configuration manager instance."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def load_config(
    language: str = DEFAULT_LANGUAGE,
    custom_config: Optional[Dict[str, Any]] = None,
    config_file: Optional[Union[str, Path]] = None,
) -> GeneratorConfig:
    """
    Convenience function to load configuration.

    Args:
        language: Target language name
        custom_config: Custom configuration overrides
        config_file: Path to JSON configuration file

    Returns:
        Merged configuration for the language
    """
    manager = get_config_manager()
    return manager.get_config(language.lower(), custom_config, config_file)


def config_from_parameter(parameter: str) -> GeneratorConfig:
    """
    Build a run configuration from a protoc parameter string.

    ``lang`` picks the language (dart when absent), ``config`` names a JSON
    file, every other pair is an override.
    """
    values = parse_parameter(parameter)
    language = values.pop(LANGUAGE_KEY, "") or DEFAULT_LANGUAGE
    config_file = values.pop(CONFIG_FILE_KEY, "") or None
    return load_config(language, values, config_file)
