"""Logging setup for kalamgen.

All log output goes to stderr: when running as a protoc plugin, stdout
carries the serialized CodeGeneratorResponse.
"""

import logging
import os
from typing import Optional, Union

from rich.console import Console
from rich.logging import RichHandler

LOG_LEVEL_ENV = "KALAMGEN_LOG_LEVEL"
DEFAULT_LEVEL = "WARNING"

_configured = False


def configure_logging(level: Optional[Union[str, int]] = None) -> None:
    """Install a rich handler on the package logger.

    Args:
        level: Level name or number. Falls back to $KALAMGEN_LOG_LEVEL,
            then WARNING.
    """
    global _configured

    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV, DEFAULT_LEVEL)
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    root = logging.getLogger("kalamgen")
    root.setLevel(level)

    if not _configured:
        handler = RichHandler(
            console=Console(stderr=True),
            show_path=False,
            rich_tracebacks=True,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        root.addHandler(handler)
        root.propagate = False
        _configured = True


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the kalamgen namespace."""
    if not name.startswith("kalamgen"):
        name = f"kalamgen.{name}"
    return logging.getLogger(name)
