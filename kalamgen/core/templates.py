"""
Template engine wrapper for code generation.

Provides a simple interface for Jinja2 template rendering. Every
parse and render failure surfaces as TemplateError.
"""

from pathlib import Path
from typing import Any, Dict, Optional

from jinja2 import (
    DictLoader,
    Environment,
    FileSystemLoader,
    StrictUndefined,
    Template,
    TemplateError as JinjaTemplateError,
    TemplateNotFound,
)


class TemplateError(Exception):
    """Exception raised for template-related errors."""

    pass


class TemplateEngine:
    """Wrapper for the Jinja2 environment the generators render with."""

    def __init__(self, template_dir: Optional[Path] = None):
        """
        Initialize template engine.

        Args:
            template_dir: Directory containing template files
        """
        self.template_dir = template_dir
        self._env = None
        self._setup_environment()

    def _setup_environment(self):
        """Setup the Jinja2 environment."""
        if self.template_dir and self.template_dir.exists():
            loader = FileSystemLoader(str(self.template_dir))
        else:
            # Use in-memory templates
            loader = DictLoader({})

        self._env = Environment(
            loader=loader,
            autoescape=False,
            undefined=StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )

    def get_template(self, template_name: str) -> Template:
        """
        Load and compile a template.

        Raises:
            TemplateError: If the template is missing or does not parse
        """
        try:
            return self._env.get_template(template_name)
        except TemplateNotFound as e:
            raise TemplateError(f"Template not found: {template_name}") from e
        except JinjaTemplateError as e:
            raise TemplateError(f"Failed to parse template {template_name}: {e}") from e

    def render(self, template: Template, context: Dict[str, Any]) -> str:
        """Render an already loaded template."""
        try:
            return template.render(**context)
        except JinjaTemplateError as e:
            raise TemplateError(f"Failed to render template {template.name}: {e}") from e

    def add_template(self, name: str, content: str):
        """
        Add an in-memory template.

        Args:
            name: Template name
            content: Template content
        """
        if not isinstance(self._env.loader, DictLoader):
            self._env.loader = DictLoader({})

        self._env.loader.mapping[name] = content


def create_template_engine(template_dir: Optional[Path] = None) -> TemplateEngine:
    """Create a template engine rooted at template_dir (in-memory if None)."""
    return TemplateEngine(template_dir)
