"""
Template engine wrapper for code generation.

Provides a simple interface for Jinja2 template rendering
with common utilities for code generation.
"""

from typing import Dict, Any, Optional, Union
from pathlib import Path

from jinja2 import (
    ChoiceLoader,
    DictLoader,
    Environment,
    FileSystemLoader,
    TemplateNotFound,
    select_autoescape,
)

from .naming import NameSanitizer, NamingCase

# Shared by the case filters of every engine; filters never request unique names
_FILTER_SANITIZER = NameSanitizer()


class TemplateError(Exception):
    """Exception raised for template-related errors."""

    pass


class TemplateEngine:
    """Wrapper for Jinja2 template engine with code generation utilities."""

    def __init__(self, template_dir: Optional[Path] = None):
        """
        Initialize template engine.

        Args:
            template_dir: Directory containing template files
        """
        self.template_dir = template_dir
        self._memory_templates: Dict[str, str] = {}
        self._env = None
        self._setup_environment()

    def _setup_environment(self):
        """Setup Jinja2 environment with code generation utilities."""
        loaders = [DictLoader(self._memory_templates)]
        if self.template_dir and self.template_dir.exists():
            loaders.insert(0, FileSystemLoader(str(self.template_dir)))

        self._env = Environment(
            loader=ChoiceLoader(loaders),
            autoescape=select_autoescape(["html", "xml"], default_for_string=False),
            lstrip_blocks=True,
        )

        # Add custom filters for code generation
        self._env.filters["snake_case"] = self._case_filter(NamingCase.SNAKE_CASE)
        self._env.filters["camel_case"] = self._case_filter(NamingCase.CAMEL_CASE)
        self._env.filters["pascal_case"] = self._case_filter(NamingCase.PASCAL_CASE)
        self._env.filters["indent"] = self._indent_filter
        self._env.filters["comment"] = self._comment_filter

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """
        Render a template with the given context.

        Args:
            template_name: Name of template file
            context: Variables to pass to template

        Returns:
            Rendered template content
        """
        try:
            template = self._env.get_template(template_name)
            return template.render(**context)
        except Exception as e:
            raise TemplateError(f"Failed to render template {template_name}: {str(e)}") from e

    def render_string(self, template_string: str, context: Dict[str, Any]) -> str:
        """Render a template string with the given context."""
        try:
            template = self._env.from_string(template_string)
            return template.render(**context)
        except Exception as e:
            raise TemplateError(f"Failed to render template string: {str(e)}") from e

    def add_template(self, name: str, content: str):
        """
        Add an in-memory template.

        Templates from the template directory take precedence over
        in-memory templates of the same name.
        """
        self._memory_templates[name] = content

    def template_exists(self, template_name: str) -> bool:
        """Check whether a template can be loaded."""
        try:
            self._env.get_template(template_name)
            return True
        except TemplateNotFound:
            return False

    # Template filters for code generation

    @staticmethod
    def _case_filter(case: NamingCase):
        def convert(value) -> str:
            return _FILTER_SANITIZER.sanitize_name(str(value), case, unique=False)

        return convert

    def _indent_filter(self, value: str, width: Union[int, str] = 4) -> str:
        """Indent all non-blank lines in a string by spaces or a literal prefix."""
        indent = " " * width if isinstance(width, int) else width
        lines = str(value).split("\n")
        return "\n".join(indent + line if line.strip() else "" for line in lines)

    def _comment_filter(self, value: str, style: str = "//") -> str:
        """Add comment markers to each line."""
        lines = str(value).split("\n")
        return "\n".join(f"{style} {line}" if line.strip() else style for line in lines)


def create_template_engine(template_dir: Optional[Path] = None) -> TemplateEngine:
    """Create a template engine, optionally backed by a template directory."""
    return TemplateEngine(template_dir)
