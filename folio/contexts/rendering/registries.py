"""
Rendering Registries

Centralized registry for loading and caching document templates.
"""

import os
from pathlib import Path
from typing import Dict

from dotenv import load_dotenv
from jinja2 import (
    Environment,
    FileSystemLoader,
    StrictUndefined,
    Template,
    TemplateNotFound,
    select_autoescape,
)

from folio.utils.text_processing import escape_latex, escape_latex_url

load_dotenv()
TEMPLATES_PATH = Path(os.getenv("TEMPLATES_PATH", str(Path(__file__).parent / "templates")))


class TemplateRegistry:
    """
    Registry for loading and caching Jinja2 templates for resume documents.

    Templates are stored as {templates_path}/{name}.jinja (e.g. "resume.tex.jinja")
    and use custom delimiters so that LaTeX braces need no escaping:
    - Variable: <<< var >>>
    - Block: <%% block %%>
    - Comment: <# comment #>

    HTML templates are autoescaped; LaTeX output goes through the `latex` filter.
    """

    def __init__(self, templates_path: Path = None):
        """
        Initialize the template registry.

        Args:
            templates_path: Directory holding *.jinja files. Defaults to
                           TEMPLATES_PATH from environment
        """
        if templates_path is None:
            templates_path = TEMPLATES_PATH

        self.templates_path = templates_path
        self._cache: Dict[str, Template] = {}

        self.env = Environment(
            loader=FileSystemLoader(str(templates_path)),
            # Catches silent failures
            undefined=StrictUndefined,
            autoescape=select_autoescape(enabled_extensions=("html.jinja",), default=False),
            variable_start_string="<<<",
            variable_end_string=">>>",
            block_start_string="<%%",
            block_end_string="%%>",
            comment_start_string="<#",
            comment_end_string="#>",
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        self.env.filters["latex"] = escape_latex
        self.env.filters["latex_url"] = escape_latex_url

    def get_template(self, name: str) -> Template:
        """
        Get a template by name, loading and caching it if necessary.

        Args:
            name: Template name without the .jinja extension (e.g. 'preview.md')

        Returns:
            Jinja2 Template object

        Raises:
            TemplateNotFound: If template file doesn't exist
            TemplateSyntaxError: If template has Jinja2 syntax errors
        """
        if name in self._cache:
            return self._cache[name]

        try:
            template = self.env.get_template(f"{name}.jinja")
        except TemplateNotFound as e:
            raise TemplateNotFound(
                f"Template not found for '{name}' at {self.get_template_path(name)}"
            ) from e

        self._cache[name] = template
        return template

    def get_template_path(self, name: str) -> Path:
        """Get the file path for a template."""
        return self.templates_path / f"{name}.jinja"

    def clear_cache(self):
        """Clear the template cache."""
        self._cache.clear()

    def is_cached(self, name: str) -> bool:
        """Check if a template is cached."""
        return name in self._cache
