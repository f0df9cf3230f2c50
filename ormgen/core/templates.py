"""
Jinja2 rendering for generated source.

Whole-file templates live next to the builders on disk; behaviors register
their fragment templates in memory. One environment serves both.
"""

import threading
from pathlib import Path
from typing import Any, Dict, Optional

from jinja2 import (
    ChoiceLoader,
    DictLoader,
    Environment,
    FileSystemLoader,
    StrictUndefined,
    TemplateNotFound,
)
from jinja2.exceptions import TemplateError as JinjaTemplateError


class TemplateError(Exception):
    """Raised when a template is missing or fails to render."""

    pass


def indent_code(value: str, spaces: int = 4, first: bool = False) -> str:
    """
    Indent every non-blank line of a code block.

    The first line is left alone unless ``first`` is set, since templates
    usually place the filter after existing indentation.
    """
    prefix = " " * spaces
    lines = []
    for index, line in enumerate(str(value).splitlines()):
        if line.strip() and (first or index):
            line = prefix + line
        lines.append(line)
    return "\n".join(lines)


def docstring_text(value: str) -> str:
    """
    Escape free text for use inside a triple-quoted docstring.

    Backslashes and quotes are escaped so descriptions such as
    ``C:\\users`` or ``A "post"`` keep their text and cannot end the string.
    """
    return str(value).replace("\\", "\\\\").replace('"', '\\"')


class TemplateEngine:
    """Jinja2 environment configured for emitting Python source."""

    def __init__(self, template_dir: Optional[Path] = None):
        self.template_dir = template_dir
        self._fragments: Dict[str, str] = {}

        loaders = [DictLoader(self._fragments)]
        if template_dir is not None and template_dir.is_dir():
            loaders.append(FileSystemLoader(str(template_dir)))

        # Output is Python, never markup
        self.env = Environment(
            loader=ChoiceLoader(loaders),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=StrictUndefined,
        )
        self.env.filters["indent_code"] = indent_code
        self.env.filters["py_literal"] = repr
        self.env.filters["docstring"] = docstring_text

    def add_template(self, name: str, content: str):
        """Register an in-memory template; it shadows a file of the same name."""
        self._fragments[name] = content

    def template_exists(self, template_name: str) -> bool:
        try:
            self.env.get_template(template_name)
        except TemplateNotFound:
            return False
        return True

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """
        Render a named template.

        Raises:
            TemplateError: If the template is missing or rendering fails
        """
        try:
            return self.env.get_template(template_name).render(context)
        except JinjaTemplateError as e:
            raise TemplateError(f"Cannot render {template_name}: {e}") from e

    def render_string(self, source: str, context: Dict[str, Any]) -> str:
        try:
            return self.env.from_string(source).render(context)
        except JinjaTemplateError as e:
            raise TemplateError(f"Cannot render inline template: {e}") from e


def create_template_engine(template_dir: Optional[Path] = None) -> TemplateEngine:
    """Create a template engine, optionally backed by a template directory."""
    return TemplateEngine(template_dir)


_shared_engines: Dict[Optional[Path], TemplateEngine] = {}
_shared_engines_lock = threading.Lock()


def get_shared_template_engine(template_dir: Optional[Path] = None) -> TemplateEngine:
    """
    One engine per template directory, so compiled templates are reused
    across builders, tables and worker threads.
    """
    with _shared_engines_lock:
        engine = _shared_engines.get(template_dir)
        if engine is None:
            engine = _shared_engines[template_dir] = create_template_engine(template_dir)
        return engine
