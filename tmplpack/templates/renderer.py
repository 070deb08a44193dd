"""
tmplpack Code Renderer
======================

Renders the generated loader module from ``loader.py.j2`` with Jinja2.

The context is built from a Configuration in sorted logical-name order and
contains no timestamps, so identical inputs always produce byte-identical
output. Rendering happens entirely in memory; on any failure nothing is
returned and nothing is written.
"""

import json
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Union

from jinja2 import (
    Environment,
    FileSystemLoader,
    StrictUndefined,
    TemplateError,
    TemplateNotFound,
    TemplateSyntaxError,
)

from ..constants import FUNCTION_SUFFIXES, LOADER_TEMPLATE, TMPLPACK_VERSION
from ..encoding import chunk, digest, encode
from ..errors import RenderError, TemplateParseError
from ..logger import get_logger
from ..output import GeneratedArtifact
from ..validation import function_name

if TYPE_CHECKING:
    from ..config import Configuration

logger = get_logger(__name__)

# The code template ships next to this file
TEMPLATE_DIR = Path(__file__).parent


# ============================================================================
# Custom Jinja2 Filters
# ============================================================================


def py_str_filter(value: str) -> str:
    """
    Render ``value`` as a double-quoted Python string literal.

    Raises:
        RenderError: If the value contains control characters
    """
    if any(ord(c) < 0x20 or ord(c) == 0x7F for c in value):
        raise RenderError(f"Logical name {value!r} contains control characters")
    # JSON string syntax with ASCII escapes is a subset of Python's.
    return json.dumps(value)


# ============================================================================
# Template Context Builder
# ============================================================================


def build_context(config: "Configuration") -> Dict[str, Any]:
    """Template variables for one Configuration."""
    entries: List[Dict[str, Any]] = []
    for name in sorted(config.sources):
        data = config.sources[name]
        entries.append(
            {
                "name": name,
                "digest": digest(data),
                "lines": chunk(encode(data, compress=config.compress)),
                "size": len(data),
            }
        )

    return {
        "version": TMPLPACK_VERSION,
        "package": config.package,
        "fn": {key: function_name(config.prefix, suffix) for key, suffix in FUNCTION_SUFFIXES.items()},
        "entries": entries,
        "compress": config.compress,
        "text_templates": config.text_templates,
        "html_templates": config.html_templates,
        "helpers": config.text_templates or config.html_templates,
    }


# ============================================================================
# Code Renderer
# ============================================================================


class CodeRenderer:
    """
    Renders generated loader modules.

    Example:
        >>> renderer = CodeRenderer()
        >>> artifact = renderer.render(config)
        >>> artifact.write_to(sys.stdout)
    """

    def __init__(self, template_dir: Optional[Union[str, Path]] = None):
        """
        Args:
            template_dir: Directory holding ``loader.py.j2`` (defaults to the
                package's own template)
        """
        self.template_dir = Path(template_dir) if template_dir else TEMPLATE_DIR
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            undefined=StrictUndefined,
        )
        self.env.filters["py_str"] = py_str_filter

    def render(self, config: "Configuration") -> GeneratedArtifact:
        """
        Render the loader module for ``config``.

        Raises:
            TemplateParseError: If the code template is missing or malformed
            RenderError: If rendering fails or produces invalid Python
        """
        try:
            template = self.env.get_template(LOADER_TEMPLATE)
        except TemplateNotFound as e:
            raise TemplateParseError(
                f"Code template not found: {LOADER_TEMPLATE} in {self.template_dir}"
            ) from e
        except TemplateSyntaxError as e:
            raise TemplateParseError(f"Code template is malformed: {e}") from e

        context = build_context(config)
        try:
            text = template.render(**context)
        except RenderError:
            raise
        except TemplateError as e:
            raise RenderError(f"Template rendering error: {e}") from e

        try:
            compile(text, f"<{config.package} templates>", "exec")
        except (SyntaxError, ValueError) as e:
            raise RenderError(f"Generated module is not valid Python: {e}") from e

        logger.info(
            "Rendered loader module",
            package=config.package,
            templates=len(context["entries"]),
            chars=len(text),
        )
        return GeneratedArtifact(text)
