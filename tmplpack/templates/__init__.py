"""
tmplpack Code Templates

The Jinja2 template for generated loader modules and the renderer that
fills it in.
"""

from .renderer import TEMPLATE_DIR, CodeRenderer, build_context, py_str_filter

__all__ = [
    "CodeRenderer",
    "TEMPLATE_DIR",
    "build_context",
    "py_str_filter",
]
