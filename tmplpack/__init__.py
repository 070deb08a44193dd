"""
tmplpack - embed template trees into generated Python modules

Walks one or more directories, encodes every matching file, and renders a
self-contained Python module with loader functions for the embedded data.

Usage:
    from tmplpack import new_configuration, write_artifact
    from tmplpack.options import base, extensions, function_prefix, enable_html_templates

    config = new_configuration(
        base("./site"),
        extensions([".html"]),
        function_prefix("app"),
        enable_html_templates(),
    )
    write_artifact(config.render(), "site/templates_embedded.py")

    # In the application:
    from site.templates_embedded import app_template, app_html_template
    data, err = app_template("index.html")
"""

from .collector import collect_all, collect_mapping, has_suffix, logical_name, merge_sources
from .config import Configuration, ConfigurationBuilder, Option, new_configuration
from .constants import TMPLPACK_VERSION
from .encoding import decode, digest, encode
from .errors import (
    DecodeError,
    NameCollisionError,
    NotFoundError,
    PathResolutionError,
    ReadError,
    RenderError,
    TemplateParseError,
    TmplpackError,
    ValidationError,
    WalkError,
)
from .logger import TmplpackLogger, configure_logging, get_logger
from .options import load_config_file
from .output import GeneratedArtifact, write_artifact
from .schema import GeneratorSpec, Mapping
from .templates import CodeRenderer

__version__ = TMPLPACK_VERSION

__all__ = [
    # Configuration
    "Configuration",
    "ConfigurationBuilder",
    "Option",
    "new_configuration",
    "load_config_file",
    "Mapping",
    "GeneratorSpec",
    # Collection
    "collect_all",
    "collect_mapping",
    "merge_sources",
    "has_suffix",
    "logical_name",
    # Encoding
    "encode",
    "decode",
    "digest",
    # Rendering and output
    "CodeRenderer",
    "GeneratedArtifact",
    "write_artifact",
    # Errors
    "TmplpackError",
    "ValidationError",
    "PathResolutionError",
    "WalkError",
    "ReadError",
    "NameCollisionError",
    "TemplateParseError",
    "RenderError",
    "NotFoundError",
    "DecodeError",
    # Logging
    "TmplpackLogger",
    "get_logger",
    "configure_logging",
]
