"""
tmplpack Shared Constants

Defaults applied by the configuration builder and limits used by the encoder
and renderer.
"""

# =============================================================================
# CONFIGURATION DEFAULTS
# =============================================================================

TMPLPACK_VERSION = "0.1.0"
"""Current tmplpack version, recorded in generated modules"""

DEFAULT_PACKAGE = "main"
"""Package name recorded in the generated module"""

DEFAULT_PREFIX = "load"
"""Prefix of every generated function name"""

DEFAULT_SOURCE_DIR = "templates"
"""Subdirectory of the base path collected by the default mapping"""

DEFAULT_BASE = "."
"""Base path when no base option is given (resolved against the cwd)"""

DEFAULT_CONFIG_FILE = "tmplpack.yaml"
"""Config file picked up by the CLI when present"""

DEFAULT_WORKERS = 1
"""Mapping collection is sequential unless parallel() asks otherwise"""


# =============================================================================
# GENERATED CODE
# =============================================================================

LOADER_TEMPLATE = "loader.py.j2"
"""Code template rendered into the generated module"""

PAYLOAD_LINE_WIDTH = 76
"""Characters per line of an embedded payload"""

FUNCTION_SUFFIXES = {
    "template": "template",
    "must": "template_must",
    "text": "text_template",
    "html": "html_template",
    "html_map": "html_template_map",
}
"""Generated function names, joined to the prefix with an underscore"""
