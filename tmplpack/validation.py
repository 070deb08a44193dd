"""
tmplpack Validation Utilities

Checks applied to option values before a Configuration is built.
"""

import keyword
from pathlib import Path
from typing import Iterable, Optional, Tuple, Union

from .errors import PathResolutionError, ValidationError


def validate_package_name(name: str) -> str:
    """Validate a dotted Python package name (e.g. ``main`` or ``app.assets``)."""
    if not isinstance(name, str) or not name:
        raise ValidationError("Package name must be a non-empty string")
    for part in name.split("."):
        if not part.isidentifier() or keyword.iskeyword(part):
            raise ValidationError(
                f"Invalid package name: '{name}'. "
                "Each dotted part must be a Python identifier and not a keyword."
            )
    return name


def validate_prefix(prefix: str) -> str:
    """Validate a function-name prefix. The empty string is allowed."""
    if not isinstance(prefix, str):
        raise ValidationError("Function prefix must be a string")
    if prefix and (not prefix.isidentifier() or keyword.iskeyword(prefix)):
        raise ValidationError(
            f"Invalid function prefix: '{prefix}'. Must be a Python identifier."
        )
    return prefix


def validate_extensions(extensions: Optional[Iterable[str]]) -> Optional[Tuple[str, ...]]:
    """Normalize an extension allow-list to a tuple; ``None`` stays ``None``."""
    if extensions is None:
        return None
    if isinstance(extensions, str):
        raise ValidationError("Extensions must be a list of suffixes, not a single string")
    result = tuple(extensions)
    for ext in result:
        if not isinstance(ext, str) or not ext:
            raise ValidationError(f"Invalid extension: {ext!r}. Must be a non-empty string.")
    return result


def function_name(prefix: str, suffix: str) -> str:
    """Join a prefix and a function suffix (``app`` + ``template`` -> ``app_template``)."""
    return f"{prefix}_{suffix}" if prefix else suffix


def resolve_path(path: Union[str, Path, None]) -> Path:
    """
    Resolve a base path to an absolute path.

    Raises:
        PathResolutionError: If the path is empty or cannot be resolved
    """
    if path is None or not str(path).strip():
        raise PathResolutionError("Base path must not be empty", path)
    if "\0" in str(path):
        raise PathResolutionError("Base path contains a NUL byte", path)
    try:
        return Path(path).expanduser().resolve()
    except (OSError, RuntimeError, ValueError) as e:
        raise PathResolutionError(f"Cannot resolve base path '{path}': {e}", path) from e
