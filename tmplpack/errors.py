"""
tmplpack Exception Classes

All errors raised by the generator derive from TmplpackError so callers can
catch one type. Each error carries a machine-readable ``code`` and a human
readable ``message``, and serializes with ``to_dict()``.

Usage:
    from tmplpack.errors import TmplpackError, WalkError

    try:
        config = new_configuration(base("./site"))
    except TmplpackError as e:
        print(e.code, e.message)
"""

from pathlib import Path
from typing import Any, Dict, Optional, Union


class TmplpackError(Exception):
    """Base class for all tmplpack errors."""

    code = "TMPLPACK_ERROR"

    def __init__(self, message: str, code: Optional[str] = None):
        self.message = message
        if code:
            self.code = code
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the error for JSON output."""
        return {
            "error": self.__class__.__name__,
            "code": self.code,
            "message": self.message,
        }


class ValidationError(TmplpackError):
    """An option or configuration value is invalid."""

    code = "VALIDATION_ERROR"


class _PathError(TmplpackError):
    """Error tied to a filesystem location."""

    def __init__(self, message: str, path: Optional[Union[str, Path]] = None):
        self.path = str(path) if path is not None else None
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["path"] = self.path
        return data


class PathResolutionError(_PathError):
    """A base path could not be resolved to an absolute path."""

    code = "PATH_RESOLUTION_ERROR"


class WalkError(_PathError):
    """Directory traversal failed."""

    code = "WALK_ERROR"


class ReadError(_PathError):
    """A matching file could not be read."""

    code = "READ_ERROR"


class NameCollisionError(TmplpackError):
    """Two mappings produced the same logical name."""

    code = "NAME_COLLISION"

    def __init__(self, name: str, first_root: str, second_root: str):
        self.name = name
        self.first_root = first_root
        self.second_root = second_root
        super().__init__(
            f"Logical name {name!r} is provided by both {first_root} and {second_root}"
        )

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["name"] = self.name
        data["roots"] = [self.first_root, self.second_root]
        return data


class TemplateParseError(TmplpackError):
    """The generator's own code template is missing or malformed."""

    code = "TEMPLATE_PARSE_ERROR"


class RenderError(TmplpackError):
    """Rendering the generated module failed."""

    code = "RENDER_ERROR"


class _NamedError(TmplpackError):
    def __init__(self, message: str, name: str):
        self.name = name
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["name"] = self.name
        return data


class NotFoundError(_NamedError):
    """A logical name is not part of the embedded set."""

    code = "NOT_FOUND"

    def __init__(self, name: str):
        super().__init__(f"template {name!r} not found", name)


class DecodeError(TmplpackError):
    """An encoded payload is corrupt."""

    code = "DECODE_ERROR"

    def __init__(self, message: str, name: Optional[str] = None):
        self.name = name
        if name is not None:
            message = f"failed to load template {name!r}: {message}"
        super().__init__(message)


__all__ = [
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
]
