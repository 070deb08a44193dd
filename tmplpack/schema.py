"""
tmplpack Schema Models

Pydantic models for mappings and for the ``tmplpack.yaml`` config file.

Design Principles:
- Pure validation: receives values or parsed dicts, returns typed objects
- No file I/O: reading the YAML file is ``tmplpack.options``' job
- Immutable: a Mapping is never changed in place; collection returns a copy
"""

from pathlib import Path
from types import MappingProxyType
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .constants import DEFAULT_SOURCE_DIR


def read_only(sources: Dict[str, bytes]) -> MappingProxyType:
    """Read-only copy of a name -> content dict."""
    return MappingProxyType(dict(sources))


class Mapping(BaseModel):
    """
    One collected filesystem subtree.

    The root is ``base / source``; ``base`` falls back to the Configuration's
    base when unset. ``extensions=None`` inherits the global allow-list and an
    empty tuple accepts every file. ``root`` and ``sources`` are filled in by
    the collector; ``sources`` is stored read-only.
    """

    model_config = ConfigDict(frozen=True)

    source: str = DEFAULT_SOURCE_DIR
    base: Optional[Path] = None
    extensions: Optional[Tuple[str, ...]] = None
    root: Optional[Path] = None
    sources: Dict[str, bytes] = Field(default_factory=lambda: read_only({}), repr=False)

    @field_validator("sources")
    @classmethod
    def freeze_sources(cls, v: Dict[str, bytes]) -> MappingProxyType:
        return read_only(v)

    @field_validator("source")
    @classmethod
    def validate_source(cls, v: str) -> str:
        """Empty source means the base directory itself"""
        return v if v.strip() else "."

    @field_validator("extensions")
    @classmethod
    def validate_extensions(cls, v: Optional[Tuple[str, ...]]) -> Optional[Tuple[str, ...]]:
        if v is None:
            return v
        for ext in v:
            if not ext:
                raise ValueError("extensions cannot contain empty strings")
        return v


class MappingSpec(BaseModel):
    """A mapping entry in the config file."""

    model_config = ConfigDict(extra="forbid")

    source: str = DEFAULT_SOURCE_DIR
    base: Optional[str] = None
    extensions: Optional[List[str]] = None


class GeneratorSpec(BaseModel):
    """
    Contents of a ``tmplpack.yaml`` file.

    Every field is optional; omitted fields keep the builder defaults.
    """

    model_config = ConfigDict(extra="forbid")

    package: Optional[str] = None
    prefix: Optional[str] = None
    base: Optional[str] = None
    extensions: Optional[List[str]] = None
    text_templates: bool = False
    html_templates: bool = False
    compress: bool = False
    workers: int = Field(default=1, ge=1)
    mappings: Optional[List[MappingSpec]] = None

    @field_validator("mappings")
    @classmethod
    def validate_mappings(cls, v: Optional[List[MappingSpec]]) -> Optional[List[MappingSpec]]:
        if v is not None and not v:
            raise ValueError("mappings must contain at least one entry when given")
        return v
