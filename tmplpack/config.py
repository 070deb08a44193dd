"""
tmplpack Configuration
======================

A Configuration is built once by applying an ordered list of option
functions to a ``ConfigurationBuilder`` and calling ``build()``. Building
collects every mapping eagerly; the result is frozen.

Usage:
    from tmplpack import new_configuration
    from tmplpack.options import base, extensions, function_prefix

    config = new_configuration(base("./site"), extensions([".html"]), function_prefix("app"))
    config.render().write_to(sys.stdout)
"""

from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Callable, Dict, List, Optional, TextIO, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .collector import collect_all, merge_sources
from .constants import (
    DEFAULT_BASE,
    DEFAULT_PACKAGE,
    DEFAULT_PREFIX,
    DEFAULT_WORKERS,
    FUNCTION_SUFFIXES,
)
from .errors import NotFoundError
from .logger import get_logger
from .output import GeneratedArtifact
from .schema import Mapping, read_only
from .templates.renderer import CodeRenderer
from .validation import function_name, resolve_path, validate_package_name, validate_prefix

logger = get_logger(__name__)


class Configuration(BaseModel):
    """Immutable generator configuration together with its collected sources."""

    model_config = ConfigDict(frozen=True)

    package: str = DEFAULT_PACKAGE
    prefix: str = DEFAULT_PREFIX
    base: Path
    mappings: Tuple[Mapping, ...]
    text_templates: bool = False
    html_templates: bool = False
    compress: bool = False
    sources: Dict[str, bytes] = Field(default_factory=lambda: read_only({}), repr=False)

    @field_validator("sources")
    @classmethod
    def freeze_sources(cls, v: Dict[str, bytes]) -> MappingProxyType:
        return read_only(v)

    def function_name(self, key: str) -> str:
        """Generated name of one loader function (``template``, ``must``, ``text``, ...)."""
        return function_name(self.prefix, FUNCTION_SUFFIXES[key])

    def lookup(self, name: str) -> bytes:
        """
        Collected content of one logical name.

        Raises:
            NotFoundError: If no mapping provided ``name``
        """
        try:
            return self.sources[name]
        except KeyError:
            raise NotFoundError(name) from None

    def render(self, renderer: Optional[CodeRenderer] = None) -> GeneratedArtifact:
        """Render the generated module. Safe to call repeatedly."""
        return (renderer or CodeRenderer()).render(self)

    def write_to(self, stream: TextIO) -> int:
        """Render and write to ``stream``. Nothing is written if rendering fails."""
        return self.render().write_to(stream)


@dataclass
class ConfigurationBuilder:
    """Mutable draft that option functions edit before ``build()``."""

    package: str = DEFAULT_PACKAGE
    prefix: str = DEFAULT_PREFIX
    base: Optional[Path] = None
    extensions: Optional[Tuple[str, ...]] = None
    mappings: List[Mapping] = field(default_factory=lambda: [Mapping()])
    text_templates: bool = False
    html_templates: bool = False
    compress: bool = False
    workers: int = DEFAULT_WORKERS

    def apply(self, *options: "Option") -> "ConfigurationBuilder":
        """Apply options in order. The first failing option raises."""
        for option in options:
            option(self)
        return self

    def build(self) -> Configuration:
        """
        Collect every mapping and freeze the result.

        Raises:
            ValidationError: If package or prefix are invalid
            PathResolutionError: If a base path cannot be resolved
            WalkError, ReadError: If collection fails
            NameCollisionError: If two mappings share a logical name
        """
        validate_package_name(self.package)
        validate_prefix(self.prefix)
        base = self.base if self.base is not None else resolve_path(DEFAULT_BASE)

        collected = collect_all(self.mappings, base, self.extensions, workers=self.workers)
        sources = merge_sources(collected)

        logger.info(
            "Configuration built",
            package=self.package,
            prefix=self.prefix,
            mappings=len(collected),
            templates=len(sources),
        )
        return Configuration(
            package=self.package,
            prefix=self.prefix,
            base=base,
            mappings=tuple(collected),
            text_templates=self.text_templates,
            html_templates=self.html_templates,
            compress=self.compress,
            sources=sources,
        )


Option = Callable[[ConfigurationBuilder], None]


def new_configuration(*options: Option) -> Configuration:
    """Build a Configuration from defaults plus ``options`` applied in order."""
    return ConfigurationBuilder().apply(*options).build()
