"""
Configuration Options
=====================

Each function returns an ``Option`` that edits a ``ConfigurationBuilder``.
Options validate their input when applied and raise immediately, so a bad
option aborts ``new_configuration`` before any file is read.

Options can also be loaded from a YAML file with ``load_config_file``.
"""

from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence, Union

import pydantic
import yaml

from .config import ConfigurationBuilder, Option
from .errors import ValidationError
from .logger import get_logger
from .schema import GeneratorSpec, Mapping
from .validation import (
    resolve_path,
    validate_extensions,
    validate_package_name,
    validate_prefix,
)

logger = get_logger(__name__)

MappingLike = Union[Mapping, Dict[str, Any]]


def package(name: str) -> Option:
    """Package name recorded in the generated module."""

    def _apply(b: ConfigurationBuilder) -> None:
        b.package = validate_package_name(name)

    return _apply


def function_prefix(prefix: str) -> Option:
    """Prefix of the generated function names (``app`` -> ``app_template``)."""

    def _apply(b: ConfigurationBuilder) -> None:
        b.prefix = validate_prefix(prefix)

    return _apply


def base(path: Union[str, Path]) -> Option:
    """Base directory for mappings without a base of their own."""

    def _apply(b: ConfigurationBuilder) -> None:
        b.base = resolve_path(path)

    return _apply


def extensions(exts: Optional[Iterable[str]]) -> Option:
    """Global extension allow-list. ``None`` or empty accepts every file."""

    def _apply(b: ConfigurationBuilder) -> None:
        b.extensions = validate_extensions(exts)

    return _apply


def mappings(items: Sequence[MappingLike]) -> Option:
    """Replace the default mapping with ``items`` (Mapping objects or dicts)."""

    def _apply(b: ConfigurationBuilder) -> None:
        if not items:
            raise ValidationError("At least one mapping is required")
        result: List[Mapping] = []
        for item in items:
            try:
                mapping = Mapping.model_validate(item)
            except pydantic.ValidationError as e:
                raise ValidationError(f"Invalid mapping {item!r}: {e}") from e
            if mapping.base is not None:
                mapping = mapping.model_copy(update={"base": resolve_path(mapping.base)})
            result.append(mapping)
        b.mappings = result

    return _apply


def enable_text_templates() -> Option:
    """Emit the ``<prefix>_text_template`` helper."""

    def _apply(b: ConfigurationBuilder) -> None:
        b.text_templates = True

    return _apply


def enable_html_templates() -> Option:
    """Emit the ``<prefix>_html_template`` and ``<prefix>_html_template_map`` helpers."""

    def _apply(b: ConfigurationBuilder) -> None:
        b.html_templates = True

    return _apply


def enable_compression() -> Option:
    """zlib-compress payloads before encoding them."""

    def _apply(b: ConfigurationBuilder) -> None:
        b.compress = True

    return _apply


def parallel(workers: int) -> Option:
    """Collect mappings with up to ``workers`` threads."""

    def _apply(b: ConfigurationBuilder) -> None:
        if not isinstance(workers, int) or workers < 1:
            raise ValidationError(f"workers must be a positive integer, got {workers!r}")
        b.workers = workers

    return _apply


def _relative_to(path: str, directory: Path) -> Path:
    p = Path(path).expanduser()
    return p if p.is_absolute() else directory / p


def load_config_file(path: Union[str, Path]) -> List[Option]:
    """
    Read a ``tmplpack.yaml`` file and return the equivalent options.

    Relative base paths are resolved against the directory holding the file.

    Raises:
        ValidationError: If the file cannot be read, is not valid YAML, or
            does not match the schema
    """
    config_path = Path(path)
    try:
        data = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ValidationError(f"Cannot read config file {config_path}: {e}") from e
    except yaml.YAMLError as e:
        raise ValidationError(f"Invalid YAML in {config_path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValidationError(f"Config file {config_path} must contain a mapping at the top level")

    try:
        spec = GeneratorSpec.model_validate(data)
    except pydantic.ValidationError as e:
        raise ValidationError(f"Invalid config file {config_path}: {e}") from e

    directory = config_path.resolve().parent
    options: List[Option] = []
    if spec.package is not None:
        options.append(package(spec.package))
    if spec.prefix is not None:
        options.append(function_prefix(spec.prefix))
    options.append(base(_relative_to(spec.base or ".", directory)))
    if spec.extensions is not None:
        options.append(extensions(spec.extensions))
    if spec.mappings is not None:
        options.append(
            mappings(
                [
                    {
                        "source": m.source,
                        "base": _relative_to(m.base, directory) if m.base else None,
                        "extensions": m.extensions,
                    }
                    for m in spec.mappings
                ]
            )
        )
    if spec.text_templates:
        options.append(enable_text_templates())
    if spec.html_templates:
        options.append(enable_html_templates())
    if spec.compress:
        options.append(enable_compression())
    if spec.workers > 1:
        options.append(parallel(spec.workers))

    logger.debug("Loaded config file", path=str(config_path), options=len(options))
    return options
