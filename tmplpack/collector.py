"""
Source Collector
================

Walks mapping roots and reads every file whose name matches the extension
allow-list. Each mapping is collected into its own dict; mappings are merged
afterwards in one serialized step that rejects duplicate logical names.
"""

import os
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence

from .errors import NameCollisionError, ReadError, WalkError
from .logger import get_logger
from .schema import Mapping, read_only
from .validation import resolve_path

logger = get_logger(__name__)


def has_suffix(path: str, extensions: Optional[Iterable[str]]) -> bool:
    """True if ``path`` ends with any listed extension. No extensions matches everything."""
    if not extensions:
        return True
    return any(path.endswith(ext) for ext in extensions)


def logical_name(root: Path, path: Path) -> str:
    """Root-relative path with ``/`` separators."""
    return path.relative_to(root).as_posix()


def mapping_root(mapping: Mapping, default_base: Path) -> Path:
    """Absolute root directory collected for ``mapping``."""
    base = resolve_path(mapping.base) if mapping.base is not None else default_base
    return base / mapping.source


def collect_mapping(
    mapping: Mapping,
    default_base: Path,
    default_extensions: Optional[Sequence[str]] = None,
) -> Mapping:
    """
    Read every matching file below the mapping root.

    Args:
        mapping: Mapping to collect
        default_base: Base used when the mapping has no base of its own
        default_extensions: Allow-list used when the mapping has none

    Returns:
        Copy of ``mapping`` with ``root`` and ``sources`` filled in

    Raises:
        WalkError: If the root is missing or a directory cannot be listed
        ReadError: If a matching file cannot be read
    """
    root = mapping_root(mapping, default_base)
    extensions = mapping.extensions if mapping.extensions is not None else default_extensions

    def _on_walk_error(err: OSError) -> None:
        raise WalkError(
            f"Cannot walk {err.filename or root}: {err.strerror or err}",
            err.filename or root,
        ) from err

    if not root.is_dir():
        raise WalkError(f"Mapping root is not a directory: {root}", root)

    sources: Dict[str, bytes] = {}
    skipped = 0
    for dirpath, dirnames, filenames in os.walk(root, onerror=_on_walk_error):
        dirnames.sort()
        for filename in sorted(filenames):
            if not has_suffix(filename, extensions):
                skipped += 1
                continue
            path = Path(dirpath) / filename
            try:
                sources[logical_name(root, path)] = path.read_bytes()
            except OSError as e:
                raise ReadError(f"Cannot read {path}: {e.strerror or e}", path) from e

    logger.debug("Collected mapping", root=str(root), files=len(sources), skipped=skipped)
    return mapping.model_copy(update={"root": root, "sources": read_only(sources)})


def collect_all(
    mappings: Sequence[Mapping],
    default_base: Path,
    default_extensions: Optional[Sequence[str]] = None,
    workers: int = 1,
) -> List[Mapping]:
    """
    Collect every mapping, in input order.

    With ``workers > 1`` mappings are read concurrently; each worker fills its
    own dict, so nothing is shared until ``merge_sources``.
    """
    if workers <= 1 or len(mappings) <= 1:
        return [collect_mapping(m, default_base, default_extensions) for m in mappings]

    with ThreadPoolExecutor(max_workers=workers) as executor:
        futures = [
            executor.submit(collect_mapping, m, default_base, default_extensions)
            for m in mappings
        ]
        return [future.result() for future in futures]


def merge_sources(mappings: Iterable[Mapping]) -> Dict[str, bytes]:
    """
    Merge collected mappings into one name-sorted dict.

    Raises:
        NameCollisionError: If two mappings provide the same logical name
    """
    merged: Dict[str, bytes] = {}
    owners: Dict[str, str] = {}
    for mapping in mappings:
        owner = str(mapping.root) if mapping.root is not None else mapping.source
        for name, data in mapping.sources.items():
            if name in merged:
                raise NameCollisionError(name, owners[name], owner)
            merged[name] = data
            owners[name] = owner
    return dict(sorted(merged.items()))
