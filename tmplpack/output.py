"""Output writer for rendered modules."""

import os
import sys
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import TextIO, Union

from .logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class GeneratedArtifact:
    """Fully rendered source text of a generated module."""

    text: str

    def write_to(self, stream: TextIO) -> int:
        """Write the text to ``stream`` and return the number of characters written."""
        stream.write(self.text)
        return len(self.text)


def write_artifact(artifact: GeneratedArtifact, destination: Union[str, Path, TextIO]) -> int:
    """
    Write ``artifact`` to a path, a text stream, or stdout (``"-"``).

    Paths are written to a temporary sibling first and moved into place, so a
    failed write leaves any previous file untouched.
    """
    if destination == "-":
        return artifact.write_to(sys.stdout)
    if not isinstance(destination, (str, Path)):
        return artifact.write_to(destination)

    target = Path(destination)
    target.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".tmp", dir=target.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as f:
            written = artifact.write_to(f)
        os.chmod(tmp_name, 0o644)
        os.replace(tmp_name, target)
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise

    logger.info("Wrote generated module", path=str(target), chars=written)
    return written
