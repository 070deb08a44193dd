"""
Payload Encoding
================

Raw file bytes are embedded as unpadded URL-safe base64. The alphabet
``[A-Za-z0-9_-]`` never contains a quote or a backslash, so every payload can
be written into the generated module as a plain ``"..."`` literal without
escaping. Content may optionally be zlib-compressed before encoding.

Each entry also records the SHA-256 digest of its raw bytes so a payload that
was edited by hand is rejected instead of decoding to garbage.
"""

import base64
import binascii
import hashlib
import re
import zlib
from typing import List, Optional

from .constants import PAYLOAD_LINE_WIDTH
from .errors import DecodeError

PAYLOAD_PATTERN = re.compile(r"[A-Za-z0-9_-]*")


def encode(data: bytes, compress: bool = False) -> str:
    """Encode raw bytes into the embeddable alphabet."""
    if compress:
        data = zlib.compress(data, 9)
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def decode(
    text: str,
    compressed: bool = False,
    expected_digest: Optional[str] = None,
    name: Optional[str] = None,
) -> bytes:
    """
    Decode a payload produced by ``encode``.

    Args:
        text: Encoded payload
        compressed: Payload was encoded with ``compress=True``
        expected_digest: SHA-256 hex digest the decoded bytes must match
        name: Logical name, included in error messages

    Returns:
        The original bytes

    Raises:
        DecodeError: If the payload is not canonical unpadded URL-safe base64,
            fails to decompress, or does not match ``expected_digest``
    """
    if not PAYLOAD_PATTERN.fullmatch(text):
        raise DecodeError("payload contains characters outside the base64url alphabet", name)
    if len(text) % 4 == 1:
        raise DecodeError("payload has an impossible length", name)

    try:
        raw = base64.urlsafe_b64decode(text + "=" * (-len(text) % 4))
    except (binascii.Error, ValueError) as e:
        raise DecodeError(str(e), name) from e

    # Flipped padding bits decode silently; only the canonical form is accepted.
    if encode(raw) != text:
        raise DecodeError("payload is not canonically encoded", name)

    if compressed:
        try:
            raw = zlib.decompress(raw)
        except zlib.error as e:
            raise DecodeError(f"decompression failed: {e}", name) from e

    if expected_digest is not None and digest(raw) != expected_digest:
        raise DecodeError("content digest mismatch", name)

    return raw


def digest(data: bytes) -> str:
    """SHA-256 hex digest of raw content."""
    return hashlib.sha256(data).hexdigest()


def chunk(text: str, width: int = PAYLOAD_LINE_WIDTH) -> List[str]:
    """Split an encoded payload into lines of at most ``width`` characters."""
    if width <= 0:
        raise ValueError("width must be positive")
    if not text:
        return [""]
    return [text[i : i + width] for i in range(0, len(text), width)]
