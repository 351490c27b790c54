"""Character encoding of fingerprints as strings of '0' and '1'."""

from typing import Optional

import imagehash
import numpy as np

from ..logging import get_logger

logger = get_logger(__name__)

HASH_SIZE = 8


def to_bits(fingerprint: imagehash.ImageHash) -> str:
    """Render a fingerprint row-major as a string like ``"1101..."``."""
    return "".join("1" if bit else "0" for bit in fingerprint.hash.flatten())


def from_bits(text: Optional[str]) -> Optional[imagehash.ImageHash]:
    """
    Parse a '0'/'1' string back into a fingerprint.

    Returns None for anything that is not a non-empty string made only of
    '0' and '1'; callers compare None as maximally dissimilar.
    """
    if not isinstance(text, str) or not text:
        return None
    if set(text) - {"0", "1"}:
        logger.debug(f"Rejecting malformed fingerprint text: {text[:16]!r}")
        return None

    bits = np.array([char == "1" for char in text], dtype=bool)
    if bits.size % HASH_SIZE == 0:
        bits = bits.reshape(-1, HASH_SIZE)
    else:
        bits = bits.reshape(1, -1)
    return imagehash.ImageHash(bits)
