"""Distance metrics for fingerprint comparison."""

from typing import Optional

import imagehash
import numpy as np

FINGERPRINT_BITS = 64

# Larger than any real distance between two 64-bit fingerprints.
INCOMPARABLE_DISTANCE = FINGERPRINT_BITS + 1


def fingerprint_length(fingerprint: Optional[imagehash.ImageHash]) -> int:
    """Number of bits in a fingerprint; 0 for a missing one."""
    if fingerprint is None:
        return 0
    return int(fingerprint.hash.size)


def hamming_distance(
    a: Optional[imagehash.ImageHash],
    b: Optional[imagehash.ImageHash],
) -> int:
    """
    Calculate Hamming distance between two fingerprints.

    Args:
        a: First fingerprint
        b: Second fingerprint

    Returns:
        Number of differing bits, or INCOMPARABLE_DISTANCE when either
        fingerprint is missing or empty or the lengths differ
    """
    length_a = fingerprint_length(a)
    length_b = fingerprint_length(b)
    if length_a == 0 or length_b == 0 or length_a != length_b:
        return INCOMPARABLE_DISTANCE

    # Flattened so an 8x8 and a 1x64 array of the same bits still compare.
    return int(np.count_nonzero(a.hash.flatten() != b.hash.flatten()))


def similarity_percent(distance: int, length: int = FINGERPRINT_BITS) -> float:
    """
    Convert a Hamming distance to a similarity percentage.

    Args:
        distance: Number of differing bits
        length: Fingerprint length in bits

    Returns:
        ``(length - distance) / length * 100`` clamped to [0, 100]
    """
    if length <= 0:
        return 0.0
    similarity = (length - distance) / length * 100
    return max(0.0, min(100.0, similarity))
