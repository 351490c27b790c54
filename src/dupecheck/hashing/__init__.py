"""Fingerprint extraction and similarity metrics."""

from .extract import ImageHashes, ImageDecodeError, extract_fingerprints, extract_fingerprints_from_path
from .distance import (
    FINGERPRINT_BITS,
    INCOMPARABLE_DISTANCE,
    hamming_distance,
    similarity_percent,
)
from .bits import from_bits, to_bits

__all__ = [
    "ImageHashes",
    "ImageDecodeError",
    "extract_fingerprints",
    "extract_fingerprints_from_path",
    "FINGERPRINT_BITS",
    "INCOMPARABLE_DISTANCE",
    "hamming_distance",
    "similarity_percent",
    "from_bits",
    "to_bits",
]
