"""Fingerprint extraction from encoded image bytes."""

import io
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

import imagehash
import numpy as np
from PIL import Image

from ..logging import get_logger
from .bits import HASH_SIZE, to_bits

logger = get_logger(__name__)


@dataclass(frozen=True)
class ImageHashes:
    """The two fingerprint families of one image."""
    average: imagehash.ImageHash    # brightness vs. global mean
    gradient: imagehash.ImageHash   # brightness vs. right-hand neighbour

    @property
    def average_bits(self) -> str:
        return to_bits(self.average)

    @property
    def gradient_bits(self) -> str:
        return to_bits(self.gradient)


class ImageDecodeError(Exception):
    """Raised when bytes cannot be decoded into an image."""


def _grayscale_grid(image: Image.Image, width: int, height: int) -> np.ndarray:
    """
    Shrink an image to ``width`` x ``height`` and reduce it to brightness.

    Each output sample is the area-weighted mean of the source pixels it
    covers (BOX filter). Grayscale uses Pillow's "L" conversion, i.e. ITU-R
    BT.601 luma: L = R * 299/1000 + G * 587/1000 + B * 114/1000.
    """
    small = image.resize((width, height), Image.Resampling.BOX)
    return np.asarray(small.convert("L"), dtype=np.float64)


def average_hash(image: Image.Image, hash_size: int = HASH_SIZE) -> imagehash.ImageHash:
    """
    Structural-average fingerprint.

    Shrink to ``hash_size`` x ``hash_size``, then set a bit for every sample
    strictly brighter than the mean of all samples, row-major.
    """
    pixels = _grayscale_grid(image, hash_size, hash_size)
    return imagehash.ImageHash(pixels > pixels.mean())


def gradient_hash(image: Image.Image, hash_size: int = HASH_SIZE) -> imagehash.ImageHash:
    """
    Gradient fingerprint.

    Shrink to ``hash_size + 1`` columns by ``hash_size`` rows, then set a bit
    wherever a sample is strictly brighter than its right-hand neighbour.
    """
    pixels = _grayscale_grid(image, hash_size + 1, hash_size)
    return imagehash.ImageHash(pixels[:, :-1] > pixels[:, 1:])


def _decode(data: bytes) -> Image.Image:
    try:
        image = Image.open(io.BytesIO(data))
        # Force the pixel data in; truncated files only fail here.
        image.load()
        # Palette, alpha and grayscale inputs all hash from the same RGB view
        if image.mode != 'RGB':
            image = image.convert('RGB')
    except Exception as exc:
        raise ImageDecodeError(f"Cannot decode image: {exc}") from exc
    return image


def extract_fingerprints(data: bytes) -> Optional[ImageHashes]:
    """
    Compute both fingerprints for an encoded image.

    Args:
        data: Raw file bytes (any format Pillow can read)

    Returns:
        ImageHashes, or None if the bytes are not a decodable image
    """
    try:
        image = _decode(data)
    except ImageDecodeError as exc:
        logger.warning(str(exc))
        return None

    with image:
        hashes = ImageHashes(average=average_hash(image), gradient=gradient_hash(image))

    logger.debug(f"Computed fingerprints: average={hashes.average}, gradient={hashes.gradient}")
    return hashes


def extract_fingerprints_from_path(image_path: Union[str, Path]) -> Optional[ImageHashes]:
    """Read an image file and compute its fingerprints; None if unreadable."""
    try:
        data = Path(image_path).read_bytes()
    except OSError as exc:
        logger.warning(f"Cannot read {image_path}: {exc}")
        return None
    return extract_fingerprints(data)
