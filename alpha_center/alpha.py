"""Tolerant opacity test over pixel sources."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

import numpy as np


@runtime_checkable
class PixelSource(Protocol):
    """Read-only view of an image exposing its size and per-pixel alpha."""

    @property
    def width(self) -> int: ...

    @property
    def height(self) -> int: ...

    def alpha_at(self, x: int, y: int) -> int:
        """Return alpha (0-255) at (x, y); (x, y) is inside the bounds."""
        ...


class ArraySource:
    """Pixel source backed by a decoded image array.

    Accepts grayscale (H x W), and H x W x C arrays with 1-4 channels in
    OpenCV order. Only 4-channel images carry alpha; everything else is
    treated as fully opaque. 16-bit alpha is scaled down to 0-255.
    """

    def __init__(self, image: np.ndarray):
        if image.ndim not in (2, 3):
            raise ValueError(f"Expected a 2D or 3D image array, got shape {image.shape}")
        self.image = image
        self._height, self._width = image.shape[:2]

        if image.ndim == 3 and image.shape[2] == 4:
            alpha = image[:, :, 3]
            if alpha.dtype == np.uint16:
                alpha = (alpha >> 8).astype(np.uint8)
            self._alpha = alpha.astype(np.uint8, copy=False)
        else:
            self._alpha = np.full((self._height, self._width), 255, dtype=np.uint8)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def alpha_at(self, x: int, y: int) -> int:
        return int(self._alpha[y, x])

    def alpha_channel(self) -> np.ndarray:
        """Return the full alpha plane as a uint8 H x W array."""
        return self._alpha


def is_opaque(source: PixelSource, x: int, y: int, tolerance: int) -> bool:
    """Check if the pixel at (x, y) is visible under the given tolerance.

    Pixels outside the source are never opaque. A pixel is opaque when its
    alpha is strictly greater than the tolerance, so tolerance 0 only drops
    fully transparent pixels and tolerance 255 drops everything.
    """
    if x < 0 or y < 0 or x >= source.width or y >= source.height:
        return False
    return source.alpha_at(x, y) > tolerance


def opaque_mask(source: PixelSource, tolerance: int) -> np.ndarray:
    """Return a boolean H x W mask of the opaque pixels of a source."""
    if isinstance(source, ArraySource):
        return source.alpha_channel() > tolerance

    mask = np.zeros((source.height, source.width), dtype=bool)
    for y in range(source.height):
        for x in range(source.width):
            mask[y, x] = source.alpha_at(x, y) > tolerance
    return mask
