import numpy as np
import pytest


def bitmap_image(bitmap: list[list[int]]) -> np.ndarray:
    """Build a BGRA image where 1 is an opaque white pixel and 0 is transparent."""
    height = len(bitmap)
    width = len(bitmap[0]) if height else 0
    img = np.zeros((height, width, 4), dtype=np.uint8)
    for y, row in enumerate(bitmap):
        for x, value in enumerate(row):
            if value:
                img[y, x] = (255, 255, 255, 255)
    return img


class ListSource:
    """Pixel source over nested lists of alpha values, counting reads."""

    def __init__(self, alphas: list[list[int]], width: int | None = None):
        self.alphas = alphas
        self._height = len(alphas)
        self._width = width if width is not None else (len(alphas[0]) if alphas else 0)
        self.reads = 0

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def alpha_at(self, x: int, y: int) -> int:
        self.reads += 1
        return self.alphas[y][x]


@pytest.fixture
def gradient_image() -> np.ndarray:
    """5x5 BGRA image with a distinct color per pixel and a transparent border."""
    img = np.zeros((5, 5, 4), dtype=np.uint8)
    for y in range(5):
        for x in range(5):
            img[y, x] = (x * 10, y * 10, x + y, 0)
    img[1:4, 1:4, 3] = 200
    return img
