"""PNG decoding and encoding."""

from __future__ import annotations

from pathlib import Path

import cv2
import numpy as np

from .exceptions import ImageReadError, ImageWriteError, NotPngError

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


def is_png(data: bytes) -> bool:
    """Check if raw file content starts with the PNG signature."""
    return data[: len(PNG_SIGNATURE)] == PNG_SIGNATURE


def to_bgra(img: np.ndarray) -> np.ndarray:
    """Return image with 4 channels (BGRA), adding an opaque alpha if needed."""
    if img.ndim == 2:
        return cv2.cvtColor(img, cv2.COLOR_GRAY2BGRA)
    channels = img.shape[2]
    if channels == 4:
        return img
    if channels == 3:
        return cv2.cvtColor(img, cv2.COLOR_BGR2BGRA)
    if channels == 1:
        return cv2.cvtColor(img[:, :, 0], cv2.COLOR_GRAY2BGRA)
    raise ValueError(f"Unsupported channel count: {channels}")


def decode_png(data: bytes, name: str = "<bytes>") -> np.ndarray:
    """Decode PNG bytes into a BGRA array, keeping the bit depth.

    Raises:
        NotPngError: If the data is not a PNG
        ImageReadError: If OpenCV cannot decode the data
    """
    if not is_png(data):
        raise NotPngError(name)

    try:
        img = cv2.imdecode(np.frombuffer(data, dtype=np.uint8), cv2.IMREAD_UNCHANGED)
    except cv2.error as e:
        raise ImageReadError(name) from e
    if img is None:
        raise ImageReadError(name)

    try:
        return to_bgra(img)
    except (ValueError, cv2.error) as e:
        raise ImageReadError(name) from e


def read_image(path: str | Path) -> np.ndarray:
    """Read a PNG file into a BGRA array."""
    try:
        data = Path(path).read_bytes()
    except OSError as e:
        raise ImageReadError(str(path)) from e
    return decode_png(data, str(path))


def write_image(path: str | Path, img: np.ndarray) -> None:
    """Encode image as PNG and write it to path."""
    ok, buf = cv2.imencode(".png", img) if img.size else (False, None)
    if not ok:
        raise ImageWriteError(str(path))
    try:
        Path(path).write_bytes(buf.tobytes())
    except OSError as e:
        raise ImageWriteError(str(path)) from e
