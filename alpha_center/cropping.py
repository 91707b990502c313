"""Cropping to a bounding box onto a padded, transparent canvas."""

from __future__ import annotations

import numpy as np

from .exceptions import EmptyRegionError
from .models import BoundingBox, Padding, PaddingPixels, Point
from .padding import resolve_padding


def cut(
    img: np.ndarray,
    top_left: Point,
    bottom_right: Point,
    pixels: PaddingPixels,
) -> np.ndarray:
    """Copy the inclusive region of ``img`` onto a new padded canvas.

    The canvas has the dtype and channels of ``img`` and starts zeroed,
    i.e. fully transparent for images with alpha. Source pixel (x, y) lands
    at (x - left + pad_left, y - top + pad_top). With negative padding the
    canvas shrinks and whatever falls outside it is dropped.

    Args:
        img: Source image as numpy array
        top_left: Inclusive top-left corner of the region
        bottom_right: Inclusive bottom-right corner of the region
        pixels: Padding for each side, in pixels

    Returns:
        New image as numpy array

    Raises:
        EmptyRegionError: If the region is empty or inverted
    """
    box = BoundingBox(top_left, bottom_right)
    if box.is_empty:
        raise EmptyRegionError(f"top-left {top_left.as_tuple()}, bottom-right {bottom_right.as_tuple()}")

    new_w = max(0, box.width + pixels.left + pixels.right)
    new_h = max(0, box.height + pixels.top + pixels.bottom)
    canvas = np.zeros((new_h, new_w) + img.shape[2:], dtype=img.dtype)

    # Destination window of the region, clipped to the canvas
    dst_x0 = max(0, pixels.left)
    dst_y0 = max(0, pixels.top)
    dst_x1 = min(new_w, pixels.left + box.width)
    dst_y1 = min(new_h, pixels.top + box.height)
    if dst_x0 >= dst_x1 or dst_y0 >= dst_y1:
        return canvas

    src_x0 = top_left.x + dst_x0 - pixels.left
    src_y0 = top_left.y + dst_y0 - pixels.top
    canvas[dst_y0:dst_y1, dst_x0:dst_x1] = img[
        src_y0 : src_y0 + (dst_y1 - dst_y0),
        src_x0 : src_x0 + (dst_x1 - dst_x0),
    ]
    return canvas


def crop(
    img: np.ndarray,
    top_left: Point,
    bottom_right: Point,
    padding: Padding | None = None,
) -> np.ndarray:
    """Crop image to the inclusive box and add padding around it.

    Args:
        img: Source image as numpy array
        top_left: Inclusive top-left corner, as returned by the scanner
        bottom_right: Inclusive bottom-right corner, as returned by the scanner
        padding: Padding for each side; percentages refer to the box size

    Returns:
        Cropped image as numpy array

    Raises:
        EmptyRegionError: If the box is the empty sentinel
    """
    box = BoundingBox(top_left, bottom_right)
    if box.is_empty:
        raise EmptyRegionError(f"top-left {top_left.as_tuple()}, bottom-right {bottom_right.as_tuple()}")

    pixels = resolve_padding(box, padding or Padding.none())
    return cut(img, top_left, bottom_right, pixels)
