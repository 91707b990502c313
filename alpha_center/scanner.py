"""Bounding box search over the opaque pixels of an image.

Three interchangeable strategies share the ``(source, tolerance) ->
BoundingBox`` signature and always return identical results:

- ``ring_scan`` walks the image border clockwise, ring by ring inward, and
  stops as soon as all four bounds are known to be final.
- ``naive_scan`` visits every pixel in raster order. It is the reference
  the other two are tested against.
- ``mask_scan`` does the raster scan with numpy.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable

import numpy as np

from .alpha import PixelSource, is_opaque, opaque_mask
from .models import BoundingBox, Point

# Sweep directions, in walking order
TOP, RIGHT, BOTTOM, LEFT = 0, 1, 2, 3

DIRECTIONS = (
    Point(1, 0),  # TOP: left to right along the top edge
    Point(0, 1),  # RIGHT: downward along the right edge
    Point(-1, 0),  # BOTTOM: right to left along the bottom edge
    Point(0, -1),  # LEFT: upward along the left edge
)

# How each stop corner moves between two rings
CORNER_INCREMENTS = (
    Point(-1, 1),  # top-right
    Point(-1, -1),  # bottom-right
    Point(1, -1),  # bottom-left
    Point(1, 1),  # top-left
)


class ScanMethod(Enum):
    """Available bounding box search strategies."""

    RING = "ring"  # Perimeter walk with early termination
    NAIVE = "naive"  # Full raster scan, reference implementation
    MASK = "mask"  # Vectorised raster scan


ScanFunction = Callable[[PixelSource, int], BoundingBox]


@dataclass
class RingSchedule:
    """Walk state of the ring scan.

    ``stop_corners[d]`` is where the sweep in direction ``d`` ends: top-right
    for TOP, bottom-right for RIGHT, bottom-left for BOTTOM and top-left for
    LEFT. A sweep starts where the previous one stopped, so the corner a
    sweep starts on is ``stop_corners[previous]``.

    ``found[d]`` is set once the bound in direction ``d`` can no longer
    change: an opaque pixel was seen on the outermost line in that direction
    of a ring, and everything left to visit lies inside that ring.
    """

    stop_corners: list[Point]
    current: int = TOP
    previous: int = LEFT
    found: list[bool] = field(default_factory=lambda: [False] * 4)

    @property
    def start(self) -> Point:
        """Corner the current sweep started on."""
        return self.stop_corners[self.previous]

    @property
    def stop(self) -> Point:
        """Corner the current sweep ends on."""
        return self.stop_corners[self.current]

    @property
    def ring_width(self) -> int:
        return self.stop_corners[TOP].x - self.stop_corners[LEFT].x

    @property
    def ring_height(self) -> int:
        return self.stop_corners[RIGHT].y - self.stop_corners[TOP].y

    @property
    def complete(self) -> bool:
        return all(self.found)

    def turn(self) -> None:
        """Switch to the next sweep direction, clockwise."""
        self.previous = self.current
        self.current = (self.current + 1) % 4

    def shrink(self) -> bool:
        """Move the stop corners to the next ring inward.

        Returns:
            False when the new ring would be empty, i.e. the image is consumed
        """
        self.stop_corners = [
            corner + incr for corner, incr in zip(self.stop_corners, CORNER_INCREMENTS)
        ]
        return self.ring_width >= 0 and self.ring_height >= 0

    def certify(self, direction: int) -> bool:
        """Mark the bound of ``direction`` as final.

        Returns:
            True when all four bounds are final
        """
        self.found[direction] = True
        return self.complete


def initial_schedule(width: int, height: int) -> RingSchedule:
    """Build the schedule of the outermost ring of a non-empty image.

    Rings only shrink cleanly down to nothing when both dimensions are even.
    An odd height is made even by a virtual transparent row above the image;
    the top sweep of the first ring would only visit that row, so the walk
    starts on the right edge instead. An odd width gets a virtual
    transparent column to the right of the image; if the walk already skips
    the top edge it skips that column's sweep too and starts on the bottom
    edge.
    """
    top = 0
    right = width - 1
    current = TOP

    if height % 2 != 0:
        top = -1
        current = RIGHT

    if width % 2 != 0:
        right = width
        if current == RIGHT:
            current = BOTTOM

    stop_corners = [
        Point(right, top),
        Point(right, height - 1),
        Point(0, height - 1),
        Point(0, top),
    ]
    return RingSchedule(stop_corners, current=current, previous=(current - 1) % 4)


def ring_scan(source: PixelSource, tolerance: int) -> BoundingBox:
    """Find the bounding box by walking the image rings from the outside in.

    Each ring is walked clockwise from its top-left corner. The first opaque
    pixel seen on a sweep fixes the bound of that sweep's direction; an
    opaque pixel on the corner a sweep starts on also fixes the bound of the
    previous direction. Sweeps turn before visiting the corner they stop
    on, so start corners do all of the corner certification. The walk ends
    once all four bounds are fixed, or when no ring is left.

    Args:
        source: Image to scan
        tolerance: Pixels with alpha <= tolerance count as transparent

    Returns:
        Bounding box of the opaque pixels, or the empty sentinel
    """
    width, height = source.width, source.height
    if width == 0 or height == 0:
        return BoundingBox.empty(width, height)

    schedule = initial_schedule(width, height)

    min_x, min_y = width, height
    max_x, max_y = -1, -1

    x, y = schedule.start.x, schedule.start.y

    while True:
        current = schedule.current

        if is_opaque(source, x, y, tolerance):
            min_x = min(min_x, x)
            max_x = max(max_x, x)
            min_y = min(min_y, y)
            max_y = max(max_y, y)

            # Nothing further inward can beat this pixel in the sweep direction
            if schedule.certify(current):
                break

            start = schedule.start
            if x == start.x and y == start.y and schedule.certify(schedule.previous):
                break

        step = DIRECTIONS[current]
        x += step.x
        y += step.y

        stop = schedule.stop
        if x == stop.x and y == stop.y:
            schedule.turn()
            if schedule.current == TOP:
                if not schedule.shrink():
                    break
                x, y = schedule.start.x, schedule.start.y

    return BoundingBox(Point(min_x, min_y), Point(max_x, max_y))


def naive_scan(source: PixelSource, tolerance: int) -> BoundingBox:
    """Find the bounding box by visiting every pixel in raster order."""
    width, height = source.width, source.height

    min_x, min_y = width, height
    max_x, max_y = -1, -1

    for y in range(height):
        for x in range(width):
            if is_opaque(source, x, y, tolerance):
                if x < min_x:
                    min_x = x
                if x > max_x:
                    max_x = x
                if y < min_y:
                    min_y = y
                if y > max_y:
                    max_y = y

    return BoundingBox(Point(min_x, min_y), Point(max_x, max_y))


def mask_scan(source: PixelSource, tolerance: int) -> BoundingBox:
    """Find the bounding box from the opaque mask with numpy."""
    mask = opaque_mask(source, tolerance)
    if not mask.any():
        return BoundingBox.empty(source.width, source.height)

    rows = np.flatnonzero(mask.any(axis=1))
    cols = np.flatnonzero(mask.any(axis=0))
    return BoundingBox(
        Point(int(cols[0]), int(rows[0])),
        Point(int(cols[-1]), int(rows[-1])),
    )


_SCAN_FUNCTIONS: dict[ScanMethod, ScanFunction] = {
    ScanMethod.RING: ring_scan,
    ScanMethod.NAIVE: naive_scan,
    ScanMethod.MASK: mask_scan,
}


def find_bounding_box(
    source: PixelSource,
    tolerance: int = 0,
    method: ScanMethod | str = ScanMethod.RING,
) -> BoundingBox:
    """Find the bounding box of the opaque pixels with the specified strategy.

    Args:
        source: Image to scan
        tolerance: Pixels with alpha <= tolerance count as transparent (0-255)
        method: Which search strategy to use

    Returns:
        Bounding box of the opaque pixels. When there are none, the sentinel
        ``BoundingBox.empty(width, height)``.
    """
    fn = _SCAN_FUNCTIONS[ScanMethod(method)]
    return fn(source, tolerance)


def scan_all(source: PixelSource, tolerance: int = 0) -> dict[str, BoundingBox]:
    """Run every strategy and return results keyed by method name."""
    results = {}
    for method in ScanMethod:
        results[method.value] = find_bounding_box(source, tolerance, method)
    return results
