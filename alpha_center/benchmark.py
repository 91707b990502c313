"""Timing of the bounding box strategies on random bitmaps."""

from __future__ import annotations

import time
from dataclasses import dataclass, field

import numpy as np

from .alpha import ArraySource
from .models import BoundingBox
from .scanner import ScanMethod, find_bounding_box


def random_bitmap(
    width: int,
    height: int,
    density: float = 0.5,
    seed: int | None = None,
) -> np.ndarray:
    """Return a BGRA image whose pixels are opaque with probability ``density``."""
    rng = np.random.default_rng(seed)
    img = np.zeros((height, width, 4), dtype=np.uint8)
    img[:, :, 3] = np.where(rng.random((height, width)) < density, 255, 0)
    return img


@dataclass
class BenchmarkReport:
    """Mean seconds per scan and result for each strategy."""

    width: int
    height: int
    density: float
    timings: dict[str, float] = field(default_factory=dict)
    boxes: dict[str, BoundingBox] = field(default_factory=dict)

    @property
    def consistent(self) -> bool:
        """Check if every strategy found the same box."""
        return len(set(self.boxes.values())) <= 1


def run_benchmark(
    width: int = 1920,
    height: int = 1080,
    density: float = 0.5,
    repeat: int = 3,
    seed: int | None = None,
    tolerance: int = 0,
    methods: list[ScanMethod] | None = None,
) -> BenchmarkReport:
    """Time each strategy on the same random bitmap."""
    source = ArraySource(random_bitmap(width, height, density, seed))
    report = BenchmarkReport(width, height, density)
    runs = max(1, repeat)

    for method in methods or list(ScanMethod):
        start = time.perf_counter()
        for _ in range(runs):
            box = find_bounding_box(source, tolerance, method)
        report.timings[method.value] = (time.perf_counter() - start) / runs
        report.boxes[method.value] = box

    return report
