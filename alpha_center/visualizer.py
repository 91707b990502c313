"""Debug visualization utilities for alpha centering."""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import TYPE_CHECKING

import cv2
import numpy as np

if TYPE_CHECKING:
    from .models import BoundingBox


def _to_8bit(img: np.ndarray) -> np.ndarray:
    if img.dtype == np.uint16:
        return (img >> 8).astype(np.uint8)
    return img


class DebugVisualizer:
    """Saves debug images for every processed file."""

    def __init__(self, output_dir: str | Path):
        self.output_dir = Path(output_dir)
        if self.output_dir.exists():
            # Backup existing debug dir before cleaning
            backup_dir = self.output_dir.with_suffix(".bak")
            if backup_dir.exists():
                shutil.rmtree(backup_dir)
            self.output_dir.rename(backup_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.step = 0

    def _save(self, name: str, img: np.ndarray):
        self.step += 1
        filename = f"{self.step:02d}_{name}.png"
        cv2.imwrite(str(self.output_dir / filename), img)

    def save_bounds(self, img: np.ndarray, box: BoundingBox, label: str = "image"):
        """Save source image with the detected bounding box drawn in green."""
        vis = _to_8bit(img).copy()
        if not box.is_empty:
            cv2.rectangle(
                vis,
                box.top_left.as_tuple(),
                box.bottom_right.as_tuple(),
                (0, 255, 0, 255),
                1,
            )
        self._save(f"{label}_bounds", vis)

    def save_crop(self, img: np.ndarray, label: str = "image"):
        """Save the cropped and padded result."""
        if img.size:
            self._save(f"{label}_crop", _to_8bit(img))
