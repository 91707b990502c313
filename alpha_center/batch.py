"""Batch processing of image files.

Files go through two stages connected by a generator: the decode stage
checks each file and decodes it, the process stage crops and writes it.
Either stage can fail for a single file; the configured policy decides
whether that skips the file or aborts the run.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

import numpy as np

from .alpha import ArraySource
from .cropping import crop
from .exceptions import (
    AlphaCenterError,
    DuplicateOutputError,
    EmptyRegionError,
    ImageReadError,
    InputIsDirectoryError,
    OutputExistsError,
)
from .io import read_image, write_image
from .models import BoundingBox, CropConfig
from .scanner import find_bounding_box

if TYPE_CHECKING:
    from .visualizer import DebugVisualizer

logger = logging.getLogger(__name__)


@dataclass
class BatchItem:
    """One file travelling from the decode stage to the process stage."""

    source: Path
    target: Path
    image: np.ndarray | None = None
    error: AlphaCenterError | None = None


@dataclass
class BatchResult:
    """Outcome of a batch run."""

    processed: list[Path] = field(default_factory=list)
    skipped: list[Path] = field(default_factory=list)
    failed: list[Path] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed


def output_path(source: str | Path, output_dir: str | Path) -> Path:
    """Return where the result for ``source`` is written."""
    return Path(output_dir) / Path(source).name


def decode_stage(
    files: Iterable[str | Path],
    output_dir: str | Path,
    force: bool = False,
) -> Iterator[BatchItem]:
    """Check and decode each file, yielding one item per file.

    Problems are attached to the item instead of raised, so one bad file
    does not stop the files after it from being decoded. A file whose output
    was already claimed by an earlier file of the same run is an error even
    with ``force``.
    """
    claimed: dict[Path, Path] = {}

    for file in files:
        source = Path(file)
        target = output_path(source, output_dir)
        item = BatchItem(source, target)

        if target in claimed:
            item.error = DuplicateOutputError(str(target), str(claimed[target]))
            yield item
            continue

        if target.exists() and not force:
            item.error = OutputExistsError(str(target))
        elif source.is_dir():
            item.error = InputIsDirectoryError(str(source))
        elif not source.exists():
            item.error = ImageReadError(str(source))
        else:
            try:
                item.image = read_image(source)
            except AlphaCenterError as e:
                item.error = e

        if item.error is None:
            claimed[target] = source

        yield item


def process_image(
    img: np.ndarray,
    config: CropConfig,
    visualizer: DebugVisualizer | None = None,
    label: str = "image",
) -> tuple[BoundingBox, np.ndarray]:
    """Find the visible region of an image and crop it with padding.

    Returns:
        Tuple of (bounding box, cropped image)

    Raises:
        EmptyRegionError: If no pixel is opaque under the tolerance
    """
    box = find_bounding_box(ArraySource(img), config.tolerance, config.scan_method)
    logger.debug("%s: bounding box %s", label, box.as_tuple())

    if visualizer:
        visualizer.save_bounds(img, box, label)

    if box.is_empty:
        raise EmptyRegionError("no opaque pixel found")

    result = crop(img, box.top_left, box.bottom_right, config.padding)

    if visualizer:
        visualizer.save_crop(result, label)

    return box, result


def run_batch(
    files: Iterable[str | Path],
    config: CropConfig,
    visualizer: DebugVisualizer | None = None,
) -> BatchResult:
    """Crop every file into the configured output directory.

    Raises:
        AlphaCenterError: For the first failing file, if
            ``config.stop_at_first_error`` is set
    """
    out_dir = Path(config.output_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    result = BatchResult()

    for item in decode_stage(files, out_dir, config.force):
        if item.error is not None:
            if config.stop_at_first_error:
                raise item.error
            logger.warning("skipping %s: %s", item.source, item.error)
            result.skipped.append(item.source)
            continue

        try:
            _, cropped = process_image(item.image, config, visualizer, item.source.stem)
            write_image(item.target, cropped)
        except AlphaCenterError as e:
            if config.stop_at_first_error:
                raise
            logger.warning("error while processing %s: %s", item.source, e)
            result.failed.append(item.source)
            continue

        logger.info("processed %s -> %s", item.source, item.target)
        result.processed.append(item.source)

    return result
