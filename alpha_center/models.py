"""Data models for alpha centering."""

from __future__ import annotations

import json
import re
from dataclasses import asdict, dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

from .exceptions import InvalidArgumentError

_PADDING_RE = re.compile(r"^(\d+)(%?)$")


@dataclass(frozen=True)
class Point:
    """Integer pixel coordinate."""

    x: int
    y: int

    def __add__(self, other: Point) -> Point:
        return Point(self.x + other.x, self.y + other.y)

    def as_tuple(self) -> tuple[int, int]:
        return (self.x, self.y)


@dataclass(frozen=True)
class BoundingBox:
    """Inclusive bounding rectangle of the opaque pixels of an image.

    When nothing is opaque the box is the sentinel produced by ``empty()``:
    ``top_left`` holds the image size and ``bottom_right`` is ``(-1, -1)``.
    """

    top_left: Point
    bottom_right: Point

    @classmethod
    def empty(cls, width: int, height: int) -> BoundingBox:
        """Return the sentinel for an image of the given size."""
        return cls(Point(width, height), Point(-1, -1))

    @property
    def is_empty(self) -> bool:
        """Check if the box covers no pixel."""
        return (
            self.top_left.x > self.bottom_right.x
            or self.top_left.y > self.bottom_right.y
        )

    @property
    def width(self) -> int:
        return max(0, self.bottom_right.x - self.top_left.x + 1)

    @property
    def height(self) -> int:
        return max(0, self.bottom_right.y - self.top_left.y + 1)

    def as_tuple(self) -> tuple[int, int, int, int]:
        """Return box as (left, top, right, bottom) tuple."""
        return (self.top_left.x, self.top_left.y, self.bottom_right.x, self.bottom_right.y)


class PaddingUnit(Enum):
    """Unit of a padding amount."""

    PIXEL = "pixel"
    PERCENT = "percent"  # Relative to the cropped dimension


@dataclass(frozen=True)
class PaddingArg:
    """Padding amount for one side."""

    value: int = 0
    unit: PaddingUnit = PaddingUnit.PIXEL

    @classmethod
    def parse(cls, value: str) -> PaddingArg:
        """Parse "12" (pixels) or "50%" (percent of the cropped dimension)."""
        match = _PADDING_RE.match(value.strip())
        if match is None:
            raise InvalidArgumentError(
                f"padding must be a non-negative integer, optionally followed by '%', got {value!r}"
            )
        unit = PaddingUnit.PERCENT if match.group(2) else PaddingUnit.PIXEL
        return cls(int(match.group(1)), unit)

    def __str__(self) -> str:
        return f"{self.value}%" if self.unit is PaddingUnit.PERCENT else str(self.value)


@dataclass(frozen=True)
class Padding:
    """Padding for each side (top, right, bottom, left)."""

    top: PaddingArg = field(default_factory=PaddingArg)
    right: PaddingArg = field(default_factory=PaddingArg)
    bottom: PaddingArg = field(default_factory=PaddingArg)
    left: PaddingArg = field(default_factory=PaddingArg)

    @classmethod
    def none(cls) -> Padding:
        return cls()

    @classmethod
    def parse(cls, value: str) -> Padding:
        """Parse padding string into Padding object.

        Supports formats:
            - Single value: "10" -> all sides 10px
            - Two values: "10,5%" -> vertical 10px, horizontal 5%
            - Four values: "1,2,3,4%" -> top, right, bottom, left

        Separators: , : / ;
        """
        parts = [PaddingArg.parse(p) for p in re.split(r"[,:;/]", value)]

        if len(parts) == 1:
            return cls(parts[0], parts[0], parts[0], parts[0])
        elif len(parts) == 2:
            # vertical, horizontal
            return cls(parts[0], parts[1], parts[0], parts[1])
        elif len(parts) == 4:
            return cls(parts[0], parts[1], parts[2], parts[3])
        else:
            raise InvalidArgumentError(f"invalid padding format: {value}")

    def as_tuple(self) -> tuple[PaddingArg, PaddingArg, PaddingArg, PaddingArg]:
        """Return padding as (top, right, bottom, left) tuple."""
        return (self.top, self.right, self.bottom, self.left)

    def to_dict(self) -> dict[str, str]:
        return {
            "top": str(self.top),
            "right": str(self.right),
            "bottom": str(self.bottom),
            "left": str(self.left),
        }


@dataclass(frozen=True)
class PaddingPixels:
    """Padding resolved to pixel counts."""

    top: int = 0
    right: int = 0
    bottom: int = 0
    left: int = 0


# =============================================================================
# Configuration
# =============================================================================


SCAN_METHODS = ("ring", "naive", "mask")


@dataclass
class CropConfig:
    """Complete configuration for a crop run."""

    tolerance: int = 0
    padding: Padding = field(default_factory=Padding)
    scan_method: str = "ring"
    output_dir: str = "./centered"
    force: bool = False
    stop_at_first_error: bool = False

    def validate(self) -> None:
        """Validate the configuration."""
        if (
            isinstance(self.tolerance, bool)
            or not isinstance(self.tolerance, int)
            or not (0 <= self.tolerance <= 255)
        ):
            raise InvalidArgumentError(f"tolerance must be 0-255, got {self.tolerance}")
        if self.scan_method not in SCAN_METHODS:
            raise InvalidArgumentError(f"scan_method must be one of {SCAN_METHODS}")
        if not self.output_dir:
            raise InvalidArgumentError("output_dir must not be empty")

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        data = asdict(self)
        data["padding"] = self.padding.to_dict()
        return data

    def to_json(self, indent: int = 2) -> str:
        """Convert to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CropConfig:
        """Create CropConfig from dictionary."""
        config = cls()

        for key in ("tolerance", "scan_method", "output_dir", "force", "stop_at_first_error"):
            if key in data:
                setattr(config, key, data[key])

        if "padding" in data:
            pad = data["padding"]
            if isinstance(pad, str):
                config.padding = Padding.parse(pad)
            elif isinstance(pad, dict):
                sides = {
                    side: PaddingArg.parse(str(pad[side]))
                    for side in ("top", "right", "bottom", "left")
                    if side in pad
                }
                config.padding = Padding(**sides)
            else:
                raise InvalidArgumentError(f"padding must be a string or an object, got {pad!r}")

        config.validate()
        return config

    @classmethod
    def from_json(cls, json_str: str) -> CropConfig:
        """Parse CropConfig from JSON string."""
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as e:
            raise InvalidArgumentError(f"config is not valid JSON: {e}") from e
        if not isinstance(data, dict):
            raise InvalidArgumentError("config must be a JSON object")
        return cls.from_dict(data)

    @classmethod
    def from_file(cls, path: str | Path) -> CropConfig:
        """Load CropConfig from JSON file."""
        with open(path) as f:
            return cls.from_json(f.read())
