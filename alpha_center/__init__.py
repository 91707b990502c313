"""Crop images to their visible (non-transparent) pixels."""

__version__ = "0.1.0"


def __getattr__(name):
    """Lazy import to avoid loading cv2 for CLI subcommands that don't need it."""
    if name in ("find_bounding_box", "ScanMethod"):
        from .scanner import ScanMethod, find_bounding_box
        return {"find_bounding_box": find_bounding_box, "ScanMethod": ScanMethod}[name]
    if name in ("crop",):
        from .cropping import crop
        return crop
    if name in ("ArraySource", "is_opaque"):
        from .alpha import ArraySource, is_opaque
        return {"ArraySource": ArraySource, "is_opaque": is_opaque}[name]
    if name in ("BoundingBox", "CropConfig", "Padding", "PaddingArg", "Point"):
        from .models import BoundingBox, CropConfig, Padding, PaddingArg, Point
        return {
            "BoundingBox": BoundingBox,
            "CropConfig": CropConfig,
            "Padding": Padding,
            "PaddingArg": PaddingArg,
            "Point": Point,
        }[name]
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "find_bounding_box",
    "crop",
    "ScanMethod",
    "ArraySource",
    "is_opaque",
    "BoundingBox",
    "CropConfig",
    "Padding",
    "PaddingArg",
    "Point",
]
