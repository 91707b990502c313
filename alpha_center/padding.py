"""Padding resolution relative to the cropped rectangle."""

from __future__ import annotations

from .models import BoundingBox, Padding, PaddingArg, PaddingPixels, PaddingUnit


def resolve_arg(arg: PaddingArg, dimension: int) -> int:
    """Convert one padding amount to pixels.

    Percentages are taken of ``dimension`` and rounded down. Negative
    values are passed through; the caller decides whether they make sense.
    """
    if arg.unit is PaddingUnit.PIXEL:
        return arg.value
    return (dimension * arg.value) // 100


def resolve_padding(box: BoundingBox, padding: Padding) -> PaddingPixels:
    """Resolve padding to pixel counts for a cropped box.

    Top and bottom percentages are relative to the box height, left and
    right to its width (not the source image's).
    """
    return PaddingPixels(
        top=resolve_arg(padding.top, box.height),
        right=resolve_arg(padding.right, box.width),
        bottom=resolve_arg(padding.bottom, box.height),
        left=resolve_arg(padding.left, box.width),
    )


def padding_from_options(
    all_sides: str | None = None,
    horizontal: str | None = None,
    vertical: str | None = None,
    top: str | None = None,
    right: str | None = None,
    bottom: str | None = None,
    left: str | None = None,
    base: Padding | None = None,
) -> Padding:
    """Combine padding options, more specific ones overriding broader ones.

    ``all_sides`` applies first, then ``horizontal``/``vertical``, then the
    single sides. Options left as None keep the value from ``base``.
    """
    sides = dict(zip(("top", "right", "bottom", "left"), (base or Padding.none()).as_tuple()))

    if all_sides is not None:
        parsed = Padding.parse(all_sides)
        sides.update(top=parsed.top, right=parsed.right, bottom=parsed.bottom, left=parsed.left)

    if horizontal is not None:
        arg = PaddingArg.parse(horizontal)
        sides.update(left=arg, right=arg)

    if vertical is not None:
        arg = PaddingArg.parse(vertical)
        sides.update(top=arg, bottom=arg)

    for side, value in (("top", top), ("right", right), ("bottom", bottom), ("left", left)):
        if value is not None:
            sides[side] = PaddingArg.parse(value)

    return Padding(**sides)
