import numpy as np
import pytest

from alpha_center.alpha import ArraySource, PixelSource, is_opaque, opaque_mask

from .conftest import ListSource


def test_array_source_reads_alpha_channel():
    img = np.zeros((2, 3, 4), dtype=np.uint8)
    img[1, 2, 3] = 77
    source = ArraySource(img)
    assert (source.width, source.height) == (3, 2)
    assert source.alpha_at(2, 1) == 77
    assert source.alpha_at(0, 0) == 0


@pytest.mark.parametrize(
    "img",
    [
        np.zeros((3, 4), dtype=np.uint8),
        np.zeros((3, 4, 1), dtype=np.uint8),
        np.zeros((3, 4, 3), dtype=np.uint8),
    ],
)
def test_images_without_alpha_are_opaque(img):
    source = ArraySource(img)
    assert (source.width, source.height) == (4, 3)
    assert source.alpha_at(3, 2) == 255


def test_16bit_alpha_is_scaled():
    img = np.zeros((1, 2, 4), dtype=np.uint16)
    img[0, 0, 3] = 0x8000
    img[0, 1, 3] = 0xFFFF
    source = ArraySource(img)
    assert source.alpha_at(0, 0) == 128
    assert source.alpha_at(1, 0) == 255


def test_rejects_non_image_arrays():
    with pytest.raises(ValueError):
        ArraySource(np.zeros(5, dtype=np.uint8))


def test_sources_satisfy_protocol():
    assert isinstance(ArraySource(np.zeros((1, 1, 4), dtype=np.uint8)), PixelSource)
    assert isinstance(ListSource([[0]]), PixelSource)


@pytest.mark.parametrize(
    "alpha, tolerance, expected",
    [
        (0, 0, False),
        (1, 0, True),
        (255, 0, True),
        (100, 99, True),
        (100, 100, False),
        (100, 101, False),
        (255, 254, True),
        (255, 255, False),
    ],
)
def test_opaque_iff_alpha_above_tolerance(alpha, tolerance, expected):
    assert is_opaque(ListSource([[alpha]]), 0, 0, tolerance) is expected


@pytest.mark.parametrize("x, y", [(-1, 0), (0, -1), (2, 0), (0, 2), (5, 5)])
def test_out_of_bounds_is_never_opaque(x, y):
    source = ListSource([[255, 255], [255, 255]])
    assert is_opaque(source, x, y, 0) is False
    assert source.reads == 0


def test_opaque_mask_matches_for_any_source():
    alphas = [[0, 10, 200], [255, 5, 0]]
    img = np.zeros((2, 3, 4), dtype=np.uint8)
    img[:, :, 3] = alphas

    expected = np.array([[False, True, True], [True, False, False]])
    assert np.array_equal(opaque_mask(ListSource(alphas), 5), expected)
    assert np.array_equal(opaque_mask(ArraySource(img), 5), expected)
