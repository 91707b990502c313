import logging

import numpy as np
import pytest

from alpha_center.batch import decode_stage, output_path, process_image, run_batch
from alpha_center.exceptions import (
    DuplicateOutputError,
    EmptyRegionError,
    InputIsDirectoryError,
    NotPngError,
    OutputExistsError,
)
from alpha_center.io import read_image, write_image
from alpha_center.models import CropConfig, Padding


def sprite(width=8, height=6, box=(2, 1, 4, 3)):
    """BGRA image with an opaque block at (left, top, right, bottom)."""
    img = np.zeros((height, width, 4), dtype=np.uint8)
    left, top, right, bottom = box
    img[top : bottom + 1, left : right + 1] = (0, 0, 255, 255)
    return img


@pytest.fixture
def inputs(tmp_path):
    src = tmp_path / "in"
    src.mkdir()
    write_image(src / "a.png", sprite())
    write_image(src / "b.png", sprite(box=(0, 0, 0, 0)))
    return src


def test_process_image_crops_with_padding():
    config = CropConfig(padding=Padding.parse("1"))
    box, result = process_image(sprite(), config)
    assert box.as_tuple() == (2, 1, 4, 3)
    assert result.shape == (5, 5, 4)
    assert (result[1:4, 1:4, 3] == 255).all()
    assert result[0].sum() == 0


def test_process_image_rejects_transparent_image():
    with pytest.raises(EmptyRegionError):
        process_image(np.zeros((4, 4, 4), dtype=np.uint8), CropConfig())


def test_output_path_uses_file_name(tmp_path):
    assert output_path("some/dir/icon.png", tmp_path) == tmp_path / "icon.png"


def test_run_batch_writes_cropped_files(inputs, tmp_path, caplog):
    out = tmp_path / "out" / "nested"
    config = CropConfig(output_dir=str(out))

    with caplog.at_level(logging.INFO, logger="alpha_center.batch"):
        result = run_batch([inputs / "a.png", inputs / "b.png"], config)

    assert result.processed == [inputs / "a.png", inputs / "b.png"]
    assert result.ok
    assert read_image(out / "a.png").shape == (3, 3, 4)
    assert read_image(out / "b.png").shape == (1, 1, 4)
    assert "processed" in caplog.text


def test_existing_output_is_skipped_unless_forced(inputs, tmp_path):
    out = tmp_path / "out"
    out.mkdir()
    write_image(out / "a.png", np.full((1, 1, 4), 255, dtype=np.uint8))

    result = run_batch([inputs / "a.png"], CropConfig(output_dir=str(out)))
    assert result.skipped == [inputs / "a.png"]
    assert read_image(out / "a.png").shape == (1, 1, 4)

    result = run_batch([inputs / "a.png"], CropConfig(output_dir=str(out), force=True))
    assert result.processed == [inputs / "a.png"]
    assert read_image(out / "a.png").shape == (3, 3, 4)


def test_failures_do_not_stop_the_batch(inputs, tmp_path, caplog):
    write_image(inputs / "clear.png", np.zeros((3, 3, 4), dtype=np.uint8))
    (inputs / "text.png").write_text("not an image")
    files = [inputs, inputs / "clear.png", inputs / "text.png", inputs / "missing.png", inputs / "a.png"]

    with caplog.at_level(logging.WARNING, logger="alpha_center.batch"):
        result = run_batch(files, CropConfig(output_dir=str(tmp_path / "out")))

    assert result.processed == [inputs / "a.png"]
    assert result.failed == [inputs / "clear.png"]
    assert result.skipped == [inputs, inputs / "text.png", inputs / "missing.png"]
    assert not result.ok
    assert "skipping" in caplog.text


@pytest.mark.parametrize(
    "name, error",
    [("clear.png", EmptyRegionError), ("text.png", NotPngError), ("", InputIsDirectoryError)],
)
def test_stop_at_first_error(inputs, tmp_path, name, error):
    write_image(inputs / "clear.png", np.zeros((3, 3, 4), dtype=np.uint8))
    (inputs / "text.png").write_text("not an image")
    config = CropConfig(output_dir=str(tmp_path / "out"), stop_at_first_error=True)

    with pytest.raises(error):
        run_batch([inputs / name if name else inputs, inputs / "a.png"], config)
    assert not (tmp_path / "out" / "a.png").exists()


def test_decode_stage_attaches_errors(inputs, tmp_path):
    out = tmp_path / "out"
    out.mkdir()
    (out / "a.png").write_bytes(b"")

    items = list(decode_stage([inputs / "a.png", inputs / "b.png"], out))
    assert isinstance(items[0].error, OutputExistsError)
    assert items[0].image is None
    assert items[1].error is None
    assert items[1].image.shape == (6, 8, 4)
    assert items[1].target == out / "b.png"


def test_debug_visualizer_saves_images(inputs, tmp_path):
    from alpha_center.visualizer import DebugVisualizer

    debug_dir = tmp_path / "debug"
    visualizer = DebugVisualizer(debug_dir)
    run_batch([inputs / "a.png"], CropConfig(output_dir=str(tmp_path / "out")), visualizer)

    assert sorted(p.name for p in debug_dir.iterdir()) == ["01_a_bounds.png", "02_a_crop.png"]

    DebugVisualizer(debug_dir)
    assert (tmp_path / "debug.bak" / "01_a_bounds.png").exists()
    assert list(debug_dir.iterdir()) == []


@pytest.mark.parametrize("force", [False, True])
def test_same_file_name_in_two_folders_is_not_overwritten(tmp_path, force):
    first, second = tmp_path / "a", tmp_path / "b"
    first.mkdir()
    second.mkdir()
    write_image(first / "x.png", sprite())
    write_image(second / "x.png", sprite(box=(0, 0, 0, 0)))
    out = tmp_path / "out"

    result = run_batch([first / "x.png", second / "x.png"], CropConfig(output_dir=str(out), force=force))

    assert result.processed == [first / "x.png"]
    assert result.skipped == [second / "x.png"]
    assert [p.name for p in out.iterdir()] == ["x.png"]
    assert read_image(out / "x.png").shape == (3, 3, 4)


def test_same_file_name_stops_run_when_requested(tmp_path):
    for folder in ("a", "b"):
        (tmp_path / folder).mkdir()
        write_image(tmp_path / folder / "x.png", sprite())
    config = CropConfig(output_dir=str(tmp_path / "out"), force=True, stop_at_first_error=True)

    with pytest.raises(DuplicateOutputError):
        run_batch([tmp_path / "a" / "x.png", tmp_path / "b" / "x.png"], config)


def test_failed_decode_does_not_claim_output(tmp_path):
    (tmp_path / "a").mkdir()
    (tmp_path / "b").mkdir()
    (tmp_path / "a" / "x.png").write_text("not an image")
    write_image(tmp_path / "b" / "x.png", sprite())

    items = list(decode_stage([tmp_path / "a" / "x.png", tmp_path / "b" / "x.png"], tmp_path / "out"))
    assert isinstance(items[0].error, NotPngError)
    assert items[1].error is None
