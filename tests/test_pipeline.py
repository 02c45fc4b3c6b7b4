import tracemalloc

import numpy as np
import pytest
from PIL import Image

from errors import DecodeFailure, EncodeFailure, InvalidParameter, NoOutputAvailable
from pipeline import Algorithm, Pipeline, SaltPepper, Threshold, describe
from raster import RasterImage

RED = (255, 0, 0, 255)


@pytest.fixture
def pipe():
    return Pipeline(rng=np.random.default_rng(0))


@pytest.fixture
def red_image():
    return RasterImage.solid(4, 4, RED)


def test_starts_empty_with_blur_selected(pipe):
    assert pipe.input is None
    assert pipe.output is None
    assert pipe.selection is Algorithm.BLUR


def test_apply_without_input_is_noop(pipe):
    assert pipe.apply() is None
    assert pipe.output is None


def test_load_sets_input_and_clears_output(pipe, red_image):
    pipe.load(red_image)
    pipe.apply()
    assert pipe.output is not None
    pipe.load(RasterImage.solid(2, 2, RED))
    assert pipe.input.size == (2, 2)
    assert pipe.output is None


def test_load_clamps_large_images(pipe):
    loaded = pipe.load(RasterImage.solid(500, 200, RED))
    assert loaded.size == (300, 120)
    assert pipe.input is loaded


def test_load_keeps_small_images(pipe):
    img = RasterImage.solid(200, 150, RED)
    assert pipe.load(img) is img


def test_custom_max_dim():
    p = Pipeline(max_dim=50)
    assert p.load(RasterImage.solid(100, 40, RED)).size == (50, 20)


def test_grayscale_end_to_end(pipe, red_image):
    pipe.load(red_image)
    pipe.select(Algorithm.GRAYSCALE)
    out = pipe.apply()
    assert out.pixels == [(76, 76, 76, 255)] * 16
    assert pipe.input is red_image


def test_apply_does_not_read_previous_output(pipe, red_image):
    pipe.load(red_image)
    pipe.select(Algorithm.INVERT)
    first = pipe.apply()
    second = pipe.apply()
    assert first == second


def test_promote_moves_output_into_input(pipe, red_image):
    pipe.load(red_image)
    pipe.select(Algorithm.ZOOM_NEAREST)
    out = pipe.apply()
    pipe.promote()
    assert pipe.input is out
    assert pipe.output is None
    assert pipe.apply().size == (16, 16)


def test_promote_without_output_is_noop(pipe, red_image):
    pipe.load(red_image)
    pipe.promote()
    assert pipe.input is red_image
    assert pipe.output is None


@pytest.mark.parametrize("selection", list(Algorithm) + [Threshold(100), SaltPepper(0.5)])
def test_every_selection_dispatches(pipe, selection):
    pipe.load(RasterImage.solid(5, 3, (40, 80, 120, 255)))
    pipe.select(selection)
    out = pipe.apply()
    if selection in (Algorithm.ZOOM_NEAREST, Algorithm.ZOOM_BILINEAR):
        assert out.size == (10, 6)
    else:
        assert out.size == (5, 3)


def test_threshold_selection_uses_its_level(pipe):
    pipe.load(RasterImage.from_rows([[(100, 100, 100, 255), (200, 200, 200, 255)]]))
    pipe.select(Threshold(150))
    assert pipe.apply().pixels == [(0, 0, 0, 255), (255, 255, 255, 255)]


def test_salt_pepper_uses_injected_stream(red_image):
    a = Pipeline(SaltPepper(0.4), rng=np.random.default_rng(9))
    b = Pipeline(SaltPepper(0.4), rng=np.random.default_rng(9))
    a.load(red_image)
    b.load(red_image)
    assert a.apply() == b.apply()


@pytest.mark.parametrize("build", [
    lambda: Threshold(-1),
    lambda: Threshold(256),
    lambda: Threshold(12.5),
    lambda: Threshold(True),
    lambda: SaltPepper(-0.01),
    lambda: SaltPepper(1.5),
])
def test_out_of_range_parameters_are_rejected(build):
    with pytest.raises(InvalidParameter):
        build()


def test_select_rejects_unknown_objects(pipe):
    with pytest.raises(InvalidParameter):
        pipe.select("Blur")
    assert pipe.selection is Algorithm.BLUR


def test_describe():
    assert describe(Algorithm.SOBEL) == "Sobel"
    assert describe(Threshold(7)) == "Threshold (7)"
    assert describe(SaltPepper(0.25)) == "Salt & Pepper (p=0.25)"


def test_load_file_decodes_and_clamps(pipe, tmp_path):
    path = tmp_path / "wide.png"
    Image.new("RGB", (600, 150), (10, 20, 30)).save(path)
    loaded = pipe.load_file(path)
    assert loaded.size == (300, 75)
    assert loaded.get_pixel(0, 0) == (10, 20, 30, 255)


def test_decode_failure_leaves_state_untouched(pipe, red_image, tmp_path):
    pipe.load(red_image)
    pipe.apply()
    out = pipe.output
    bad = tmp_path / "bad.png"
    bad.write_bytes(b"\x00\x01garbage")
    with pytest.raises(DecodeFailure):
        pipe.load_file(bad)
    assert pipe.input is red_image
    assert pipe.output is out


def test_save_without_output_raises(pipe, red_image, tmp_path):
    pipe.load(red_image)
    with pytest.raises(NoOutputAvailable):
        pipe.save(tmp_path / "out.png")


def test_save_writes_output(pipe, red_image, tmp_path):
    pipe.load(red_image)
    pipe.select(Algorithm.NEGATIVE)
    pipe.apply()
    path = pipe.save(tmp_path / "out.png")
    with Image.open(path) as img:
        assert img.getpixel((0, 0)) == (0, 255, 255, 255)


def test_encode_failure_keeps_output(pipe, red_image, tmp_path):
    pipe.load(red_image)
    out = pipe.apply()
    with pytest.raises(EncodeFailure):
        pipe.save(tmp_path / "out.notaformat")
    assert pipe.output is out


def test_default_bound_is_300():
    assert Pipeline().max_dim == 300


def test_large_file_is_subsampled_while_decoding(pipe, tmp_path):
    w, h = 3000, 2000
    xs = np.arange(w, dtype=np.uint16)
    ys = np.arange(h, dtype=np.uint16)[:, None]
    arr = np.empty((h, w, 3), dtype=np.uint8)
    arr[..., 0] = xs % 256
    arr[..., 1] = ys % 256
    arr[..., 2] = (xs // 256 + ys // 256) % 256
    path = tmp_path / "photo.png"
    Image.fromarray(arr, "RGB").save(path)

    tracemalloc.start()
    try:
        loaded = pipe.load_file(path)
        _, peak = tracemalloc.get_traced_memory()
    finally:
        tracemalloc.stop()

    assert loaded.size == (300, 200)
    assert pipe.input is loaded
    # a full-size tuple list would need gigabytes; the RGBA array is ~24 MB
    assert peak < 200 * 1024 * 1024
    for x, y in ((0, 0), (299, 199), (123, 45), (250, 10)):
        sx, sy = x * w // 300, y * h // 200
        r, g, b = (int(v) for v in arr[sy, sx])
        assert loaded.get_pixel(x, y) == (r, g, b, 255)
