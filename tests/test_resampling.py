import pytest

import resampling
from raster import RasterImage

A = (255, 0, 0, 255)
B = (0, 255, 0, 255)
C = (0, 0, 255, 255)
D = (10, 20, 30, 40)


def test_zoom_nearest_builds_solid_blocks():
    img = RasterImage.from_rows([[A, B], [C, D]])
    out = resampling.zoom_nearest(img)
    assert out.size == (4, 4)
    assert list(out.rows()) == [
        [A, A, B, B],
        [A, A, B, B],
        [C, C, D, D],
        [C, C, D, D],
    ]


def test_zoom_nearest_replicates_every_source_pixel():
    rows = [[(x, y, x + y, 255) for x in range(5)] for y in range(3)]
    img = RasterImage.from_rows(rows)
    out = resampling.zoom_nearest(img)
    assert out.size == (10, 6)
    for y in range(3):
        for x in range(5):
            v = img.get_pixel(x, y)
            for dx, dy in ((0, 0), (1, 0), (0, 1), (1, 1)):
                assert out.get_pixel(2 * x + dx, 2 * y + dy) == v


def test_zoom_bilinear_interpolates_halfway():
    dark, light = (0, 0, 0, 255), (100, 200, 50, 255)
    img = RasterImage.from_rows([[dark, light]])
    out = resampling.zoom_bilinear(img)
    assert out.size == (4, 2)
    expected_row = [dark, (50, 100, 25, 255), light, light]
    assert list(out.rows()) == [expected_row, expected_row]


def test_zoom_bilinear_blends_alpha_and_corners():
    img = RasterImage.from_rows([[(0, 0, 0, 0), (0, 0, 0, 100)],
                                 [(0, 0, 0, 100), (0, 0, 0, 200)]])
    out = resampling.zoom_bilinear(img)
    assert out.get_pixel(1, 1) == (0, 0, 0, 100)
    assert out.get_pixel(3, 3) == (0, 0, 0, 200)


def test_zoom_bilinear_on_solid_is_solid():
    img = RasterImage.solid(3, 2, (9, 99, 199, 255))
    out = resampling.zoom_bilinear(img)
    assert out.size == (6, 4)
    assert set(out.pixels) == {(9, 99, 199, 255)}


@pytest.mark.parametrize("size, expected", [
    ((500, 200), (300, 120)),
    ((200, 500), (120, 300)),
    ((1000, 1000), (300, 300)),
    ((301, 1), (300, 1)),
    ((2000, 3), (300, 1)),
])
def test_clamp_bounds_longest_side(size, expected):
    img = RasterImage.solid(*size, (1, 2, 3, 255))
    out = resampling.clamp_to_max_dim(img, 300)
    assert out.size == expected


def test_clamp_leaves_small_images_alone():
    img = RasterImage.solid(200, 150, (1, 2, 3, 255))
    assert resampling.clamp_to_max_dim(img, 300) is img


def test_resize_nearest_picks_source_pixels():
    img = RasterImage.from_rows([[A, B, C, D]])
    out = resampling.resize_nearest(img, 2, 1)
    assert out.pixels == [A, C]


@pytest.mark.parametrize("size, expected", [
    ((3000, 2000), (300, 200)),
    ((170, 130), (170, 130)),
    ((1, 5000), (1, 300)),
    ((301, 300), (300, 299)),
])
def test_clamped_size(size, expected):
    assert resampling.clamped_size(size[0], size[1], 300) == expected
