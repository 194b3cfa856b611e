import numpy as np
import pytest

from colour_finder.errors import RegionOutOfBounds
from colour_finder.models.focus_region import FocusRegion
from colour_finder.models.image import Image
from colour_finder.services.image_service import ImageService
from tests.conftest import uniform


@pytest.fixture
def image_service():
    return ImageService()


def test_crop_and_resample_returns_new_grid(image_service, rgbw_pixels):
    img = Image(rgbw_pixels)
    before = img.pixels.copy()
    sample = image_service.crop_and_resample(img, FocusRegion(img, 0, 0, 2, 2))

    assert sample is not img
    assert sample.pixels.shape == (16, 16, 4)
    np.testing.assert_array_equal(img.pixels, before)


def test_enlarging_replicates_source_pixels(image_service, rgbw_pixels):
    img = Image(rgbw_pixels)
    sample = image_service.crop_and_resample(img, FocusRegion(img, 0, 0, 2, 2))

    colours = {tuple(px) for px in sample.pixels.reshape(-1, 4)}
    assert colours == {tuple(px) for px in rgbw_pixels.reshape(-1, 4)}
    np.testing.assert_array_equal(sample.pixels[0, 0], rgbw_pixels[0, 0])
    np.testing.assert_array_equal(sample.pixels[15, 15], rgbw_pixels[1, 1])


def test_shrinking_averages_blocks(image_service):
    # Left half black, right half white; 32x32 -> 16x16 keeps the split.
    pixels = uniform(32, 32, (0, 0, 0))
    pixels[:, 16:, :3] = 255
    img = Image(pixels)
    sample = image_service.crop_and_resample(img, FocusRegion(img, 0, 0, 32, 32))

    assert (sample.pixels[:, :8, :3] == 0).all()
    assert (sample.pixels[:, 8:, :3] == 255).all()


def test_crop_selects_region(image_service):
    pixels = uniform(40, 30, (0, 0, 0))
    pixels[10:20, 5:25, :3] = (200, 100, 50)
    img = Image(pixels)
    sample = image_service.crop_and_resample(img, FocusRegion(img, 5, 10, 20, 10))

    assert (sample.pixels[..., :3] == (200, 100, 50)).all()


def test_custom_target_size(image_service):
    img = Image(uniform(10, 10, (1, 2, 3)))
    sample = image_service.crop_and_resample(img, FocusRegion(img, 0, 0, 10, 10), 4, 6)
    assert sample.pixels.shape == (6, 4, 4)


@pytest.mark.parametrize("rect", [
    (0, 0, 11, 10),
    (0, 0, 10, 11),
    (5, 5, 6, 5),
    (-1, 0, 5, 5),
    (0, -1, 5, 5),
    (0, 0, 0, 5),
    (0, 0, 5, -2),
    (10, 0, 1, 1),
])
def test_out_of_bounds_regions(image_service, rect):
    img = Image(uniform(10, 10, (1, 2, 3)))
    with pytest.raises(RegionOutOfBounds) as excinfo:
        image_service.crop_and_resample(img, FocusRegion(img, *rect))
    assert excinfo.value.image_size == (10, 10)
    assert excinfo.value.rectangle == rect


def test_region_touching_edges_is_allowed(image_service):
    img = Image(uniform(10, 10, (1, 2, 3)))
    sample = image_service.crop_and_resample(img, FocusRegion(img, 9, 9, 1, 1))
    assert (sample.pixels[..., :3] == (1, 2, 3)).all()


def test_load_accepts_bytes(image_service, rgbw_png):
    assert image_service.load(rgbw_png).pixels.shape == (2, 2, 4)


def test_mixed_resize_averages_the_shrinking_axis(image_service):
    # 64x2 strip of alternating black/white columns: 64 -> 16 shrinks, 2 -> 16 grows
    pixels = uniform(64, 2, (0, 0, 0))
    pixels[:, 1::2, :3] = 255
    img = Image(pixels)
    sample = image_service.crop_and_resample(img, FocusRegion(img, 0, 0, 64, 2))

    assert sample.pixels.shape == (16, 16, 4)
    # every output pixel mixes two black and two white columns (127.5, rounded)
    assert np.isin(sample.pixels[..., :3], (127, 128)).all()


def test_mixed_resize_tall_strip(image_service):
    pixels = uniform(2, 64, (0, 0, 0))
    pixels[32:, :, :3] = (200, 100, 0)
    img = Image(pixels)
    sample = image_service.crop_and_resample(img, FocusRegion(img, 0, 0, 2, 64))

    assert (sample.pixels[:8, :, :3] == 0).all()
    assert (sample.pixels[8:, :, :3] == (200, 100, 0)).all()
