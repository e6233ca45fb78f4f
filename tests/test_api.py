"""
End-to-end tests for the sprite_islands library API.

Tests that the library can be used programmatically to extract sprites
without using the CLI.
"""

import numpy as np
import pytest

from sprite_islands import ProcessedImage, Rect, crop_region, extract_sprites, feather_alpha
from sprite_islands.image_io import decode_image, encode_image


def _sheet() -> np.ndarray:
    """Transparent 96x64 sheet with three sprites: two on the first row, one below."""
    img = np.zeros((64, 96, 4), dtype=np.uint8)
    img[8:24, 60:80] = (0, 0, 255, 255)
    img[10:26, 8:24] = (255, 0, 0, 255)
    img[40:56, 30:50] = (0, 255, 0, 255)
    return img


def test_extract_sprites_basic():
    """Sprites come out as RGBA crops with their source rectangles, in reading order."""
    image = _sheet()

    results = list(extract_sprites(image))

    sprites = [r for r in results if not r.is_debug]
    assert len(results) == len(sprites) == 3, "Should not get debug images without debug=True"

    for i, result in enumerate(sprites):
        assert isinstance(result, ProcessedImage)
        assert result.name == f"sprite_{i}"
        assert isinstance(result.bbox, Rect)
        assert result.image.dtype == np.uint8
        assert result.image.shape == (result.bbox.height, result.bbox.width, 4)
        y1, y2, x1, x2 = result.bbox.as_bbox()
        assert np.array_equal(result.image, image[y1:y2, x1:x2])
        assert result.metadata["sprite_index"] == i

    assert [r.bbox for r in sprites] == [Rect(8, 10, 16, 16), Rect(60, 8, 20, 16),
                                         Rect(30, 40, 20, 16)]


def test_extract_sprites_leaves_input_untouched():
    """The input array is never modified, even when feathering."""
    image = _sheet()
    image[10:14, 8:12, 3] = 0
    before = image.copy()

    sprites = list(extract_sprites(image, feather=2))

    assert np.array_equal(image, before)
    expected = feather_alpha(crop_region(image, sprites[0].bbox), 2)
    assert np.array_equal(sprites[0].image, expected)
    # Feathering softens the alpha next to the notch
    assert sprites[0].image[4, 4, 3] < 255
    assert sprites[0].image[12, 12, 3] == 255


def test_extract_sprites_rgb_input():
    """RGB images on a solid background are handled."""
    rgb = np.full((40, 40, 3), 240, dtype=np.uint8)
    rgb[10:30, 5:25] = (20, 40, 60)

    sprites = [r for r in extract_sprites(rgb) if not r.is_debug]

    assert len(sprites) == 1
    assert sprites[0].bbox == Rect(5, 10, 20, 20)
    assert sprites[0].image.shape[2] == 4, "Output should be RGBA"


def test_extract_sprites_min_area_and_nested():
    """Options are passed through to detection."""
    image = _sheet()
    image[12:16, 64:68] = 0

    assert len(list(extract_sprites(image, min_area=300))) == 2
    hole_sprite = np.zeros((40, 40, 4), dtype=np.uint8)
    hole_sprite[5:35, 5:35] = 255
    hole_sprite[8:32, 8:32] = 0
    hole_sprite[15:25, 15:25] = 255
    assert len(list(extract_sprites(hole_sprite))) == 2
    assert len(list(extract_sprites(hole_sprite, ignore_nested=True))) == 1


def test_extract_sprites_invalid_input():
    """Invalid inputs raise ValueError."""
    with pytest.raises(ValueError, match="image.*None"):
        list(extract_sprites(None))  # type: ignore

    with pytest.raises(ValueError, match="shape"):
        list(extract_sprites(np.zeros((10, 10), dtype=np.uint8)))  # 2D array, needs 3D


def test_extract_sprites_debug_mode():
    """Debug mode yields debug images before the sprites."""
    results = list(extract_sprites(_sheet(), debug=True))

    debug_images = [r for r in results if r.is_debug]
    assert [r.name for r in debug_images] == ["debug_sprite_mask", "debug_segmented"]
    assert all(r.bbox is None for r in debug_images)
    assert [r.is_debug for r in results[:2]] == [True, True], "Debug images should come first"
    assert debug_images[0].metadata == {"background": "transparent"}
    assert debug_images[1].metadata == {"num_sprites": 3}

    segmented = debug_images[1].image
    assert segmented.shape == (64, 96, 4)
    # Rectangle outline drawn in green over the red sprite's corner
    assert tuple(segmented[10, 8]) == (0, 255, 0, 255)


def test_encode_decode_round_trip():
    """PNG encoding keeps RGBA values, including alpha."""
    image = _sheet()
    image[0, 0] = (1, 2, 3, 4)

    assert np.array_equal(decode_image(encode_image(image)), image)
