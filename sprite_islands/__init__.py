"""
Sprite Island Extractor

Finds the individual sprites ("islands") of a sprite sheet, with the
background detected automatically, and provides pixel editing tools for
cleaning up sprite backgrounds.

Public API:
    - detect_islands: Detect sprite rectangles in an RGBA image
    - extract_sprites: Generator yielding cropped sprites (and debug images)
    - flood_fill: Magic wand background removal
    - feather_alpha: Alpha edge feathering
    - crop_region: Copy a rectangle out of an image
"""

from sprite_islands.alpha_processing import feather_alpha
from sprite_islands.api import ProcessedImage, extract_sprites
from sprite_islands.background import BackgroundKind, BackgroundModel, infer_background
from sprite_islands.image_io import decode_image, encode_image, load_image, save_image
from sprite_islands.magic_wand import flood_fill
from sprite_islands.pixel_buffer import Color, InvalidDimensionsError, Rect, crop_region
from sprite_islands.sprite_segmentation import detect_islands

__version__ = "0.1.0"
__all__ = [
    "detect_islands", "extract_sprites", "ProcessedImage", "flood_fill", "feather_alpha",
    "crop_region", "infer_background", "BackgroundModel", "BackgroundKind", "Color", "Rect",
    "InvalidDimensionsError", "load_image", "save_image", "decode_image", "encode_image",
    "__version__",
]
