#!/usr/bin/env python3
"""
Public API for the sprite island extractor.

This module provides the main pipeline for programmatic use: detect the
sprite islands of an image and yield each one as a cropped image.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generator

import cv2
import numpy as np

from sprite_islands.alpha_processing import feather_alpha
from sprite_islands.background import infer_background, sprite_mask
from sprite_islands.pixel_buffer import Rect, crop_region, ensure_rgba
from sprite_islands.sprite_segmentation import detect_islands


@dataclass
class ProcessedImage:
    """
    An image produced by the sprite extraction pipeline.

    Attributes:
        image: The image data as a numpy array (RGBA, uint8)
        name: Descriptive name for the image (e.g., "sprite_0", "debug_segmented")
        bbox: Source rectangle for sprites, or None for debug images
        is_debug: True if this is a debug/intermediate image, False for extracted sprites
        metadata: Additional metadata (e.g., sprite index, background kind)
    """
    image: np.ndarray
    name: str
    bbox: Rect | None
    is_debug: bool
    metadata: dict[str, float | int | str] | None = None


def extract_sprites(
    image: np.ndarray | None,
    *,
    threshold: float = 10,
    ignore_nested: bool = False,
    min_area: int = 64,
    feather: float = 0.0,
    debug: bool = False
) -> Generator[ProcessedImage, None, None]:
    """
    Detect the sprite islands of an image and yield them as cropped images.

    Args:
        image: Input image as numpy array in RGB or RGBA format (uint8).
               RGB images get a fully opaque alpha channel.
        threshold: Color distance threshold used when the background is a solid color.
        ignore_nested: If True, drop sprites whose rectangle lies inside a larger one.
        min_area: Minimum sprite size in pixels.
        feather: Alpha feathering radius applied to each cropped sprite. 0 disables.
        debug: If True, yield intermediate images for debugging first.

    Yields:
        ProcessedImage objects. Debug images (if enabled) come first, followed
        by the sprites in reading order.

    Raises:
        ValueError: If image is None or has invalid shape/dtype.

    Example:
        >>> from sprite_islands import extract_sprites, load_image, save_image
        >>>
        >>> img = load_image("spritesheet.png")
        >>> for result in extract_sprites(img, ignore_nested=True):
        >>>     if not result.is_debug:
        >>>         save_image(f"{result.name}.png", result.image)
    """
    img = ensure_rgba(image)

    rects = detect_islands(img, threshold=threshold, ignore_nested=ignore_nested, min_area=min_area)

    if debug:
        background = infer_background(img)
        mask = sprite_mask(img, background, threshold).astype(np.uint8) * 255
        yield ProcessedImage(
            image=cv2.cvtColor(mask, cv2.COLOR_GRAY2RGBA),
            name="debug_sprite_mask",
            bbox=None,
            is_debug=True,
            metadata={"background": background.kind.value}
        )

        segmented = img.copy()
        for rect in rects:
            cv2.rectangle(segmented, (rect.x, rect.y), (rect.right - 1, rect.bottom - 1),
                          (0, 255, 0, 255), 1)
        yield ProcessedImage(
            image=segmented,
            name="debug_segmented",
            bbox=None,
            is_debug=True,
            metadata={"num_sprites": len(rects)}
        )

    for i, rect in enumerate(rects):
        sprite = crop_region(img, rect)
        if feather > 0:
            feather_alpha(sprite, feather)

        yield ProcessedImage(
            image=sprite,
            name=f"sprite_{i}",
            bbox=rect,
            is_debug=False,
            metadata={
                "sprite_index": i,
                "x": rect.x,
                "y": rect.y,
                "width": rect.width,
                "height": rect.height
            }
        )
