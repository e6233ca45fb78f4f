"""
Functions for segmenting sprites ("islands") in a sprite sheet.
"""

from __future__ import annotations

import cv2
import numpy as np

from sprite_islands.background import BackgroundModel, infer_background, sprite_mask
from sprite_islands.pixel_buffer import Rect, validate_rgba
from sprite_islands.region_order import sort_reading_order, suppress_nested

# Smallest accepted sprite side, in pixels
MIN_SIDE = 4


def find_islands(image: np.ndarray, background: BackgroundModel,
                 threshold: float = 10, min_area: int = 64) -> list[Rect]:
    """
    Find bounding rectangles of 8-connected sprite pixel groups.

    A component is dropped if it has fewer than `min_area` pixels, its
    bounding box is smaller than `min_area`, or either side is shorter than
    4 pixels.

    Args:
        image: RGBA pixel buffer
        background: Background model used by the sprite pixel classifier
        threshold: Color distance threshold for solid color backgrounds
        min_area: Minimum component size in pixels (negative values count as 0)

    Returns:
        List of Rects in discovery order, i.e. by the row-major position of
        each component's first pixel
    """
    validate_rgba(image)
    min_area = max(0, min_area)

    mask = sprite_mask(image, background, threshold)
    if mask.size == 0 or not mask.any():
        return []

    # Find connected components
    _num_labels, labels, stats, _centroids = cv2.connectedComponentsWithStats(
        mask.astype(np.uint8), connectivity=8)

    # Label 0 is the background; order the rest by their first pixel in scan order
    label_ids, first_index = np.unique(labels.ravel(), return_index=True)
    order = [int(label) for _, label in sorted(zip(first_index, label_ids)) if label != 0]

    rects: list[Rect] = []
    for i in order:
        pixel_count = stats[i, cv2.CC_STAT_AREA]
        x = int(stats[i, cv2.CC_STAT_LEFT])
        y = int(stats[i, cv2.CC_STAT_TOP])
        w = int(stats[i, cv2.CC_STAT_WIDTH])
        h = int(stats[i, cv2.CC_STAT_HEIGHT])

        if pixel_count < min_area or w * h < min_area:
            continue
        if w < MIN_SIDE or h < MIN_SIDE:
            continue

        rects.append(Rect(x, y, w, h))

    return rects


def detect_islands(image: np.ndarray, threshold: float = 10, ignore_nested: bool = False,
                   min_area: int = 64) -> list[Rect]:
    """
    Detect sprite regions in an image.

    Infers the background from the image border, segments the sprite pixels
    into connected islands, optionally drops islands nested inside larger
    ones, and returns them in reading order.

    Args:
        image: RGBA pixel buffer
        threshold: Color distance threshold for solid color backgrounds
        ignore_nested: If True, drop rects fully contained in a larger rect
        min_area: Minimum sprite size in pixels

    Returns:
        List of sprite Rects, top-to-bottom then left-to-right. Empty if nothing was found.

    Raises:
        ValueError: If image is not an RGBA uint8 array.
    """
    validate_rgba(image)

    background = infer_background(image)
    rects = find_islands(image, background, threshold=threshold, min_area=min_area)

    if ignore_nested and len(rects) > 1:
        rects = suppress_nested(rects)

    return sort_reading_order(rects)
