"""
Functions for processing alpha channels in images.
"""

import math

import cv2
import numpy as np

from sprite_islands.pixel_buffer import validate_rgba


def feather_alpha(image: np.ndarray, amount: float) -> np.ndarray:
    """
    Soften sprite edges by box blurring the alpha channel.

    The blur is separable: a horizontal pass over the original alpha, then a
    vertical pass over the horizontal result, both with edge-clamped samples.
    The blurred alpha is only written where the pixel was visible to begin
    with, and never above its original value, so opaque areas can shrink but
    never grow. RGB is left untouched.

    Args:
        image: RGBA pixel buffer, modified in place
        amount: Blur radius in pixels (fractions are floored). <= 0 does nothing.

    Returns:
        The same image array
    """
    validate_rgba(image)
    if amount <= 0 or image.size == 0:
        return image

    radius = int(math.floor(amount))
    ksize = 2 * radius + 1

    original = image[:, :, 3].copy()
    horizontal = cv2.blur(original.astype(np.float32), (ksize, 1), borderType=cv2.BORDER_REPLICATE)
    blurred = cv2.blur(horizontal, (1, ksize), borderType=cv2.BORDER_REPLICATE)

    feathered = np.rint(np.minimum(original.astype(np.float32), blurred))
    visible = original > 0
    image[:, :, 3][visible] = np.clip(feathered[visible], 0, 255).astype(np.uint8)
    return image
