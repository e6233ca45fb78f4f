"""
Reading and writing images as RGBA pixel buffers.

OpenCV works in BGR(A) order; everything returned from here is RGBA.
"""

from pathlib import Path

import cv2
import numpy as np

from sprite_islands.pixel_buffer import validate_rgba


def _to_rgba(img: np.ndarray) -> np.ndarray:
    if img.ndim == 2:
        return cv2.cvtColor(img, cv2.COLOR_GRAY2RGBA)
    if img.shape[2] == 3:
        return cv2.cvtColor(img, cv2.COLOR_BGR2RGBA)
    return cv2.cvtColor(img, cv2.COLOR_BGRA2RGBA)


def load_image(path: str | Path) -> np.ndarray:
    """
    Load an image file as an RGBA pixel buffer.

    Raises:
        ValueError: If the file can't be read as an image.
    """
    img = cv2.imread(str(path), cv2.IMREAD_UNCHANGED)
    if img is None:
        raise ValueError(f"Could not load image from {path}")
    # 16-bit PNGs
    if img.dtype == np.uint16:
        img = (img >> 8).astype(np.uint8)
    return _to_rgba(img)


def save_image(path: str | Path, image: np.ndarray) -> None:
    """
    Write an RGBA pixel buffer to an image file. The format follows the file extension.

    Raises:
        ValueError: If the image is not RGBA or OpenCV fails to write it.
    """
    validate_rgba(image)
    if not cv2.imwrite(str(path), cv2.cvtColor(image, cv2.COLOR_RGBA2BGRA)):
        raise ValueError(f"Could not write image to {path}")


def decode_image(data: bytes) -> np.ndarray:
    """
    Decode encoded image bytes (PNG, etc.) into an RGBA pixel buffer.
    """
    img = cv2.imdecode(np.frombuffer(data, dtype=np.uint8), cv2.IMREAD_UNCHANGED)
    if img is None:
        raise ValueError("Could not decode image data")
    return _to_rgba(img)


def encode_image(image: np.ndarray, ext: str = ".png") -> bytes:
    validate_rgba(image)
    ok, buf = cv2.imencode(ext, cv2.cvtColor(image, cv2.COLOR_RGBA2BGRA))
    if not ok:
        raise ValueError(f"Could not encode image as {ext}")
    return buf.tobytes()
