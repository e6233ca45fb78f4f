"""
Pixel buffer types shared by the segmentation and editing functions.

A pixel buffer is a numpy array of shape (height, width, 4), dtype uint8,
with channels in R, G, B, A order. Being row-major, its raw bytes are the
plain width*height*4 RGBA layout.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np


class InvalidDimensionsError(ValueError):
    """Raised when a geometry (buffer size or rectangle) is unusable."""


@dataclass(frozen=True)
class Color:
    """
    A single RGBA color, used both for sampled pixels and target colors.
    """
    r: int
    g: int
    b: int
    a: int = 255

    @classmethod
    def at(cls, image: np.ndarray, x: int, y: int) -> Color:
        r, g, b, a = (int(v) for v in image[y, x])
        return cls(r, g, b, a)

    @property
    def rgb(self) -> tuple[int, int, int]:
        return (self.r, self.g, self.b)


@dataclass(frozen=True)
class Rect:
    """
    Axis-aligned bounding rectangle of a detected sprite.

    Attributes:
        x: Left column (inclusive)
        y: Top row (inclusive)
        width: Number of columns, >= 1
        height: Number of rows, >= 1
    """
    x: int
    y: int
    width: int
    height: int

    @property
    def area(self) -> int:
        return self.width * self.height

    @property
    def right(self) -> int:
        """Column just past the right edge."""
        return self.x + self.width

    @property
    def bottom(self) -> int:
        """Row just past the bottom edge."""
        return self.y + self.height

    def contains(self, other: Rect) -> bool:
        """True if `other` lies fully inside this rect. Shared edges count as inside."""
        return (other.x >= self.x and other.y >= self.y and
                other.right <= self.right and other.bottom <= self.bottom)

    def as_bbox(self) -> tuple[int, int, int, int]:
        """Return the rect as a (y1, y2, x1, x2) slice tuple."""
        return (self.y, self.bottom, self.x, self.right)


def validate_rgba(image: np.ndarray | None) -> None:
    """
    Check that `image` is an RGBA pixel buffer.

    Raises:
        ValueError: If image is None or has invalid type, shape or dtype.
    """
    if image is None:
        raise ValueError("image cannot be None")

    if not isinstance(image, np.ndarray):
        raise ValueError(f"image must be a numpy array, got {type(image)}")

    if image.ndim != 3:
        raise ValueError(f"image must be 3D array (height, width, channels), got shape {image.shape}")

    if image.shape[2] != 4:
        raise ValueError(f"image must have 4 (RGBA) channels, got {image.shape[2]}")

    if image.dtype != np.uint8:
        raise ValueError(f"image must be uint8, got {image.dtype}")


def ensure_rgba(image: np.ndarray | None) -> np.ndarray:
    """
    Return an RGBA copy of an RGB or RGBA image.

    RGB input gets a fully opaque alpha channel.

    Raises:
        ValueError: If image is None or not a 3 or 4 channel uint8 array.
    """
    if image is None:
        raise ValueError("image cannot be None")

    if not isinstance(image, np.ndarray):
        raise ValueError(f"image must be a numpy array, got {type(image)}")

    if image.ndim != 3:
        raise ValueError(f"image must be 3D array (height, width, channels), got shape {image.shape}")

    if image.shape[2] not in (3, 4):
        raise ValueError(f"image must have 3 (RGB) or 4 (RGBA) channels, got {image.shape[2]}")

    if image.dtype != np.uint8:
        raise ValueError(f"image must be uint8, got {image.dtype}")

    if image.shape[2] == 4:
        return image.copy()

    alpha = np.full(image.shape[:2] + (1,), 255, dtype=np.uint8)
    return np.concatenate([image, alpha], axis=2)


def from_bytes(width: int, height: int, data: bytes | bytearray) -> np.ndarray:
    """
    Build a pixel buffer from flat RGBA bytes.

    Raises:
        InvalidDimensionsError: If the size is negative or doesn't match the data length.
    """
    if width < 0 or height < 0:
        raise InvalidDimensionsError(f"invalid buffer size {width}x{height}")
    if len(data) != width * height * 4:
        raise InvalidDimensionsError(
            f"expected {width * height * 4} bytes for {width}x{height} RGBA, got {len(data)}")
    return np.frombuffer(bytes(data), dtype=np.uint8).reshape(height, width, 4).copy()


def to_bytes(image: np.ndarray) -> bytes:
    validate_rgba(image)
    return np.ascontiguousarray(image).tobytes()


def crop_region(image: np.ndarray, rect: Rect) -> np.ndarray:
    """
    Copy the pixels covered by `rect` out of `image`.

    Raises:
        InvalidDimensionsError: If the rect is empty or not fully inside the image.
    """
    validate_rgba(image)
    height, width = image.shape[:2]

    if rect.width <= 0 or rect.height <= 0:
        raise InvalidDimensionsError(f"rect must have positive size, got {rect.width}x{rect.height}")

    if rect.x < 0 or rect.y < 0 or rect.right > width or rect.bottom > height:
        raise InvalidDimensionsError(f"{rect} lies outside the {width}x{height} image")

    y1, y2, x1, x2 = rect.as_bbox()
    return image[y1:y2, x1:x2].copy()
