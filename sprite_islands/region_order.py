"""
Post-processing of detected sprite rectangles: nested region removal and
reading order.
"""

from __future__ import annotations

from functools import cmp_to_key

from sprite_islands.pixel_buffer import Rect

# Rects whose tops are at most this far apart are on the same row
ROW_BAND = 15


def suppress_nested(rects: list[Rect]) -> list[Rect]:
    """
    Drop rectangles fully contained in a larger one.

    Rects are visited largest area first and kept unless an already kept
    rect contains them. Identical rects count as contained, so duplicates
    collapse to one.

    Returns:
        Kept rects, ordered by area descending
    """
    kept: list[Rect] = []
    for inner in sorted(rects, key=lambda r: r.area, reverse=True):
        if not any(outer.contains(inner) for outer in kept):
            kept.append(inner)
    return kept


def _reading_order(a: Rect, b: Rect) -> int:
    row_diff = a.y - b.y
    if abs(row_diff) > ROW_BAND:
        return row_diff
    return a.x - b.x


def sort_reading_order(rects: list[Rect]) -> list[Rect]:
    """
    Sort rectangles top-to-bottom, then left-to-right.

    Two rects whose y differs by 15 pixels or less are on the same row and
    ordered by x; otherwise by y.
    """
    return sorted(rects, key=cmp_to_key(_reading_order))
