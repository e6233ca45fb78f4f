"""
Functions for saving extracted sprites as individual images or as a spritesheet.
"""

from pathlib import Path

import numpy as np

from sprite_islands.image_io import save_image


def save_individual_sprites(sprites: list[np.ndarray], output_path: str) -> list[Path]:
    """
    Save each sprite as `<stem>_sprite_<i>.png` next to `output_path`.

    Returns:
        Paths of the written files
    """
    output_dir = Path(output_path).parent
    output_dir.mkdir(parents=True, exist_ok=True)
    stem = Path(output_path).stem

    written = []
    for i, sprite in enumerate(sprites):
        sprite_path = output_dir / f"{stem}_sprite_{i}.png"
        save_image(sprite_path, sprite)
        written.append(sprite_path)
    return written


def pack_spritesheet(sprites: list[np.ndarray], border_size: int = 2) -> np.ndarray:
    """
    Pack sprites into a roughly square grid of equal cells on a transparent canvas.

    Each sprite is centered in a cell as large as the largest sprite, with
    `border_size` transparent pixels between cells. Sprites fill the grid
    row by row in the given order.
    """
    if not sprites:
        return np.zeros((0, 0, 4), dtype=np.uint8)

    cell_w = max(sprite.shape[1] for sprite in sprites)
    cell_h = max(sprite.shape[0] for sprite in sprites)

    num_cols = int(np.ceil(np.sqrt(len(sprites))))
    num_rows = (len(sprites) + num_cols - 1) // num_cols

    sheet = np.zeros((num_rows * (cell_h + border_size) + border_size,
                      num_cols * (cell_w + border_size) + border_size, 4), dtype=np.uint8)

    for i, sprite in enumerate(sprites):
        row, col = divmod(i, num_cols)
        h, w = sprite.shape[:2]
        top = row * (cell_h + border_size) + border_size + (cell_h - h) // 2
        left = col * (cell_w + border_size) + border_size + (cell_w - w) // 2
        sheet[top:top + h, left:left + w] = sprite

    return sheet


def save_sprites(sprites: list[np.ndarray], output_path: str, create_sheet: bool = False,
                 border_size: int = 2) -> list[Path]:
    """
    Save sprites either as individual files or as a single `<stem>_spritesheet.png`.

    Args:
        sprites: RGBA sprite images
        output_path: Base path for output
        create_sheet: If True, create a spritesheet instead of individual files
        border_size: Transparent gap between spritesheet cells

    Returns:
        Paths of the written files
    """
    if not create_sheet:
        return save_individual_sprites(sprites, output_path)

    if not sprites:
        return []

    output_dir = Path(output_path).parent
    output_dir.mkdir(parents=True, exist_ok=True)
    sheet_path = output_dir / f"{Path(output_path).stem}_spritesheet.png"
    save_image(sheet_path, pack_spritesheet(sprites, border_size))
    return [sheet_path]
