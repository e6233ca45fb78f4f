#!/usr/bin/env python3
"""
Sprite Island Extractor - Command Line Interface

Finds the individual sprites ("islands") of a sprite sheet and saves them as
separate images or a repacked spritesheet. The background is detected
automatically: either transparency or the dominant solid color of the image
border.

Also exposes the pixel editing tools: magic wand background removal and
alpha edge feathering.
"""

import sys
from pathlib import Path

import click

from sprite_islands.alpha_processing import feather_alpha
from sprite_islands.api import extract_sprites
from sprite_islands.image_io import load_image, save_image
from sprite_islands.magic_wand import flood_fill
from sprite_islands.sprite_save import save_sprites


def _load_or_exit(input_path: str):
    try:
        img = load_image(input_path)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    click.echo(f"Loaded image with shape {img.shape}")
    return img


@click.group(context_settings=dict(show_default=True))
def main() -> None:
    """Extract sprite islands from images and clean up their backgrounds."""


@main.command()
@click.argument('input_path', type=click.Path(exists=True))
@click.argument('output_path', type=click.Path())
@click.option('--threshold', '-t', type=float, default=10,
              help='Color distance threshold for solid color backgrounds')
@click.option('--ignore-nested', '-n', is_flag=True,
              help='Drop sprites that lie fully inside a larger sprite')
@click.option('--min-area', '-m', type=int, default=64, help='Minimum sprite size in pixels')
@click.option('--feather', '-f', type=float, default=0.0,
              help='Feather radius applied to the alpha of each sprite')
@click.option('--spritesheet', '-s', is_flag=True,
              help='Create a single spritesheet instead of individual files')
@click.option('--debug', '-d', is_flag=True, help='Save intermediate images for debugging')
def extract(input_path: str, output_path: str, threshold: float, ignore_nested: bool,
            min_area: int, feather: float, spritesheet: bool, debug: bool) -> None:
    """Detect the sprites of INPUT_PATH and save them next to OUTPUT_PATH.

    Sprites are numbered in reading order: top-to-bottom, then left-to-right.
    """
    img = _load_or_exit(input_path)

    debug_dir = None
    if debug:
        debug_dir = Path("debug")
        debug_dir.mkdir(exist_ok=True)
        click.echo("Debug mode enabled, saving intermediate images to 'debug' directory")

    sprites = []
    num_debug_images = 0
    try:
        for result in extract_sprites(img, threshold=threshold, ignore_nested=ignore_nested,
                                      min_area=min_area, feather=feather, debug=debug):
            if result.is_debug:
                if debug_dir:
                    save_image(debug_dir / f"{result.name}.png", result.image)
                    num_debug_images += 1
            else:
                sprites.append(result.image)
    except ValueError as e:
        click.echo(f"Error processing image: {e}", err=True)
        sys.exit(1)

    click.echo(f"Detected {len(sprites)} sprite(s)")
    if debug:
        click.echo(f"Saved {num_debug_images} debug image(s) to {debug_dir}")

    written = save_sprites(sprites, output_path, create_sheet=spritesheet)

    if not written:
        click.echo("No sprites found, nothing saved")
    elif spritesheet:
        click.echo(f"Spritesheet saved to {written[0]}")
    else:
        click.echo(f"Sprites saved to {Path(output_path).parent}")


@main.command()
@click.argument('input_path', type=click.Path(exists=True))
@click.argument('output_path', type=click.Path())
@click.option('--seed', '-p', type=(int, int), multiple=True, required=True,
              help='X Y of a pixel to erase from, can be given several times')
@click.option('--tolerance', '-t', type=float, default=20, help='Color tolerance in percent (0-100)')
@click.option('--contiguous/--global', default=True,
              help='Erase only the region connected to the seed, or every matching pixel')
def wand(input_path: str, output_path: str, seed: tuple[tuple[int, int], ...],
         tolerance: float, contiguous: bool) -> None:
    """Erase the background of INPUT_PATH with the magic wand and save to OUTPUT_PATH.

    Each seed picks the color under it and makes matching pixels transparent.
    Seeds are applied in order.
    """
    img = _load_or_exit(input_path)

    for x, y in seed:
        erased = flood_fill(img, x, y, tolerance=tolerance, contiguous=contiguous)
        click.echo(f"Seed ({x}, {y}): erased {erased} pixel(s)")

    Path(output_path).parent.mkdir(parents=True, exist_ok=True)
    save_image(output_path, img)
    click.echo(f"Image saved to {output_path}")


@main.command()
@click.argument('input_path', type=click.Path(exists=True))
@click.argument('output_path', type=click.Path())
@click.option('--amount', '-a', type=float, default=1.0, help='Feather radius in pixels')
def feather(input_path: str, output_path: str, amount: float) -> None:
    """Soften the alpha edges of INPUT_PATH and save to OUTPUT_PATH.

    Feathering only erodes opaque areas, it never makes transparent pixels visible.
    """
    img = _load_or_exit(input_path)
    feather_alpha(img, amount)

    Path(output_path).parent.mkdir(parents=True, exist_ok=True)
    save_image(output_path, img)
    click.echo(f"Image saved to {output_path}")


if __name__ == "__main__":
    main()
