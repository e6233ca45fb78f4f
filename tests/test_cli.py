"""
Tests for the command line interface.
"""

import numpy as np
from click.testing import CliRunner

from sprite_islands.image_io import load_image, save_image
from sprite_islands.main import main


def _write_sheet(path) -> np.ndarray:
    img = np.zeros((48, 64, 4), dtype=np.uint8)
    img[4:20, 4:20] = (255, 0, 0, 255)
    img[4:20, 40:60] = (0, 0, 255, 255)
    img[28:44, 10:30] = (0, 255, 0, 255)
    save_image(path, img)
    return img


def test_extract_individual_sprites(tmp_path):
    """Each detected sprite is written to its own file."""
    src = tmp_path / "sheet.png"
    img = _write_sheet(src)

    result = CliRunner().invoke(main, ["extract", str(src), str(tmp_path / "out" / "hero.png")])

    assert result.exit_code == 0, result.output
    assert "Detected 3 sprite(s)" in result.output
    files = sorted(p.name for p in (tmp_path / "out").iterdir())
    assert files == ["hero_sprite_0.png", "hero_sprite_1.png", "hero_sprite_2.png"]
    assert np.array_equal(load_image(tmp_path / "out" / "hero_sprite_1.png"), img[4:20, 40:60])


def test_extract_spritesheet_and_debug(tmp_path, monkeypatch):
    """Spritesheet mode writes one sheet; debug mode writes intermediate images."""
    monkeypatch.chdir(tmp_path)
    _write_sheet(tmp_path / "sheet.png")

    result = CliRunner().invoke(main, ["extract", "sheet.png", "out/hero.png", "-s", "-d"])

    assert result.exit_code == 0, result.output
    assert [p.name for p in (tmp_path / "out").iterdir()] == ["hero_spritesheet.png"]
    sheet = load_image(tmp_path / "out" / "hero_spritesheet.png")
    # 2x2 grid of 20x16 cells with 2 pixel borders
    assert sheet.shape == (2 * 18 + 2, 2 * 22 + 2, 4)
    assert (tmp_path / "debug" / "debug_segmented.png").exists()
    assert (tmp_path / "debug" / "debug_sprite_mask.png").exists()


def test_extract_reports_unreadable_image(tmp_path):
    """A file that isn't an image fails with an error message."""
    bad = tmp_path / "bad.png"
    bad.write_text("not an image")

    result = CliRunner().invoke(main, ["extract", str(bad), str(tmp_path / "out.png")])

    assert result.exit_code == 1
    assert "Could not load image" in result.output


def test_wand_erases_background(tmp_path):
    """The magic wand removes the solid background around the sprite."""
    img = np.full((20, 20, 4), (250, 250, 250, 255), dtype=np.uint8)
    img[5:15, 5:15] = (10, 10, 10, 255)
    src = tmp_path / "in.png"
    save_image(src, img)
    dst = tmp_path / "out.png"

    result = CliRunner().invoke(main, ["wand", str(src), str(dst), "--seed", "0", "0"])

    assert result.exit_code == 0, result.output
    assert "erased 300 pixel(s)" in result.output
    out = load_image(dst)
    assert (out[5:15, 5:15, 3] == 255).all()
    assert out[0, 0, 3] == 0
    assert out[:, :, 3].sum() == 100 * 255


def test_wand_global_with_several_seeds(tmp_path):
    """Seeds are applied in order; global mode ignores adjacency."""
    img = np.full((10, 30, 4), (255, 255, 255, 255), dtype=np.uint8)
    img[2:8, 2:8] = (200, 0, 0, 255)
    img[2:8, 20:26] = (200, 0, 0, 255)
    src = tmp_path / "in.png"
    save_image(src, img)
    dst = tmp_path / "out.png"

    result = CliRunner().invoke(main, ["wand", str(src), str(dst), "-p", "3", "3", "-p", "0", "0",
                                       "--global", "-t", "5"])

    assert result.exit_code == 0, result.output
    assert (load_image(dst)[:, :, 3] == 0).all()


def test_wand_requires_seed(tmp_path):
    src = tmp_path / "in.png"
    save_image(src, np.zeros((4, 4, 4), dtype=np.uint8))

    result = CliRunner().invoke(main, ["wand", str(src), str(tmp_path / "out.png")])

    assert result.exit_code == 2


def test_feather_command(tmp_path):
    """Feathering softens edges without touching transparent pixels."""
    img = np.zeros((20, 20, 4), dtype=np.uint8)
    img[5:15, 5:15] = (255, 255, 255, 255)
    src = tmp_path / "in.png"
    save_image(src, img)
    dst = tmp_path / "out.png"

    result = CliRunner().invoke(main, ["feather", str(src), str(dst), "-a", "1"])

    assert result.exit_code == 0, result.output
    out = load_image(dst)
    assert out[5, 5, 3] == 113
    assert out[10, 10, 3] == 255
    assert out[4, 4, 3] == 0


def test_extract_without_sprites_reports_nothing_saved(tmp_path):
    """An empty sheet with --spritesheet writes no file and says so."""
    src = tmp_path / "empty.png"
    save_image(src, np.zeros((16, 16, 4), dtype=np.uint8))

    result = CliRunner().invoke(main, ["extract", str(src), str(tmp_path / "out" / "hero.png"), "-s"])

    assert result.exit_code == 0, result.output
    assert "Detected 0 sprite(s)" in result.output
    assert "nothing saved" in result.output
    assert "Spritesheet saved" not in result.output
    assert not (tmp_path / "out" / "hero_spritesheet.png").exists()
