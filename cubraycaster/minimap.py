"""The overhead map drawn in the corner of the screen."""

from __future__ import annotations

from .grid import Grid
from .image import Image

__all__ = ["minimap_color", "draw_minimap", "MINIMAP_TILE"]

MINIMAP_TILE = 20
_DEFAULT = 0xFEFEFE
_COLORS = {
    "1": 0x000000,
    "B": 0xFFFF00,
    "D": 0x00FFFF,
    "d": 0xFF00FF,
    "C": 0x00FF00,
    "N": 0x0000FF,
    "S": 0x0000FF,
    "E": 0x0000FF,
    "W": 0x0000FF,
}


def minimap_color(char: str) -> int:
    """Return the 0xRRGGBB colour the minimap uses for a map character."""
    return _COLORS.get(char, _DEFAULT)


def draw_minimap(frame: Image, grid: Grid) -> None:
    """Paint each map tile as a square at the top left of ``frame``."""
    for tile in grid.tiles():
        color = minimap_color(tile.char)
        left = tile.x * MINIMAP_TILE
        top = tile.y * MINIMAP_TILE
        for y in range(top, top + MINIMAP_TILE):
            for x in range(left, left + MINIMAP_TILE):
                frame.put_pixel(x, y, color)