"""Billboard sprites in the 3D view and flat overlays on the screen."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from .grid import Tile
from .image import Image
from .player import Player

__all__ = ["Sprite", "draw_overlay", "render_sprite", "OVERLAY_RIGHT", "OVERLAY_BOTTOM"]

OVERLAY_RIGHT = 500
OVERLAY_BOTTOM = 70
_RGB = 0x00FFFFFF


def _cdiv(a: int, b: int) -> int:
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b > 0) else -q


@dataclass(eq=False)
class Sprite:
    """An object standing on a map tile, drawn as a billboard.

    ``scale`` divides the on-screen size. The projection fields are
    updated on every render; ``vertical_shift`` uses the height of the
    previous render.
    """

    tile: Tile
    image: Image = field(repr=False)
    scale: int = 1
    status: int = 0
    x: float = 0.0
    y: float = 0.0
    h: int = 0
    w: int = 0
    screen_x: int = 0
    vertical_shift: int = 0
    draw_startx: int = 0
    draw_endx: int = 0
    draw_starty: int = 0
    draw_endy: int = 0

    def __post_init__(self) -> None:
        if self.scale <= 0:
            raise ValueError(f"sprite scale must be positive, got {self.scale}")


def draw_overlay(frame: Image, image: Image) -> None:
    """Draw ``image`` near the bottom right of ``frame``, skipping black pixels."""
    x_offset = frame.width - image.width - OVERLAY_RIGHT
    y_offset = frame.height - image.height - OVERLAY_BOTTOM
    for y in range(image.height):
        for x in range(image.width):
            color = image.get_pixel(x, y)
            if color & _RGB:
                frame.put_pixel(x + x_offset, y + y_offset, color)


def _draw_columns(
    frame: Image, sprite: Sprite, zbuffer: Sequence[float], transy: float
) -> None:
    img = sprite.image
    if sprite.w == 0 or sprite.h == 0:
        return
    left = -(sprite.w // 2) + sprite.screen_x
    for stripe in range(sprite.draw_startx, sprite.draw_endx):
        tex_x = _cdiv(_cdiv(256 * (stripe - left) * img.width, sprite.w), 256)
        if not (
            transy > 0
            and 0 < stripe < frame.width
            and stripe < len(zbuffer)
            and transy < zbuffer[stripe]
        ):
            continue
        for y in range(sprite.draw_starty, sprite.draw_endy):
            d = (y - sprite.vertical_shift) * 256 - frame.height * 128 + sprite.h * 128
            tex_y = _cdiv(_cdiv(d * img.height, sprite.h), 256)
            color = img.get_pixel(tex_x, tex_y)
            if color & _RGB:
                frame.put_pixel(stripe, y, color)


def render_sprite(
    frame: Image, sprite: Sprite, player: Player, zbuffer: Sequence[float]
) -> None:
    """Project ``sprite`` into the view and draw the columns not hidden by walls."""
    sprite.x = (sprite.tile.x + 0.5) - player.x
    sprite.y = (sprite.tile.y + 0.5) - player.y
    det = player.planex * player.dy - player.dx * player.planey
    if det == 0:
        return
    invdet = 1.0 / det
    transx = invdet * (player.dy * sprite.x - player.dx * sprite.y)
    transy = invdet * (-player.planey * sprite.x + player.planex * sprite.y)
    if transy == 0:
        return
    width, height = frame.width, frame.height
    sprite.vertical_shift = sprite.h // 2
    sprite.screen_x = int((width // 2) * (1 + transx / transy))
    size = abs(int(height / transy)) // sprite.scale
    sprite.h = size
    sprite.draw_starty = max(0, -(size // 2) + height // 2 + sprite.vertical_shift)
    sprite.draw_endy = min(height - 1, size // 2 + height // 2 + sprite.vertical_shift)
    sprite.w = size
    sprite.draw_startx = max(0, -(size // 2) + sprite.screen_x)
    sprite.draw_endx = min(width - 1, size // 2 + sprite.screen_x)
    _draw_columns(frame, sprite, zbuffer, transy)