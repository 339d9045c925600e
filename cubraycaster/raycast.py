"""Wall casting with a DDA walk over the linked tiles, plus floor and ceiling."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass, field, replace

from .grid import Tile
from .image import Image
from .player import Player

__all__ = [
    "Ray",
    "cast_ray",
    "line_height",
    "draw_textured_column",
    "render_walls",
    "DOOR_SCALE",
]

DOOR_SCALE = 0.6
_RGB = 0x00FFFFFF
_SOLID = frozenset("1D")


def _cdiv(a: int, b: int) -> int:
    """Integer division truncating toward zero."""
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b > 0) else -q


def _cmod(a: int, b: int) -> int:
    """Remainder carrying the sign of the dividend."""
    return a - b * _cdiv(a, b)


def _inv_abs(value: float) -> float:
    return math.inf if value == 0 else abs(1.0 / value)


@dataclass
class Ray:
    """State of one screen column's ray and the wall slice it produced."""

    x: int
    camerax: float = 0.0
    raydirx: float = 0.0
    raydiry: float = 0.0
    mapx: int = 0
    mapy: int = 0
    deltadistx: float = 0.0
    deltadisty: float = 0.0
    stepx: int = 0
    stepy: int = 0
    sidedistx: float = 0.0
    sidedisty: float = 0.0
    side: int = 0
    hit: bool = False
    tile: Tile | None = field(default=None, repr=False)
    perpwalldist: float = 0.0
    lineheight: int = 0
    drawstart: int = 0
    drawend: int = 0
    tex_x: float = 0.0
    passed_doors: list[Ray] = field(default_factory=list, repr=False)


def cast_ray(player: Player, x: int, width: int) -> Ray:
    """Walk the ray of screen column ``x`` until it hits a wall or closed door.

    Open doors (``d``) crossed on the way are recorded in ``passed_doors``
    as snapshots of the ray at that point.
    """
    camerax = 2 * x / float(width) - 1
    ray = Ray(
        x=x,
        camerax=camerax,
        raydirx=player.dx + player.planex * camerax,
        raydiry=player.dy + player.planey * camerax,
        mapx=int(player.x),
        mapy=int(player.y),
    )
    ray.deltadistx = _inv_abs(ray.raydirx)
    ray.deltadisty = _inv_abs(ray.raydiry)
    if ray.raydirx < 0:
        ray.stepx = -1
        ray.sidedistx = (player.x - ray.mapx) * ray.deltadistx
    else:
        ray.stepx = 1
        ray.sidedistx = (ray.mapx + 1.0 - player.x) * ray.deltadistx
    if ray.raydiry < 0:
        ray.stepy = -1
        ray.sidedisty = (player.y - ray.mapy) * ray.deltadisty
    else:
        ray.stepy = 1
        ray.sidedisty = (ray.mapy + 1.0 - player.y) * ray.deltadisty

    tile: Tile | None = player.tile
    seen: set[int] = set()
    while tile is not None:
        if ray.sidedistx < ray.sidedisty:
            ray.sidedistx += ray.deltadistx
            tile = tile.right if ray.stepx > 0 else tile.left
            ray.side = 0
        else:
            ray.sidedisty += ray.deltadisty
            tile = tile.down if ray.stepy > 0 else tile.up
            ray.side = 1
        if tile is None or id(tile) in seen:
            tile = None
            break
        seen.add(id(tile))
        if tile.char in _SOLID:
            ray.hit = True
            break
        if tile.char == "d":
            ray.passed_doors.append(replace(ray, tile=tile, passed_doors=[]))
    ray.tile = tile
    return ray


def line_height(ray: Ray, player: Player, height: int) -> None:
    """Fill in the ray's wall distance, slice height, span and texture column."""
    if ray.side == 0:
        ray.perpwalldist = ray.sidedistx - ray.deltadistx
    else:
        ray.perpwalldist = ray.sidedisty - ray.deltadisty
    corrected = max(ray.perpwalldist, 1.0)
    ray.lineheight = int(height / corrected)
    ray.drawstart = max(0, -(ray.lineheight // 2) + height // 2)
    ray.drawend = min(height - 1, ray.lineheight // 2 + height // 2)
    if ray.side == 0:
        hit = player.y + ray.perpwalldist * ray.raydiry
    else:
        hit = player.x + ray.perpwalldist * ray.raydirx
    ray.tex_x = hit - math.floor(hit)


def draw_textured_column(
    frame: Image, texture: Image, ray: Ray, x: int, scale: float
) -> None:
    """Draw the ray's wall slice, scaled by ``scale``, into column ``x``.

    Texture pixels whose RGB part is black are skipped.
    """
    col = int(ray.tex_x * texture.width)
    if col < 0:
        return
    if (ray.side == 0 and ray.raydirx > 0) or (ray.side == 1 and ray.raydiry < 0):
        col = texture.width - col - 1
    scaled = int(ray.lineheight * scale)
    if scaled <= 0:
        return
    step = texture.height / scaled
    half = frame.height // 2
    tex_pos = (half - scaled // 2 - half + ray.lineheight // 2) * step
    start = half - scaled // 2
    for y in range(start, start + scaled):
        tex_y = int(tex_pos) & (texture.width - 1)
        tex_pos += step
        color = texture.get_pixel(col, tex_y)
        if color & _RGB:
            frame.put_pixel(x, y, color)


def _wall_side(ray: Ray) -> int:
    if ray.side == 0:
        return 3 if ray.raydirx > 0 else 2
    return 1 if ray.raydiry > 0 else 0


def _floor_point(ray: Ray, tile: Tile) -> tuple[float, float]:
    if ray.side == 0 and ray.raydirx > 0:
        return float(tile.x), tile.y + ray.tex_x
    if ray.side == 0 and ray.raydirx < 0:
        return tile.x + 1.0, tile.y + ray.tex_x
    if ray.side == 1 and ray.raydiry > 0:
        return tile.x + ray.tex_x, float(tile.y)
    return tile.x + ray.tex_x, tile.y + 1.0


def _draw_floor_ceiling(
    frame: Image, ray: Ray, player: Player, floor_tex: Image, ceiling_tex: Image
) -> None:
    height = frame.height
    size = floor_tex.width
    floor_x, floor_y = _floor_point(ray, ray.tile)
    for y in range(ray.drawend + 1, height):
        denom = 2.0 * y - height
        if denom == 0 or ray.perpwalldist == 0:
            continue
        weight = (height / denom) / ray.perpwalldist
        cur_x = weight * floor_x + (1.0 - weight) * player.x
        cur_y = weight * floor_y + (1.0 - weight) * player.y
        if not (math.isfinite(cur_x) and math.isfinite(cur_y)):
            continue
        tex_x = _cmod(int(cur_x * size), size)
        tex_y = _cmod(int(cur_y * size), size)
        frame.put_pixel(ray.x, y, floor_tex.get_pixel(tex_x, tex_y))
        frame.put_pixel(ray.x, height - y, ceiling_tex.get_pixel(tex_x, tex_y))


def render_walls(
    frame: Image,
    player: Player,
    walls: Sequence[Image],
    floor_tex: Image,
    ceiling_tex: Image,
    open_progress: float,
) -> list[float]:
    """Draw walls, doors, floor and ceiling; return the per-column wall distance.

    ``walls`` holds the north, south, west and east textures.
    """
    width, height = frame.width, frame.height
    zbuffer: list[float] = []
    side_index = 0
    for x in range(width):
        ray = cast_ray(player, x, width)
        for door in ray.passed_doors:
            line_height(door, player, height)
            if open_progress > 0.0:
                draw_textured_column(frame, walls[2], door, x, DOOR_SCALE)
        line_height(ray, player, height)
        zbuffer.append(ray.perpwalldist)
        tile = ray.tile
        if tile is None:
            continue
        if tile.char == "1":
            side_index = _wall_side(ray)
            draw_textured_column(frame, walls[side_index], ray, x, 1.0)
        if tile.char == "D" and open_progress < 1.0:
            ray.perpwalldist = max(0.0, ray.perpwalldist - open_progress)
            draw_textured_column(frame, walls[side_index], ray, x, DOOR_SCALE)
        _draw_floor_ceiling(frame, ray, player, floor_tex, ceiling_tex)
    return zbuffer