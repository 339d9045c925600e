"""The player: position, view direction, walking and turning."""

from __future__ import annotations

import math
from collections.abc import Container
from dataclasses import dataclass

from .grid import Tile

__all__ = [
    "Player",
    "is_blocking",
    "apply_movement",
    "mouse_rotation",
    "TURN_ANGLE",
    "MOUSE_ROT_SPEED",
]

TURN_ANGLE = 0.05
MOUSE_ROT_SPEED = 0.006
_BLOCKING = frozenset("1BDC")


def is_blocking(char: str) -> bool:
    """Return True for tiles the player cannot walk into."""
    return char in _BLOCKING


def _blocks(tile: Tile | None) -> bool:
    return tile is not None and is_blocking(tile.char)


def _find_from(start: Tile, x: int, y: int) -> Tile | None:
    tile: Tile | None = start
    seen: set[int] = set()
    while tile is not None:
        if tile.x == x and tile.y == y:
            return tile
        if id(tile) in seen:
            return None
        seen.add(id(tile))
        if x > tile.x:
            tile = tile.right
        elif x < tile.x:
            tile = tile.left
        elif y > tile.y:
            tile = tile.down
        else:
            tile = tile.up
    return None


@dataclass(eq=False)
class Player:
    """Player state; ``tile`` is the map tile the player stands on."""

    tile: Tile
    x: float
    y: float
    dx: float = 0.0
    dy: float = 0.0
    planex: float = 0.0
    planey: float = 0.0
    ms: float = 0.2

    def rotate(self, angle: float) -> None:
        """Turn the view direction and camera plane by ``angle`` radians."""
        cos_a, sin_a = math.cos(angle), math.sin(angle)
        old_dx, old_planex = self.dx, self.planex
        self.dx = self.dx * cos_a - self.dy * sin_a
        self.dy = old_dx * sin_a + self.dy * cos_a
        self.planex = self.planex * cos_a - self.planey * sin_a
        self.planey = old_planex * sin_a + self.planey * cos_a

    def _walk(self, dirx: float, diry: float) -> None:
        h = self.tile
        old_x, old_y = self.x, self.y
        new_x = old_x + dirx * self.ms
        if dirx > 0 and _blocks(h.right) and new_x >= h.x + 1:
            new_x = old_x
        elif dirx < 0 and _blocks(h.left) and new_x <= h.x:
            new_x = old_x
        new_y = old_y + diry * self.ms
        if diry > 0 and _blocks(h.down) and new_y >= h.y + 1:
            new_y = old_y
        elif diry < 0 and _blocks(h.up) and new_y <= h.y:
            new_y = old_y
        if _blocks(_find_from(h, int(new_x), int(new_y))):
            return
        self.x, self.y = new_x, new_y

    def _neighbour_towards(self, tx: int, ty: int) -> Tile | None:
        h = self.tile
        if ty == h.y:
            if tx < h.x:
                return h.left
            if tx > h.x:
                return h.right
            return None
        vertical = h.up if ty < h.y else h.down
        if tx == h.x or vertical is None:
            return vertical
        return vertical.left if tx < h.x else vertical.right

    def move(self, dirx: float, diry: float) -> None:
        """Walk one step along (dirx, diry), stopping at blocking tiles.

        When the step crosses into another tile, the player's map mark is
        carried over to it, except onto an open door.
        """
        self._walk(dirx, diry)
        tx, ty = int(self.x), int(self.y)
        if tx == self.tile.x and ty == self.tile.y:
            return
        target = self._neighbour_towards(tx, ty)
        if target is None or is_blocking(target.char):
            return
        if target.char != "d":
            self.tile.char, target.char = target.char, self.tile.char
        self.tile = target


def apply_movement(player: Player, keys: Container[str]) -> None:
    """Move and turn the player for the held keys.

    ``z``/``s`` walk forward/back, ``q``/``d`` strafe left/right and
    ``left``/``right`` turn.
    """
    if "z" in keys:
        player.move(player.dx, player.dy)
    elif "s" in keys:
        player.move(-player.dx, -player.dy)
    if "q" in keys:
        player.move(-player.planex, -player.planey)
    elif "d" in keys:
        player.move(player.planex, player.planey)
    if "left" in keys:
        player.rotate(-TURN_ANGLE)
    elif "right" in keys:
        player.rotate(TURN_ANGLE)


def mouse_rotation(player: Player, x: int, y: int, width: int, height: int) -> bool:
    """Turn the player for a pointer at (x, y) in a width x height window.

    Returns True when the player turned and the pointer should be moved
    back to the window centre.
    """
    centre_x, centre_y = width // 2, height // 2
    if x == centre_x or y == centre_y:
        return False
    mouse_x = (x - centre_x) / width * 20.0
    angle = mouse_x * MOUSE_ROT_SPEED
    if x < mouse_x:
        angle = -angle
    player.rotate(angle)
    return True