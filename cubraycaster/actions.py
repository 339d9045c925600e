"""Knife animation, the door, the access card and the interaction key."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from .grid import Tile
from .player import Player
from .sprites import Sprite

__all__ = [
    "Knife",
    "Door",
    "try_pick_card",
    "try_toggle_door",
    "handle_interaction",
    "KNIFE_FRAMES",
]

KNIFE_FRAMES = 37
_IDLE_FIRST = 5
_IDLE_COUNT = 3
_FRAME_DELAY = 2
_DOOR_SPEED = 2.0
_CARD_REACH = 2.0
_DOOR_MIN = 2.0
_DOOR_MAX = 3.0


def _cmod(a: int, b: int) -> int:
    return int(math.fmod(a, b))


def _distance(tile: Tile, player: Player) -> float:
    return math.hypot(tile.x + 0.5 - player.x, tile.y + 0.5 - player.y)


@dataclass
class Knife:
    """Frame state of the knife held in view."""

    animation: list[int] = field(default_factory=lambda: [0, 0])
    i: int = 0
    normal: bool = False
    lim: int = 0
    aspect: bool = False
    frame_delay: int = 0

    @property
    def frame(self) -> int:
        """The animation frame currently shown."""
        return self.animation[self.i]

    def advance(self, attacking: bool) -> int:
        """Move the animation on by one tick and return the frame to show.

        The full animation plays twice, then the knife idles over a few
        frames; attacking plays the full animation at double speed.
        """
        self.frame_delay += 1
        if self.frame_delay >= _FRAME_DELAY:
            self.frame_delay = 0
            current = self.animation[self.i]
            if not self.normal or self.aspect:
                current = (current + 1) % KNIFE_FRAMES
            else:
                current = _IDLE_FIRST + _cmod(current - _IDLE_FIRST + 1, _IDLE_COUNT)
            if attacking:
                self.aspect = True
                current = (current + 1) % KNIFE_FRAMES
            self.animation[self.i] = current
            if current % KNIFE_FRAMES == 0:
                self.lim += 1
            if self.lim == 2:
                self.normal = True
                self.lim -= 1
                self.aspect = False
        return self.animation[self.i]


@dataclass(eq=False)
class Door:
    """The sliding door; ``status`` 1 opens it, 0 closes it."""

    tile: Tile
    status: int = 0
    open_progress: float = 0.0

    def update(self, dt: float) -> None:
        """Advance the door by ``dt`` seconds and update its tile mark."""
        if self.status == 1 and self.open_progress < 1.0:
            self.open_progress += dt * _DOOR_SPEED
        if self.open_progress > 1.0:
            self.open_progress = 1.0
            self.tile.char = "d"
        if self.status == 0 and self.open_progress > 0.0:
            self.open_progress -= dt * _DOOR_SPEED
        if self.open_progress < 0.0:
            self.open_progress = 0.0
            self.tile.char = "D"


def try_pick_card(card: Sprite, player: Player) -> bool:
    """Pick up the card when the player is close; return True if picked."""
    if _distance(card.tile, player) < _CARD_REACH:
        card.status = 1
        card.tile.char = "0"
        return True
    return False


def try_toggle_door(door: Door, player: Player, status: int) -> bool:
    """Set the door status when the player stands at the right distance."""
    dist = _distance(door.tile, player)
    if _DOOR_MIN < dist < _DOOR_MAX:
        door.status = status
        return True
    return False


def handle_interaction(door: Door, card: Sprite, player: Player, pressed: bool) -> None:
    """Apply the interaction key: pick the card, then open or close the door."""
    if not pressed:
        return
    try_pick_card(card, player)
    if card.status == 1 and door.status == 0:
        try_toggle_door(door, player, 1)
    elif door.status == 1:
        try_toggle_door(door, player, 0)