"""The game state, its per-frame update and the command that runs it."""

from __future__ import annotations

import sys
from array import array
from collections.abc import Sequence

from .actions import Door, Knife, handle_interaction
from .cubfile import Scene, check_arguments, load_scene
from .grid import Grid, initial_direction, validate_closed
from .image import Image
from .minimap import draw_minimap
from .player import Player, apply_movement, mouse_rotation
from .raycast import render_walls
from .sprites import Sprite, draw_overlay, render_sprite
from .textures import TextureError, load_tiles, load_walls, read_texture_index

__all__ = ["Game", "main", "WINDOW_WIDTH", "WINDOW_HEIGHT", "TITLE"]

WINDOW_WIDTH = 1920
WINDOW_HEIGHT = 1080
TITLE = "Cub3D"
CARD_SCALE = 7
BOX_SCALE = 2
MOVE_SPEED = 0.2


class Game:
    """Everything needed to update and draw one frame of the game."""

    def __init__(
        self,
        scene: Scene,
        walls: Sequence[Image],
        tiles: Sequence[Sequence[Sequence[Image]]],
        width: int = WINDOW_WIDTH,
        height: int = WINDOW_HEIGHT,
    ) -> None:
        if len(walls) != 4:
            raise ValueError(f"four wall textures are needed, got {len(walls)}")
        self.scene = scene
        self.grid = Grid(scene.rows)
        validate_closed(self.grid)
        start = self.grid.player_tile
        if start is None or self.grid.card is None or self.grid.door is None:
            raise ValueError("map needs a player start, a card and a door")
        try:
            self.floor_tex = tiles[0][1][0]
            self.ceiling_tex = tiles[0][0][0]
            card_image = tiles[1][0][0]
            self.knife_frames = tiles[2]
            box_image = tiles[3][0][0] if self.grid.boxes else None
        except IndexError:
            raise ValueError("texture set lacks floor, card, knife or box images") from None

        self.walls = list(walls)
        self.tiles = tiles
        self.width = width
        self.height = height
        self.frame = Image(width, height)

        dx, dy, planex, planey = initial_direction(start.char)
        self.player = Player(
            tile=start, x=float(start.x), y=float(start.y),
            dx=dx, dy=dy, planex=planex, planey=planey,
        )
        self.card = Sprite(tile=self.grid.card, image=card_image, scale=CARD_SCALE)
        self.boxes = [
            Sprite(tile=tile, image=box_image, scale=BOX_SCALE)
            for tile in self.grid.boxes
        ]
        self.door = Door(tile=self.grid.door)
        self.knife = Knife()
        self.keys: set[str] = set()
        self.zbuffer: list[float] = []
        self.running = True
        self.exit_code = 0
        self._last_time: float | None = None

    def key_down(self, key: str) -> None:
        """Record a pressed key; ``escape`` ends the game successfully."""
        self.keys.add(key)
        if key == "escape":
            self.running = False
            self.exit_code = 0

    def key_up(self, key: str) -> None:
        """Record a released key."""
        self.keys.discard(key)

    def mouse_move(self, x: int, y: int) -> bool:
        """Turn the view for a pointer at (x, y).

        Returns True when the pointer should go back to the window centre.
        """
        return mouse_rotation(self.player, x, y, self.width, self.height)

    def step(self, now: float) -> Image:
        """Update the game to time ``now`` (seconds) and draw the frame."""
        dt = 0.0 if self._last_time is None else now - self._last_time
        self._last_time = now
        self.player.ms = MOVE_SPEED
        self.frame.clear()
        self.door.update(dt)
        self.zbuffer = render_walls(
            self.frame, self.player, self.walls,
            self.floor_tex, self.ceiling_tex, self.door.open_progress,
        )
        for box in self.boxes:
            render_sprite(self.frame, box, self.player, self.zbuffer)
        if not self.card.status:
            render_sprite(self.frame, self.card, self.player, self.zbuffer)
        shown = self.knife.advance("f" in self.keys)
        draw_overlay(self.frame, self.knife_frames[self.knife.i][shown])
        handle_interaction(self.door, self.card, self.player, "e" in self.keys)
        apply_movement(self.player, self.keys)
        if "m" in self.keys:
            draw_minimap(self.frame, self.grid)
        return self.frame


def _frame_bytes(frame: Image) -> bytes:
    data = array("I", ((pixel << 8) & 0xFFFFFFFF for pixel in frame.pixels))
    if sys.byteorder == "little":
        data.byteswap()
    return data.tobytes()


def _run(game: Game) -> int:
    import time

    import pygame

    pygame.init()
    try:
        screen = pygame.display.set_mode((game.width, game.height))
        pygame.display.set_caption(TITLE)
        size = (game.width, game.height)
        while game.running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    return 1
                if event.type == pygame.KEYDOWN:
                    game.key_down(pygame.key.name(event.key))
                elif event.type == pygame.KEYUP:
                    game.key_up(pygame.key.name(event.key))
                elif event.type == pygame.MOUSEMOTION:
                    if game.mouse_move(*event.pos):
                        pygame.mouse.set_pos(game.width // 2, game.height // 2)
            if not game.running:
                break
            frame = game.step(time.monotonic())
            surface = pygame.image.frombuffer(_frame_bytes(frame), size, "RGBX")
            screen.blit(surface, (0, 0))
            pygame.display.flip()
        return game.exit_code
    finally:
        pygame.quit()


def main(argv: Sequence[str] | None = None) -> int:
    """Load the scene named on the command line and play it."""
    args = list(sys.argv[1:] if argv is None else argv)
    try:
        path = check_arguments(args)
        scene = load_scene(path)
        grid = Grid(scene.rows)
        validate_closed(grid)
        print(grid.render(), end="")
        index = read_texture_index(args[-1])
        walls = load_walls(scene.wall_paths)
        tiles = load_tiles(index)
        game = Game(scene, walls, tiles)
    except (ValueError, TextureError, OSError) as exc:
        print(f"Error\n{exc}", file=sys.stderr)
        return 1
    return _run(game)


if __name__ == "__main__":
    sys.exit(main())