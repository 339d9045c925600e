"""The map as a grid of linked tiles, and the check that it is closed."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field

__all__ = [
    "MapError",
    "Tile",
    "Grid",
    "validate_closed",
    "initial_direction",
    "PLANE_SCALE",
]

PLANE_SCALE = 0.66
_PLAYER_CHARS = frozenset("NSEW")
_VALID_NEIGHBOURS = frozenset("01DBCNSEW")
_CHECKED = frozenset("0DCB")
_DIRECTIONS = {
    "E": (-1.0, 0.0),
    "W": (1.0, 0.0),
    "N": (0.0, -1.0),
    "S": (0.0, 1.0),
}


class MapError(ValueError):
    """Raised when a map is empty or not closed by walls."""


@dataclass(eq=False)
class Tile:
    """One map cell and its links to the neighbouring cells.

    ``right`` and ``left`` chain every tile of the map in reading order,
    so the last tile of a row links to the first tile of the next.
    """

    char: str
    x: int
    y: int
    right: Tile | None = field(default=None, repr=False)
    left: Tile | None = field(default=None, repr=False)
    up: Tile | None = field(default=None, repr=False)
    down: Tile | None = field(default=None, repr=False)


class Grid:
    """The tiles of a map, linked to their neighbours."""

    def __init__(self, rows: Sequence[str]) -> None:
        self.rows: tuple[str, ...] = tuple(rows)
        self.player_tile: Tile | None = None
        self.card: Tile | None = None
        self.door: Tile | None = None
        self.boxes: list[Tile] = []
        self._index: dict[tuple[int, int], Tile] = {}
        self._order: list[Tile] = []

        previous: Tile | None = None
        for y, row in enumerate(self.rows):
            for x, char in enumerate(row):
                tile = Tile(char, x, y)
                if previous is not None:
                    previous.right = tile
                    tile.left = previous
                above = self._index.get((x, y - 1))
                if above is not None:
                    tile.up = above
                    above.down = tile
                self._index[(x, y)] = tile
                self._order.append(tile)
                self._note(tile)
                previous = tile
        if not self._order:
            raise MapError("map has no tiles")
        self.head = self._order[0]
        self.head.left = self._order[-1]

    def _note(self, tile: Tile) -> None:
        if tile.char in _PLAYER_CHARS:
            self.player_tile = tile
        elif tile.char == "C":
            self.card = tile
        elif tile.char == "D":
            self.door = tile
        elif tile.char == "B":
            self.boxes.append(tile)

    @property
    def columns(self) -> tuple[int, ...]:
        """Width of each row."""
        return tuple(len(row) for row in self.rows)

    def at(self, x: int, y: int) -> Tile | None:
        """Return the tile at (x, y), or None when there is none."""
        return self._index.get((x, y))

    def tiles(self) -> Iterator[Tile]:
        """Yield every tile in reading order."""
        yield from self._order

    def render(self) -> str:
        """Return the current map characters, one row per line."""
        lines: list[str] = []
        row: list[str] = []
        current_y = 0
        for tile in self._order:
            while tile.y != current_y:
                lines.append("".join(row))
                row = []
                current_y += 1
            row.append(tile.char)
        lines.append("".join(row))
        lines.extend("" for _ in range(len(self.rows) - len(lines)))
        return "".join(line + "\n" for line in lines)


def _invalid(char: str) -> bool:
    return char not in _VALID_NEIGHBOURS


def _is_open(tile: Tile) -> bool:
    up, down, left, right = tile.up, tile.down, tile.left, tile.right
    return bool(
        (up is not None and _invalid(up.char))
        or (down is not None and _invalid(down.char))
        or (left is not None and _invalid(left.char))
        or (right is not None and tile.x < right.x and _invalid(right.char))
        or up is None
        or down is None
        or left is None
        or (right is not None and tile.x > right.x)
    )


def validate_closed(grid: Grid) -> None:
    """Check that every walkable tile is enclosed; raise MapError if not."""
    for tile in grid.tiles():
        if tile.char in _CHECKED and _is_open(tile):
            raise MapError(f"invalid map: tile ({tile.x}, {tile.y}) is open")


def initial_direction(char: str) -> tuple[float, float, float, float]:
    """Return (dx, dy, planex, planey) for a player start character."""
    try:
        dx, dy = _DIRECTIONS[char]
    except KeyError:
        raise ValueError(f"not a player start: {char!r}") from None
    return dx, dy, -dy * PLANE_SCALE, dx * PLANE_SCALE