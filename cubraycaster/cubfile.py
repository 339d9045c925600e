"""Reading of ``.cub`` scene files: wall textures, colours and the map."""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path

__all__ = [
    "CubError",
    "Color",
    "Scene",
    "check_arguments",
    "parse_texture",
    "parse_color",
    "parse_header",
    "read_map",
    "check_map_counts",
    "parse_scene",
    "load_scene",
]

_SPACE = " \t\n\v\f\r"
_DIGITS = "0123456789"
_MAP_CHARS = frozenset("01CBNSEWD \n")
_PLAYER_CHARS = frozenset("NSEW")
_TEXTURE_IDS = ("NO", "SO", "WE", "EA")
_COLOR_IDS = ("F", "C")
_HEADER_SIZE = len(_TEXTURE_IDS) + len(_COLOR_IDS)
_ATOI = re.compile(r"\s*([+-]?\d+)")


class CubError(ValueError):
    """Raised when a scene file or its arguments are invalid."""


@dataclass(frozen=True)
class Color:
    """An RGB colour with channels from 0 to 255."""

    r: int
    g: int
    b: int

    def __post_init__(self) -> None:
        for channel in (self.r, self.g, self.b):
            if not 0 <= channel <= 255:
                raise ValueError(f"colour channel out of range: {channel}")

    @property
    def rgb(self) -> int:
        """The colour as a 0xRRGGBB integer."""
        return (self.r << 16) | (self.g << 8) | self.b


@dataclass(frozen=True)
class Scene:
    """Everything a scene file describes."""

    north: str
    south: str
    west: str
    east: str
    floor: Color
    ceiling: Color
    rows: tuple[str, ...]
    box_count: int

    @property
    def wall_paths(self) -> tuple[str, str, str, str]:
        """Texture paths for the north, south, west and east walls."""
        return (self.north, self.south, self.west, self.east)

    @property
    def line_count(self) -> int:
        """Number of map rows."""
        return len(self.rows)

    @property
    def columns(self) -> tuple[int, ...]:
        """Width of each map row."""
        return tuple(len(row) for row in self.rows)


def _trim_newline(text: str) -> str:
    return text[:-1] if text.endswith("\n") else text


def _is_blank(line: str) -> bool:
    return line in ("", "\n")


def _atoi(text: str) -> int:
    match = _ATOI.match(text)
    return int(match.group(1)) if match else 0


def check_arguments(argv: Sequence[str]) -> Path:
    """Check the command arguments and return the scene path.

    ``argv`` holds the arguments without the program name. The first one
    must name a ``.cub`` file that can be opened for reading and writing.
    """
    if not argv:
        raise CubError("usage: cub3D <scene.cub>")
    name = argv[0]
    if not name.endswith(".cub"):
        raise CubError(f"scene file must end with .cub: {name}")
    path = Path(name)
    try:
        with open(path, "r+b"):
            pass
    except OSError as exc:
        raise CubError(f"file can't be open: {name}") from exc
    return path


def parse_texture(line: str, ident: str) -> str | None:
    """Return the path of a texture line starting with ``ident``.

    Leading blanks and the blanks after the identifier are skipped; one
    trailing newline is removed. Returns None when the line has another
    identifier.
    """
    text = line.lstrip(_SPACE)
    if not text.startswith(ident):
        return None
    return _trim_newline(text[len(ident):].lstrip(_SPACE))


def parse_color(line: str, ident: str) -> Color | None:
    """Return the colour of a line such as ``F 220,100,0``.

    Returns None when the line has another identifier, holds characters
    other than digits, commas and blanks, does not give exactly three
    components, or a component is outside 0..255.
    """
    text = line.lstrip(_SPACE)
    if not text.startswith(ident):
        return None
    rest = text[len(ident):].lstrip(_SPACE)
    if any(ch not in _DIGITS and ch != "," and ch not in _SPACE for ch in rest):
        return None
    parts = [part for part in rest.split(",") if part]
    if len(parts) != 3:
        return None
    r, g, b = (_atoi(part.strip(" \n")) for part in parts)
    if not all(0 <= value <= 255 for value in (r, g, b)):
        return None
    return Color(r, g, b)


def _read_entry(entries: dict[str, str | Color], line: str) -> bool:
    for ident in _TEXTURE_IDS:
        if ident not in entries:
            path = parse_texture(line, ident)
            if path is not None:
                entries[ident] = path
                return True
    for ident in _COLOR_IDS:
        if ident not in entries:
            color = parse_color(line, ident)
            if color is not None:
                entries[ident] = color
                return True
    return False


def parse_header(lines: Iterable[str]) -> tuple[dict[str, str | Color], list[str]]:
    """Read the six header entries from the start of a scene.

    Returns a mapping of ``NO``, ``SO``, ``WE``, ``EA`` to texture paths
    and ``F``, ``C`` to colours, together with the lines that follow the
    sixth entry. Blank lines are skipped; a line that is no new entry is
    an error.
    """
    lines = list(lines)
    if not lines:
        raise CubError("scene is empty")
    entries: dict[str, str | Color] = {}
    for index, line in enumerate(lines):
        if len(entries) == _HEADER_SIZE:
            return entries, lines[index:]
        if _is_blank(line):
            continue
        if not _read_entry(entries, line):
            raise CubError(f"wrong information: {line!r}")
    if len(entries) != _HEADER_SIZE:
        missing = [i for i in _TEXTURE_IDS + _COLOR_IDS if i not in entries]
        raise CubError(f"missing scene information: {', '.join(missing)}")
    return entries, []


def read_map(lines: Iterable[str]) -> str:
    """Join the map lines into one text, one row per line.

    Blank lines are left out. Any character other than ``01CBNSEWD``,
    space and newline is an error.
    """
    rows: list[str] = []
    for line in lines:
        bad = set(line) - _MAP_CHARS
        if bad:
            raise CubError(f"invalid map character(s) {''.join(sorted(bad))!r}")
        if _is_blank(line):
            continue
        rows.append(line if line.endswith("\n") else line + "\n")
    return "".join(rows)


def check_map_counts(map_text: str) -> int:
    """Check there is one player, one card and one door; return the box count."""
    players = sum(1 for ch in map_text if ch in _PLAYER_CHARS)
    cards = map_text.count("C")
    doors = map_text.count("D")
    if players != 1:
        raise CubError(f"map needs exactly one player start, found {players}")
    if cards != 1:
        raise CubError(f"map needs exactly one card, found {cards}")
    if doors != 1:
        raise CubError(f"map needs exactly one door, found {doors}")
    return map_text.count("B")


def parse_scene(lines: Iterable[str]) -> Scene:
    """Parse the lines of a scene file into a Scene."""
    entries, rest = parse_header(lines)
    map_text = read_map(rest)
    box_count = check_map_counts(map_text)
    rows = tuple(row for row in map_text.split("\n") if row)
    return Scene(
        north=entries["NO"],
        south=entries["SO"],
        west=entries["WE"],
        east=entries["EA"],
        floor=entries["F"],
        ceiling=entries["C"],
        rows=rows,
        box_count=box_count,
    )


def load_scene(path: str | Path) -> Scene:
    """Read and parse the scene file at ``path``."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise CubError(f"file can't be read: {path}") from exc
    return parse_scene(text.splitlines(keepends=True))