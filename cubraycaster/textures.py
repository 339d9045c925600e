"""Sprite and wall texture lists and their loading."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from .image import Image
from .xpm import load_xpm

__all__ = [
    "TextureError",
    "TextureIndex",
    "TEXTURE_LINES",
    "parse_texture_index",
    "read_texture_index",
    "load_tiles",
    "load_walls",
]

TEXTURE_LINES = 42
_SLOTS = 6
_IMAGE_MARKERS = ("-", ".")

Loader = Callable[[str], Image]


class TextureError(Exception):
    """Raised when texture lists or texture images cannot be used."""


@dataclass
class TextureIndex:
    """Texture paths and how they group into images and animation frames.

    ``group_count`` is the number of image groups, ``sub_images[g]`` the
    number of images in group ``g`` and ``frames`` the number of frames of
    each image, in order over all groups.
    """

    paths: list[str] = field(default_factory=list)
    group_count: int = 0
    sub_images: list[int] = field(default_factory=lambda: [0] * _SLOTS)
    frames: list[int] = field(default_factory=lambda: [0] * _SLOTS)


def _classify(line: str, index: TextureIndex) -> None:
    starts_image = line.startswith(_IMAGE_MARKERS)
    if "floor" in line:
        if "white" in line:
            index.frames[0] += 1
        if "green" in line:
            index.frames[1] += 1
        if starts_image:
            index.sub_images[0] += 1
    if "card" in line:
        index.frames[2] += 1
        if starts_image:
            index.sub_images[1] += 1
    if "knife" in line:
        index.frames[3] += 1
        if starts_image:
            index.sub_images[2] += 1
    if "decor" in line:
        if "barrel" in line:
            index.frames[4] += 1
        if starts_image:
            index.sub_images[3] += 1


def parse_texture_index(lines: Iterable[str]) -> TextureIndex:
    """Build a texture index from exactly 42 lines.

    The first character of each line is a marker: ``.`` starts a new
    group, ``-`` a new image in the group, anything else another frame.
    The rest of the line is the texture path.
    """
    lines = list(lines)
    if not lines:
        raise TextureError("texture list is empty")
    index = TextureIndex()
    for line in lines:
        _classify(line, index)
        if line.startswith("."):
            index.group_count += 1
        index.paths.extend(piece for piece in line[1:].split("\n") if piece)
    if len(lines) != TEXTURE_LINES:
        raise TextureError(
            f"texture list needs {TEXTURE_LINES} lines, got {len(lines)}"
        )
    return index


def read_texture_index(path: str | Path) -> TextureIndex:
    """Read the texture list file at ``path``."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise TextureError(f"cannot read texture list {path}") from exc
    return parse_texture_index(text.splitlines(keepends=True))


def _load(path: str, loader: Loader) -> Image:
    try:
        return loader(path)
    except (OSError, ValueError) as exc:
        raise TextureError(f"cannot load texture {path!r}: {exc}") from exc


def _take(items: Iterator, what: str):
    try:
        return next(items)
    except StopIteration:
        raise TextureError(f"not enough {what} in texture list") from None


def load_tiles(
    index: TextureIndex, loader: Loader = load_xpm
) -> list[list[list[Image]]]:
    """Load every texture of ``index`` as ``tiles[group][image][frame]``.

    Paths are taken in order; a failing load raises TextureError.
    """
    if index.group_count > len(index.sub_images):
        raise TextureError(f"too many texture groups: {index.group_count}")
    paths = iter(index.paths)
    frame_counts = iter(index.frames)
    tiles: list[list[list[Image]]] = []
    for image_count in index.sub_images[:index.group_count]:
        group: list[list[Image]] = []
        for _ in range(image_count):
            count = _take(frame_counts, "frame counts")
            group.append(
                [_load(_take(paths, "paths"), loader) for _ in range(count)]
            )
        tiles.append(group)
    return tiles


def load_walls(paths: Sequence[str], loader: Loader = load_xpm) -> list[Image]:
    """Load the north, south, west and east wall textures, in that order."""
    if len(paths) != 4:
        raise TextureError(f"four wall textures are needed, got {len(paths)}")
    return [_load(path.removesuffix("\n"), loader) for path in paths]