"""Reader for XPM pixmap images."""

from __future__ import annotations

import re
from collections.abc import Iterable
from pathlib import Path

from .colors import lookup_color
from .image import Image

__all__ = [
    "XpmError",
    "split_words",
    "strip_comments",
    "parse_color_spec",
    "parse_xpm",
    "parse_xpm_text",
    "load_xpm",
]

TRANSPARENT = 0xFF000000
_NAME_LIMIT = 63
_QUOTED = re.compile(r'"([^"]*)"')
_ATOI = re.compile(r"\s*([+-]?\d+)")
_STRTOL_HEX = re.compile(r"\s*([+-]?)(0[xX](?=[0-9a-fA-F]))?([0-9a-fA-F]*)")


class XpmError(ValueError):
    """Raised when XPM data cannot be read or parsed."""


def split_words(text: str) -> list[str]:
    """Split ``text`` into words separated by spaces and tabs only."""
    return [word for word in re.split(r"[ \t]+", text) if word]


def _blank_comments(text: str, opener: str, closer: str) -> str:
    pieces: list[str] = []
    quoted = False
    start = 0
    i = 0
    limit = len(text) - len(opener)
    while i <= limit:
        if text[i] == '"':
            quoted = not quoted
        if not quoted and text.startswith(opener, i):
            end = text.find(closer, i + len(opener))
            stop = len(text) if end == -1 else end + len(closer)
            pieces.append(text[start:i])
            pieces.append(" " * (stop - i))
            start = i = stop
            continue
        i += 1
    pieces.append(text[start:])
    return "".join(pieces)


def strip_comments(text: str) -> str:
    """Replace ``/* */`` and ``//`` comments outside quotes with spaces.

    The result has the same length as ``text``. A line comment is blanked
    together with its newline; an unterminated comment runs to the end.
    """
    return _blank_comments(_blank_comments(text, "/*", "*/"), "//", "\n")


def _atoi(text: str) -> int:
    match = _ATOI.match(text)
    return int(match.group(1)) if match else 0


def _strtol_hex(text: str) -> int:
    match = _STRTOL_HEX.match(text)
    digits = match.group(3)
    if not digits:
        return 0
    value = int(digits, 16)
    return -value if match.group(1) == "-" else value


def parse_color_spec(name: str, end: str | None) -> int:
    """Return the 0xRRGGBB value of an XPM colour specification.

    ``#hex`` values are read as hexadecimal; otherwise ``name`` (joined with
    ``end`` by a space when given) is looked up in the named colour table.
    Unknown names yield 0, and ``None`` yields -1 (transparent).
    """
    if name.startswith("#"):
        return _strtol_hex(name[1:])
    if end:
        name = f"{name} {end}"[:_NAME_LIMIT]
    try:
        return lookup_color(name)
    except KeyError:
        return 0


def parse_xpm(lines: Iterable[str]) -> Image:
    """Build an image from the strings of an XPM file, in order.

    The first string holds width, height, colour count and characters per
    pixel; the colour definitions and pixel rows follow.
    """
    source = iter(lines)

    def next_line(what: str) -> str:
        try:
            return next(source)
        except StopIteration:
            raise XpmError(f"missing {what}") from None

    header = split_words(next_line("header"))
    if len(header) < 4:
        raise XpmError("header needs width, height, colours and chars per pixel")
    width, height, ncolors, cpp = (_atoi(word) for word in header[:4])
    if min(width, height, ncolors, cpp) <= 0:
        raise XpmError(f"invalid header: {' '.join(header)}")

    palette: dict[str, int] = {}
    for _ in range(ncolors):
        line = next_line("colour definition")
        if len(line) < cpp:
            raise XpmError(f"colour definition too short: {line!r}")
        words = split_words(line[cpp:])
        try:
            index = words.index("c")
        except ValueError:
            raise XpmError(f"no colour key in {line!r}") from None
        if index + 1 >= len(words):
            raise XpmError(f"no colour value in {line!r}")
        end = words[index + 2] if index + 2 < len(words) else None
        value = parse_color_spec(words[index + 1], end)
        key = line[:cpp]
        if cpp <= 2:
            palette[key] = value
        else:
            palette.setdefault(key, value)

    image = Image(width, height)
    for y in range(height):
        line = next_line("pixel row")
        if len(line) < width * cpp:
            raise XpmError(f"pixel row {y} is too short")
        for x in range(width):
            color = palette.get(line[x * cpp:(x + 1) * cpp], 0)
            if color == -1:
                color = TRANSPARENT
            image.put_pixel(x, y, color)
    return image


def parse_xpm_text(text: str) -> Image:
    """Parse the text of an XPM file: comments are removed, quoted strings read."""
    return parse_xpm(_QUOTED.findall(strip_comments(text)))


def load_xpm(path: str | Path) -> Image:
    """Read and parse the XPM file at ``path``."""
    try:
        text = Path(path).read_text(encoding="latin-1")
    except OSError as exc:
        raise XpmError(f"cannot read {path}: {exc}") from exc
    return parse_xpm_text(text)