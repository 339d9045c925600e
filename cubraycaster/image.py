"""In-memory 32-bit pixel images used as textures and as the frame buffer."""

from __future__ import annotations

__all__ = ["Image"]

_MASK = 0xFFFFFFFF


class Image:
    """A width x height grid of 32-bit pixel values, stored row by row.

    Pixels are 0xAARRGGBB values. Each row is ``line_length`` bytes long and
    each pixel is ``bits_per_pixel`` bits wide.
    """

    bits_per_pixel = 32
    endian = 0

    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"image size must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self.line_length = width * self.bits_per_pixel // 8
        self.pixels: list[int] = [0] * (width * height)

    def __repr__(self) -> str:
        return f"Image({self.width}x{self.height})"

    def _inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def put_pixel(self, x: int, y: int, color: int) -> None:
        """Store ``color`` at (x, y); points outside the image are ignored."""
        if self._inside(x, y):
            self.pixels[y * self.width + x] = color & _MASK

    def get_pixel(self, x: int, y: int) -> int:
        """Return the pixel at (x, y), or 0 for points outside the image."""
        if not self._inside(x, y):
            return 0
        return self.pixels[y * self.width + x]

    def clear(self) -> None:
        """Set every pixel to zero."""
        self.pixels = [0] * (self.width * self.height)

    def blit(self, other: Image, x: int, y: int) -> None:
        """Copy ``other`` onto this image with its top-left corner at (x, y).

        The copied area is clipped to this image's bounds.
        """
        src_x0 = max(0, -x)
        src_x1 = min(other.width, self.width - x)
        if src_x0 >= src_x1:
            return
        for src_y in range(max(0, -y), min(other.height, self.height - y)):
            dst_row = (src_y + y) * self.width
            src_row = src_y * other.width
            self.pixels[dst_row + x + src_x0:dst_row + x + src_x1] = (
                other.pixels[src_row + src_x0:src_row + src_x1]
            )