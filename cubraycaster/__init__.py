"""Grid raycaster: .cub scene parsing, XPM textures, frame rendering and a pygame runner."""

__version__ = "0.1.0"

__all__ = [
    "actions",
    "app",
    "colors",
    "cubfile",
    "grid",
    "image",
    "minimap",
    "player",
    "raycast",
    "sprites",
    "textures",
    "xpm",
]