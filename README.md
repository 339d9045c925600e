# cubraycaster

A grid raycaster. A level is described in a `.cub` scene file. The package
parses the file, links the map into a grid of tiles, checks that the map is
closed, and draws first-person frames. Walls are found with a DDA walk; there
are a textured floor and ceiling, billboard sprites, a sliding door, an access
card, an animated knife overlay and a minimap. Frames are drawn into an
in-memory 32-bit `Image`. The `cubraycaster` command shows them in a pygame
window.

## Installing

```
pip install .
```

With the test dependencies:

```
pip install .[test]
pytest
```

## The command

```
cubraycaster path/to/level.cub
```

The command does the following, in this order:

1. It checks that exactly one argument was given, that it ends in `.cub`, and
   that the file can be opened for reading and writing.
2. It parses the scene and checks that the map is closed.
3. It prints the map to standard output.
4. It reads the same file a second time as a texture list (see below).
5. It loads the four wall textures and the texture list's images as XPM files.
6. It opens a 1920x1080 window titled `Cub3D`.

If any step fails, it prints `Error` and the reason on standard error and
returns 1. `Esc` ends the game with status 0. Closing the window returns 1.

## Scene files

A scene begins with six header entries, in any order. Blank lines are allowed
between them:

```
NO ./textures/north.xpm
SO ./textures/south.xpm
WE ./textures/west.xpm
EA ./textures/east.xpm
F 220,100,0
C 225,30,0
```

A colour has exactly three comma-separated components, each from 0 to 255. A
line that is not a new header entry is an error.

The map follows the header. It may hold only the characters `01CBNSEWD`,
spaces and newlines. Blank lines are dropped.

| char | meaning |
|------|---------|
| `1` | wall |
| `0` | floor |
| `N` `S` `E` `W` | player start and facing (exactly one) |
| `C` | access card (exactly one) |
| `D` | door (exactly one) |
| `B` | box sprite (any number) |

Every `0`, `D`, `C` and `B` tile must have neighbours above, below and to the
left, and no neighbour may be a space or anything outside `01DBCNSEW`.
Otherwise `validate_closed` raises `MapError`.

## Texture lists

`cubraycaster.textures.parse_texture_index` takes exactly 42 lines. The first
character of a line is a marker, and the rest of the line is a texture path:

- `.` starts a new image group.
- `.` and `-` each start a new image.
- Any other character adds one more frame.

Lines are sorted by the words they contain:

| words | group | frame count |
|-------|-------|-------------|
| `floor` | group 0 | `white` and `green` lines give the frame counts of its two images |
| `card` | group 1 | |
| `knife` | group 2 | |
| `decor` | group 3 | `barrel` lines give the frame count |

`load_tiles` returns `tiles[group][image][frame]`. `Game` uses these images:

- `tiles[0][0][0]` as the ceiling
- `tiles[0][1][0]` as the floor
- `tiles[1][0][0]` as the card
- `tiles[2]` as the knife animation, which needs 37 frames
- `tiles[3][0][0]` for boxes

## Controls

| key | action |
|-----|--------|
| `z` / `s` | forward / back |
| `q` / `d` | strafe left / right |
| left / right arrow, mouse | turn |
| `e` | pick up the card when closer than 2 tiles; open or close the door when 2 to 3 tiles away (opening needs the card) |
| `f` | knife attack |
| `m` | show the minimap |
| `Esc` | quit |

## Library use

```python
from cubraycaster.app import Game
from cubraycaster.cubfile import load_scene
from cubraycaster.textures import load_tiles, load_walls, read_texture_index

scene = load_scene("level.cub")
walls = load_walls(scene.wall_paths)
tiles = load_tiles(read_texture_index("textures.txt"))

game = Game(scene, walls, tiles, width=640, height=360)
game.key_down("z")
frame = game.step(0.0)          # an Image; pixels are 0xAARRGGBB values
print(frame.get_pixel(320, 180))
```

`Game` has these members:

- `key_down` and `key_up` take key names (`"z"`, `"left"`, `"escape"`, ...).
- `mouse_move(x, y)` turns the view. It returns True when the pointer should go
  back to the centre.
- `step(now)` advances the door by the time since the previous call and draws
  one frame.

Modules:

- `cubraycaster.cubfile`: `load_scene`, `parse_scene`, `parse_header`,
  `read_map`, `check_map_counts`, `check_arguments`, `Scene`, `Color`,
  `CubError`
- `cubraycaster.textures`: `parse_texture_index`, `read_texture_index`,
  `load_tiles`, `load_walls`, `TextureIndex`, `TextureError`. The loaders take
  an optional `loader` callable, which defaults to `load_xpm`.
- `cubraycaster.xpm`: `load_xpm`, `parse_xpm_text`, `parse_xpm`,
  `strip_comments`, `split_words`, `parse_color_spec`, `XpmError`
- `cubraycaster.colors`: `lookup_color` (the X11 colour names), `convert_color`
- `cubraycaster.image`: `Image` with `put_pixel`, `get_pixel`, `clear` and
  `blit`
- `cubraycaster.grid`: `Grid`, `Tile`, `validate_closed`, `initial_direction`,
  `MapError`
- `cubraycaster.player`: `Player`, `is_blocking`, `apply_movement`,
  `mouse_rotation`
- `cubraycaster.raycast`: `Ray`, `cast_ray`, `line_height`,
  `draw_textured_column`, `render_walls`
- `cubraycaster.sprites`: `Sprite`, `render_sprite`, `draw_overlay`
- `cubraycaster.minimap`: `minimap_color`, `draw_minimap`
- `cubraycaster.actions`: `Knife`, `Door`, `try_pick_card`, `try_toggle_door`,
  `handle_interaction`

## Limitations

The command reads the scene file as its own texture list. A valid scene cannot
hold the texture list's `.` group lines, because the header accepts only the
six entries and the map accepts only map characters. As a result the texture
list it reads has no image groups, and the command stops with an error before
it opens the window.

To play a level, drive `Game` from Python with a separate texture list, as in
the example above, and display the frames yourself.

There is no sound, no saving, and no level other than the one scene given.