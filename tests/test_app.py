import math

import pytest

from cubraycaster.app import Game, main
from cubraycaster.cubfile import parse_scene
from cubraycaster.grid import MapError
from cubraycaster.image import Image
from cubraycaster.minimap import minimap_color

HEADER = [
    "NO ./n.xpm\n",
    "SO ./s.xpm\n",
    "WE ./w.xpm\n",
    "EA ./e.xpm\n",
    "F 10,20,30\n",
    "C 40,50,60\n",
    "\n",
]
ROWS = ["111111\n", "1N0C01\n", "10B0D1\n", "111111\n"]


def _image(color):
    img = Image(4, 4)
    for y in range(4):
        for x in range(4):
            img.put_pixel(x, y, color)
    return img


def _tiles():
    return [
        [[_image(0x112233)], [_image(0x445566)]],
        [[_image(0x00FF00)]],
        [[_image(0x0000FF) for _ in range(37)]],
        [[_image(0xFFFF00)]],
    ]


def _walls():
    return [_image(0xAA0000) for _ in range(4)]


def _game(rows=ROWS, tiles=None):
    scene = parse_scene(HEADER + rows)
    return Game(scene, _walls(), tiles or _tiles(), 32, 24)


def test_init_places_player_and_objects():
    game = _game()
    assert (game.player.x, game.player.y) == (1.0, 1.0)
    assert (game.player.dx, game.player.dy) == (0.0, -1.0)
    assert game.card.scale == 7
    assert len(game.boxes) == 1 and game.boxes[0].scale == 2
    assert game.door.tile.char == "D"


def test_open_map_is_rejected():
    rows = ["111111\n", "1N0C00\n", "10B0D1\n", "111111\n"]
    with pytest.raises(MapError):
        _game(rows)


def test_missing_texture_groups_are_rejected():
    tiles = _tiles()[:2]
    with pytest.raises(ValueError):
        _game(tiles=tiles)


def test_wrong_wall_count_is_rejected():
    scene = parse_scene(HEADER + ROWS)
    with pytest.raises(ValueError):
        Game(scene, _walls()[:3], _tiles(), 32, 24)


def test_keys_are_tracked():
    game = _game()
    game.key_down("z")
    assert "z" in game.keys
    game.key_up("z")
    assert "z" not in game.keys


def test_escape_stops_game():
    game = _game()
    game.key_down("escape")
    assert game.running is False
    assert game.exit_code == 0


def test_step_draws_frame():
    game = _game()
    frame = game.step(0.0)
    assert (frame.width, frame.height) == (32, 24)
    assert len(game.zbuffer) == 32
    assert any(frame.pixels)


def test_turning_keeps_unit_direction():
    game = _game()
    game.key_down("left")
    game.step(0.0)
    assert game.player.dx != 0.0
    assert math.isclose(math.hypot(game.player.dx, game.player.dy), 1.0)


def test_minimap_drawn_when_held():
    game = _game()
    game.key_down("m")
    frame = game.step(0.0)
    assert frame.get_pixel(25, 25) == minimap_color("N")
    assert frame.get_pixel(5, 5) == minimap_color("1")


def test_mouse_move():
    game = _game()
    assert game.mouse_move(16, 12) is False
    old_dx = game.player.dx
    assert game.mouse_move(30, 20) is True
    assert game.player.dx != old_dx


def test_door_opens_over_time():
    game = _game()
    game.door.status = 1
    game.step(0.0)
    assert game.door.open_progress == 0.0
    game.step(1.0)
    assert game.door.open_progress == 1.0
    assert game.door.tile.char == "d"


def test_knife_advances_every_second_step():
    game = _game()
    game.step(0.0)
    assert game.knife.frame == 0
    game.step(0.01)
    assert game.knife.frame == 1


def test_main_without_arguments_fails(capsys):
    assert main([]) == 1
    assert capsys.readouterr().err.startswith("Error\n")


def test_main_rejects_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "nope.cub")]) == 1
    assert "Error" in capsys.readouterr().err


def test_main_prints_map_then_fails_on_texture_list(tmp_path, capsys):
    path = tmp_path / "map.cub"
    path.write_text("".join(HEADER + ROWS))
    assert main([str(path)]) == 1
    captured = capsys.readouterr()
    assert captured.out == "".join(ROWS)
    assert "Error" in captured.err