import pytest

from cubraycaster.grid import Grid, initial_direction
from cubraycaster.image import Image
from cubraycaster.player import Player
from cubraycaster.raycast import (
    cast_ray,
    draw_textured_column,
    line_height,
    render_walls,
)

NORTH, SOUTH, WEST, EAST = 0x110000, 0x002200, 0x000033, 0x440044
FLOOR, CEILING = 0x555555, 0x666666


def solid(color, size=4):
    img = Image(size, size)
    for y in range(size):
        for x in range(size):
            img.put_pixel(x, y, color)
    return img


def make_player(rows):
    grid = Grid(rows)
    tile = grid.player_tile
    dx, dy, px, py = initial_direction(tile.char)
    player = Player(
        tile=tile, x=tile.x + 0.5, y=tile.y + 0.5, dx=dx, dy=dy, planex=px, planey=py
    )
    return grid, player


NORTH_ROOM = ["111", "101", "101", "101", "1N1", "111"]


def walls():
    return [solid(NORTH), solid(SOUTH), solid(WEST), solid(EAST)]


def test_center_ray_hits_wall_straight_ahead():
    grid, player = make_player(NORTH_ROOM)
    ray = cast_ray(player, 4, 8)
    assert ray.hit
    assert ray.tile is grid.at(1, 0)
    assert ray.side == 1


def test_center_ray_distance():
    _, player = make_player(NORTH_ROOM)
    ray = cast_ray(player, 4, 8)
    line_height(ray, player, 40)
    assert ray.perpwalldist == pytest.approx(3.5)


def test_ray_stops_at_closed_door():
    grid, player = make_player(["111", "1D1", "101", "1N1", "111"])
    ray = cast_ray(player, 4, 8)
    assert ray.tile is grid.at(1, 1)
    assert ray.tile.char == "D"


def test_ray_passes_open_door():
    grid, player = make_player(["111", "1d1", "101", "1N1", "111"])
    ray = cast_ray(player, 4, 8)
    assert ray.tile is grid.at(1, 0)
    assert len(ray.passed_doors) == 1
    assert ray.passed_doors[0].tile is grid.at(1, 1)


def test_line_height_span_invariants():
    _, player = make_player(NORTH_ROOM)
    for x in range(8):
        ray = cast_ray(player, x, 8)
        line_height(ray, player, 40)
        assert 0 <= ray.drawstart <= ray.drawend <= 39
        assert 0.0 <= ray.tex_x < 1.0


def test_render_walls_north_wall_colour():
    _, player = make_player(NORTH_ROOM)
    frame = Image(8, 40)
    zbuffer = render_walls(frame, player, walls(), solid(FLOOR), solid(CEILING), 0.0)
    assert len(zbuffer) == frame.width
    assert frame.get_pixel(4, 20) == NORTH


def test_render_walls_south_wall_colour():
    _, player = make_player(["111", "1S1", "101", "101", "111"])
    frame = Image(8, 40)
    render_walls(frame, player, walls(), solid(FLOOR), solid(CEILING), 0.0)
    assert frame.get_pixel(4, 20) == SOUTH


def test_render_walls_floor_and_ceiling():
    _, player = make_player(NORTH_ROOM)
    frame = Image(8, 40)
    render_walls(frame, player, walls(), solid(FLOOR), solid(CEILING), 0.0)
    assert frame.get_pixel(4, 39) == FLOOR
    assert frame.get_pixel(4, 1) == CEILING


def test_zbuffer_matches_cast_distance():
    _, player = make_player(NORTH_ROOM)
    frame = Image(8, 40)
    zbuffer = render_walls(frame, player, walls(), solid(FLOOR), solid(CEILING), 0.0)
    for x, dist in enumerate(zbuffer):
        ray = cast_ray(player, x, 8)
        line_height(ray, player, 40)
        assert dist == pytest.approx(ray.perpwalldist)
        assert dist > 0


def test_black_texture_pixels_are_skipped():
    _, player = make_player(NORTH_ROOM)
    ray = cast_ray(player, 4, 8)
    line_height(ray, player, 40)
    frame = Image(8, 40)
    draw_textured_column(frame, Image(4, 4), ray, 4, 1.0)
    assert set(frame.pixels) == {0}


def test_draw_textured_column_paints_only_its_column():
    _, player = make_player(NORTH_ROOM)
    ray = cast_ray(player, 4, 8)
    line_height(ray, player, 40)
    frame = Image(8, 40)
    draw_textured_column(frame, solid(EAST), ray, 2, 1.0)
    painted = {(i % 8, i // 8) for i, p in enumerate(frame.pixels) if p}
    assert painted
    assert {x for x, _ in painted} == {2}