import pytest

from cubraycaster.grid import Tile
from cubraycaster.image import Image
from cubraycaster.player import Player
from cubraycaster.sprites import Sprite, draw_overlay, render_sprite

COLOR = 0x00AA33


def solid(color, size=4):
    img = Image(size, size)
    for y in range(size):
        for x in range(size):
            img.put_pixel(x, y, color)
    return img


def north_player():
    return Player(
        tile=Tile("N", 1, 4), x=1.5, y=4.5, dx=0.0, dy=-1.0, planex=0.66, planey=0.0
    )


def test_overlay_bottom_right_offset():
    frame = Image(600, 100)
    draw_overlay(frame, solid(COLOR, 2))
    assert frame.get_pixel(98, 28) == COLOR
    assert frame.get_pixel(99, 29) == COLOR
    assert frame.get_pixel(97, 28) == 0


def test_overlay_skips_black():
    frame = Image(600, 100)
    draw_overlay(frame, Image(3, 3))
    assert set(frame.pixels) == {0}


def test_sprite_ahead_is_drawn_at_centre():
    frame = Image(20, 20)
    sprite = Sprite(tile=Tile("B", 1, 2), image=solid(COLOR))
    render_sprite(frame, sprite, north_player(), [10.0] * 20)
    assert frame.get_pixel(10, 10) == COLOR


def test_sprite_hidden_by_nearer_wall():
    frame = Image(20, 20)
    sprite = Sprite(tile=Tile("B", 1, 2), image=solid(COLOR))
    render_sprite(frame, sprite, north_player(), [1.0] * 20)
    assert set(frame.pixels) == {0}


def test_sprite_behind_player_not_drawn():
    frame = Image(20, 20)
    sprite = Sprite(tile=Tile("B", 1, 6), image=solid(COLOR))
    render_sprite(frame, sprite, north_player(), [10.0] * 20)
    assert set(frame.pixels) == {0}


def test_vertical_shift_uses_previous_height():
    frame = Image(20, 20)
    sprite = Sprite(tile=Tile("B", 1, 2), image=solid(COLOR))
    player = north_player()
    render_sprite(frame, sprite, player, [10.0] * 20)
    assert sprite.vertical_shift == 0
    first = sprite.h
    assert first > 0
    assert sprite.w == sprite.h
    render_sprite(frame, sprite, player, [10.0] * 20)
    assert sprite.vertical_shift == first // 2


def test_draw_span_within_frame():
    frame = Image(20, 20)
    sprite = Sprite(tile=Tile("B", 1, 3), image=solid(COLOR), scale=2)
    render_sprite(frame, sprite, north_player(), [10.0] * 20)
    assert 0 <= sprite.draw_startx <= sprite.draw_endx <= frame.width - 1
    assert 0 <= sprite.draw_starty <= sprite.draw_endy <= frame.height - 1


def test_invalid_scale_rejected():
    with pytest.raises(ValueError):
        Sprite(tile=Tile("B", 0, 0), image=Image(1, 1), scale=0)