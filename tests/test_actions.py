from cubraycaster.actions import (
    KNIFE_FRAMES,
    Door,
    Knife,
    handle_interaction,
    try_pick_card,
    try_toggle_door,
)
from cubraycaster.grid import Tile
from cubraycaster.image import Image
from cubraycaster.player import Player
from cubraycaster.sprites import Sprite


def player_at(x, y):
    return Player(tile=Tile("N", int(x), int(y)), x=x, y=y, dx=0.0, dy=-1.0)


def card_at(x, y):
    return Sprite(tile=Tile("C", x, y), image=Image(1, 1))


def test_knife_advances_every_second_tick():
    knife = Knife()
    assert knife.advance(False) == 0
    assert knife.advance(False) == 1
    assert knife.frame == 1


def test_knife_attack_moves_two_frames():
    knife = Knife()
    knife.advance(True)
    assert knife.advance(True) == 2
    assert knife.aspect


def test_knife_settles_into_idle_loop():
    knife = Knife()
    frames = []
    for _ in range(8 * KNIFE_FRAMES):
        frame = knife.advance(False)
        if knife.normal:
            frames.append(frame)
    assert knife.normal
    assert knife.lim == 1
    assert frames
    assert set(frames) <= set(range(4, 8))
    assert set(frames[-30:]) == {5, 6, 7}


def test_door_opens_then_closes():
    door = Door(tile=Tile("D", 3, 2), status=1)
    door.update(0.1)
    assert 0.0 < door.open_progress < 1.0
    assert door.tile.char == "D"
    door.update(1.0)
    assert door.open_progress == 1.0
    assert door.tile.char == "d"
    door.status = 0
    door.update(1.0)
    assert door.open_progress == 0.0
    assert door.tile.char == "D"


def test_pick_card_when_close():
    card = card_at(2, 1)
    assert try_pick_card(card, player_at(1.5, 1.5))
    assert card.status == 1
    assert card.tile.char == "0"


def test_card_out_of_reach():
    card = card_at(6, 1)
    assert not try_pick_card(card, player_at(1.5, 1.5))
    assert card.status == 0
    assert card.tile.char == "C"


def test_toggle_door_needs_middle_distance():
    door = Door(tile=Tile("D", 2, 1))
    assert not try_toggle_door(door, player_at(1.5, 1.5), 1)
    assert door.status == 0
    far_door = Door(tile=Tile("D", 3, 2))
    assert try_toggle_door(far_door, player_at(1.5, 1.5), 1)
    assert far_door.status == 1


def test_interaction_opens_then_closes():
    player = player_at(1.5, 1.5)
    door = Door(tile=Tile("D", 3, 2))
    card = card_at(2, 1)
    handle_interaction(door, card, player, False)
    assert (card.status, door.status) == (0, 0)
    handle_interaction(door, card, player, True)
    assert card.status == 1
    assert door.status == 1
    handle_interaction(door, card, player, True)
    assert door.status == 0


def test_door_stays_shut_without_card():
    player = player_at(1.5, 1.5)
    door = Door(tile=Tile("D", 3, 2))
    card = card_at(8, 8)
    handle_interaction(door, card, player, True)
    assert card.status == 0
    assert door.status == 0