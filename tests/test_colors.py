import pytest

from cubraycaster.colors import COLOR_NAMES, convert_color, lookup_color


@pytest.mark.parametrize(
    "name, value",
    [
        ("snow", 0xFFFAFA),
        ("white", 0xFFFFFF),
        ("black", 0x0),
        ("navy", 0x80),
        ("lightgoldenrodyellow", 0xFAFAD2),
        ("tomato3", 0xCD4F39),
        ("gray50", 0x7F7F7F),
        ("gray100", 0xFFFFFF),
        ("darkred", 0x8B0000),
    ],
)
def test_lookup_known_names(name, value):
    assert lookup_color(name) == value


def test_lookup_is_case_insensitive():
    assert lookup_color("SNOW") == lookup_color("snow")
    assert lookup_color("Ghost White") == 0xF8F8FF


def test_first_of_repeated_names_wins():
    assert lookup_color("dark slate") == 0x2F4F4F
    assert lookup_color("light slate") == 0x778899
    assert lookup_color("light goldenrod") == 0xFAFAD2


def test_none_is_transparent():
    assert lookup_color("none") == -1


def test_gray_and_grey_agree_at_every_level():
    for level in range(101):
        assert lookup_color(f"gray{level}") == lookup_color(f"grey{level}")


def test_gray_levels_are_neutral_and_increasing():
    values = [lookup_color(f"gray{level}") for level in range(101)]
    assert values == sorted(values)
    for value in values:
        r, g, b = (value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF
        assert r == g == b


def test_first_shade_matches_base_for_some_colours():
    for base in ("snow", "red", "magenta", "yellow", "orange"):
        assert lookup_color(f"{base}1") == lookup_color(base)


def test_all_values_fit_24_bits_except_none():
    for name, value in COLOR_NAMES.items():
        if name == "none":
            continue
        assert 0 <= value <= 0xFFFFFF


def test_unknown_name_raises():
    with pytest.raises(KeyError):
        lookup_color("not a colour")


@pytest.mark.parametrize("color", [0x0, 0xFF99FF, 0x00FFFF, 0x123456])
def test_deep_visual_keeps_colour(color):
    assert convert_color(color, 24, (0, 0, 0, 0, 0, 0)) == color
    assert convert_color(color, 32, (16, 8, 8, 8, 0, 8)) == color


@pytest.mark.parametrize("color", [0x0, 0xFF99FF, 0x00FFFF, 0x123456, 0xFFFFFF])
def test_eight_bit_channels_round_trip(color):
    assert convert_color(color, 16, (16, 8, 8, 8, 0, 8)) == color


def test_black_maps_to_zero_on_any_visual():
    assert convert_color(0, 16, (11, 5, 5, 6, 0, 5)) == 0


def test_rgb565_white_fills_all_bits():
    assert convert_color(0xFFFFFF, 16, (11, 5, 5, 6, 0, 5)) == 0xFFFF


def test_rgb565_channels_stay_in_their_masks():
    shifts = (11, 5, 5, 6, 0, 5)
    assert convert_color(0xFF0000, 16, shifts) & ~0xF800 == 0
    assert convert_color(0x00FF00, 16, shifts) & ~0x07E0 == 0
    assert convert_color(0x0000FF, 16, shifts) & ~0x001F == 0


def test_bad_shifts_rejected():
    with pytest.raises(ValueError):
        convert_color(0xFFFFFF, 16, (11, 5, 5))