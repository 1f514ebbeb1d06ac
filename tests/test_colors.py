import random
import string

import pytest

from utilkit.colors import (
    HTML_COLOR_NAMES,
    hsv_to_rgb,
    norm_html_color,
    random_html_color,
    rgb_to_hex,
)


def test_rgb_to_hex_matches_table():
    assert rgb_to_hex(0xF0, 0xF8, 0xFF) == HTML_COLOR_NAMES["aliceblue"].lower()
    assert rgb_to_hex(0, 0, 0) == HTML_COLOR_NAMES["black"]


def test_rgb_to_hex_round_trip():
    for r, g, b in [(1, 2, 3), (255, 128, 0), (16, 15, 200)]:
        code = rgb_to_hex(r, g, b)
        assert int(code[0:2], 16) == r
        assert int(code[2:4], 16) == g
        assert int(code[4:6], 16) == b


def test_norm_html_color_names():
    assert norm_html_color("AliceBlue") == "F0F8FF"
    assert norm_html_color("yellowgreen") == "9ACD32"


def test_norm_html_color_passthrough():
    assert norm_html_color("#123abc") == "#123abc"
    assert norm_html_color("notacolor") == "notacolor"


def test_hsv_zero_saturation_is_gray():
    assert hsv_to_rgb(200.0, 0.0, 0.4) == (0.4, 0.4, 0.4)


@pytest.mark.parametrize(
    "hue, name", [(0.0, "red"), (120.0, "lime"), (240.0, "blue")]
)
def test_hsv_primaries(hue, name):
    r, g, b = hsv_to_rgb(hue, 1.0, 1.0)
    code = rgb_to_hex(int(r * 255), int(g * 255), int(b * 255))
    assert code == HTML_COLOR_NAMES[name].lower()


def test_hsv_components_in_range():
    for hue in range(0, 360, 7):
        rgb = hsv_to_rgb(float(hue), 0.6, 0.8)
        assert all(0.0 <= c <= 0.8 + 1e-12 for c in rgb)
        assert max(rgb) == pytest.approx(0.8)


def test_random_html_color_shape():
    random.seed(42)
    for _ in range(50):
        code = random_html_color()
        assert len(code) == 6
        assert set(code) <= set(string.hexdigits.lower())


def test_random_html_color_is_saturated():
    random.seed(7)
    code = random_html_color()
    channels = [int(code[i : i + 2], 16) for i in (0, 2, 4)]
    assert max(channels) > 200
    assert min(channels) < 20


def test_random_html_color_deterministic_with_seed():
    random.seed(3)
    first = random_html_color()
    random.seed(3)
    assert random_html_color() == first