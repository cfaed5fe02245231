from itertools import islice

import pytest

from workbook_rpc.icd import NUM_LEDS, BadPositionError, Rgb8, SingleLed
from workbook_rpc.leds import (
    BLACK,
    GREEN,
    WHITE,
    LedStrip,
    chase_frame,
    chase_frames,
    dim,
    fade_levels,
    pack_frame,
    pack_word,
    pot_changed,
)


def test_pack_word_order_is_grb():
    assert pack_word(Rgb8(0x11, 0x22, 0x33)) == 0x22113300


@pytest.mark.parametrize("r,g,b", [(0, 0, 0), (255, 1, 2), (7, 200, 99)])
def test_pack_word_fields(r, g, b):
    word = pack_word(Rgb8(r, g, b))
    assert word & 0xFF == 0
    assert (word >> 24, (word >> 16) & 0xFF, (word >> 8) & 0xFF) == (g, r, b)


def test_pack_frame_of_black_is_zero():
    frame = pack_frame([BLACK] * NUM_LEDS)
    assert frame == [0] * NUM_LEDS


def test_dim_by_one_is_identity():
    assert dim(WHITE, 1) == WHITE


def test_dim_rounds_down():
    assert dim(Rgb8(32, 17, 15), 16) == Rgb8(2, 1, 0)


def test_dim_rejects_zero():
    with pytest.raises(ValueError):
        dim(GREEN, 0)


def test_chase_frame_lights_block():
    frame = chase_frame(0, GREEN)
    assert len(frame) == NUM_LEDS
    assert [i for i, c in enumerate(frame) if c == GREEN] == [0, 1, 2, 3]
    assert all(c == BLACK for c in frame[4:])


def test_chase_frame_wraps():
    frame = chase_frame(NUM_LEDS - 2, WHITE)
    lit = {i for i, c in enumerate(frame) if c == WHITE}
    assert lit == {NUM_LEDS - 2, NUM_LEDS - 1, 0, 1}


def test_chase_frame_bad_index():
    with pytest.raises(ValueError):
        chase_frame(NUM_LEDS, GREEN)


def test_chase_frames_cycle():
    frames = list(islice(chase_frames(GREEN), NUM_LEDS + 1))
    assert frames[NUM_LEDS] == frames[0]
    assert all(sum(c == GREEN for c in f) == 4 for f in frames)
    assert frames[1] == chase_frame(1, GREEN)


def test_fade_levels_shape():
    levels = fade_levels(32)
    assert levels[:33] == tuple(range(33))
    assert levels[33:] == tuple(reversed(range(33)))


def test_fade_levels_rejects_large_peak():
    with pytest.raises(ValueError):
        fade_levels(256)


def test_pot_changed_threshold():
    assert pot_changed(164, 100) is False
    assert pot_changed(165, 100) is True
    assert pot_changed(100, 165) is True


def test_strip_set_one_updates_words():
    strip = LedStrip()
    color = Rgb8(1, 2, 3)
    strip.set_one(SingleLed(NUM_LEDS - 1, color))
    assert strip.state[NUM_LEDS - 1] == color
    assert strip.words()[NUM_LEDS - 1] == pack_word(color)
    assert strip.words()[0] == 0


def test_strip_set_one_bad_position():
    strip = LedStrip()
    with pytest.raises(BadPositionError):
        strip.set_one(SingleLed(NUM_LEDS, WHITE))
    assert strip.state == [BLACK] * NUM_LEDS


def test_strip_set_all():
    strip = LedStrip()
    strip.set_all([WHITE] * NUM_LEDS)
    assert list(strip) == [WHITE] * NUM_LEDS
    with pytest.raises(ValueError):
        strip.set_all([WHITE] * (NUM_LEDS - 1))