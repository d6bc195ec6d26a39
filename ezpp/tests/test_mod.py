import pytest

from ezpp.mod import (
    Mod,
    ar_to_ms,
    difficulty_multiplier,
    ms_to_ar,
    ms_to_od,
    od_to_ms,
    speed_multiplier,
)


def test_bits():
    assert Mod.no_fail == 1
    assert Mod.easy == 2
    assert Mod.touch_device == 4
    assert Mod.hidden == 8
    assert Mod.hard_rock == 16
    assert Mod.double_time == 64
    assert Mod.half_time == 256
    assert Mod.nightcore == 512
    assert Mod.flashlight == 1024
    assert Mod.spun_out == 4096


def test_composites():
    assert Mod.changes_speed == Mod.double_time | Mod.half_time | Mod.nightcore
    assert Mod.changes_difficulty == (
        Mod.hard_rock | Mod.easy | Mod.double_time | Mod.half_time | Mod.nightcore
    )
    assert not Mod.hidden & Mod.changes_difficulty
    assert not Mod.flashlight & Mod.changes_difficulty


@pytest.mark.parametrize(
    "value, expected",
    [
        ("", Mod.no_mod),
        ("NM", Mod.no_mod),
        ("HDDT", Mod.hidden | Mod.double_time),
        ("hdhr", Mod.hidden | Mod.hard_rock),
        ("EZHTSO", Mod.easy | Mod.half_time | Mod.spun_out),
    ],
)
def test_parse(value, expected):
    assert Mod.parse(value) == expected


@pytest.mark.parametrize("value", ["HDX", "ZZ"])
def test_parse_invalid(value):
    with pytest.raises(ValueError):
        Mod.parse(value)


def test_multipliers():
    assert difficulty_multiplier(Mod.no_mod) == 1
    assert difficulty_multiplier(Mod.hard_rock) == 1.4
    assert difficulty_multiplier(Mod.easy) == 0.5
    # hard rock wins
    assert difficulty_multiplier(Mod.hard_rock | Mod.easy) == 1.4

    assert speed_multiplier(Mod.no_mod) == 1
    assert speed_multiplier(Mod.double_time) == 1.5
    assert speed_multiplier(Mod.nightcore) == 1.5
    assert speed_multiplier(Mod.half_time) == 0.75


@pytest.mark.parametrize(
    "ar, ms",
    [
        (0, 1800),
        (5, 1200),
        (10, 450),
        (2.5, 1500),
        (9, 600),
    ],
)
def test_ar_ms(ar, ms):
    assert ar_to_ms(ar) == pytest.approx(ms)
    assert ms_to_ar(ms) == pytest.approx(ar)


def test_od_ms():
    assert od_to_ms(0) == 80
    assert od_to_ms(10) == 20
    # the step is rounded up
    assert od_to_ms(8.5) == 80 - 51
    assert od_to_ms(8.4) == 80 - 51
    assert ms_to_od(29) == pytest.approx(8.5)
