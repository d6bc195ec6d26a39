import gc
import weakref
from pathlib import Path

import pytest

import ezpp
from ezpp.beatmap import (
    DEFAULT_HIT_SAMPLE,
    Beatmap,
    Circle,
    CurveType,
    DifficultyStats,
    Editor,
    General,
    HitObject,
    HoldNote,
    InvalidHitObject,
    Metadata,
    ObjectCounts,
    Slider,
    Spinner,
    TimingPoint,
    _check_schema,
    _mapping_sections,
)
from ezpp.errors import ParseError, UnknownKeyError
from ezpp.game_mode import GameMode
from ezpp.mod import Mod
from ezpp.position import Position


data_dir = Path(__file__).resolve().parent.parent / "example_data" / "beatmaps"


@pytest.fixture
def beatmap_text():
    path = data_dir / "example_artist_-_example_song_hard.osu"
    return path.read_text(encoding="utf-8-sig")


@pytest.fixture
def beatmap(beatmap_text):
    return Beatmap.parse(beatmap_text)


@pytest.fixture
def legacy_beatmap():
    path = data_dir / "old_artist_-_old_song_normal.osu"
    return Beatmap.parse(path.read_text(encoding="utf-8-sig"))


def test_version(beatmap, legacy_beatmap):
    assert beatmap.format_version == 14
    assert legacy_beatmap.format_version == 5


def test_missing_version_header_defaults_to_1():
    beatmap = Beatmap.parse("[Difficulty]\nOverallDifficulty: 5\n")
    assert beatmap.format_version == 1
    assert beatmap.stats.od == 5


def test_version_header_strips_non_digits():
    assert Beatmap.parse("\ufefffile format v9\n").format_version == 9
    assert Beatmap.parse("osu file format v12  \n").format_version == 12


def test_malformed_version_header():
    with pytest.raises(ParseError):
        Beatmap.parse("osu file format vX\n[General]\n")


def test_general(beatmap):
    assert beatmap.general == General(
        audio_filename="audio.mp3",
        audio_lead_in=0,
        preview_time=1000,
        countdown=0,
        sample_set="Soft",
        stack_leniency=0.7,
        mode=0,
        letterbox_in_breaks=False,
        use_skin_sprites=False,
        overlay_position="NoChange",
        skin_preference="",
        epilepsy_warning=False,
        countdown_offset=0,
        special_style=False,
        widescreen_storyboard=True,
        samples_match_playback_rate=False,
    )


def test_editor(beatmap):
    assert beatmap.editor == Editor(
        bookmarks="1000,2000",
        distance_spacing=1.2,
        beat_divisor=4,
        grid_size=8,
        timeline_zoom=1.5,
    )
    assert beatmap.bookmarks == [1000, 2000]


def test_metadata(beatmap):
    assert beatmap.metadata == Metadata(
        title="Example Song",
        title_unicode="Example Song",
        artist="Example Artist",
        artist_unicode="Example Artist",
        creator="mapper",
        version="Hard",
        source="",
        tags="example test",
        beatmap_id=1234,
        beatmap_set_id=567,
    )
    assert beatmap.beatmap_id == 1234
    assert beatmap.beatmap_set_id == 567
    assert beatmap.display_name == "Example Artist - Example Song [Hard]"


def test_stats(beatmap):
    assert beatmap.stats == DifficultyStats(
        hp=5,
        cs=4,
        od=8,
        ar=9,
        slider_multiplier=1,
        slider_tick_rate=1,
    )


def test_defaults_filled_when_sections_are_empty():
    beatmap = Beatmap.parse("osu file format v14\n")

    assert beatmap.general.audio_lead_in == 0
    assert beatmap.general.preview_time == -1
    assert beatmap.general.countdown == 1
    assert beatmap.general.sample_set == "Normal"
    assert beatmap.general.stack_leniency == 0.7
    assert beatmap.general.overlay_position == "NoChange"
    # no default, never set
    assert beatmap.general.audio_filename is None
    assert beatmap.metadata.title is None
    assert beatmap.metadata.beatmap_id == -1
    assert beatmap.metadata.beatmap_set_id == -1
    assert beatmap.editor.beat_divisor == 4
    assert beatmap.stats.slider_multiplier == 1.4
    assert beatmap.stats.slider_tick_rate == 1.0
    assert beatmap.bookmarks == []
    assert beatmap.mode is GameMode.standard


def test_approach_rate_falls_back_to_overall_difficulty(legacy_beatmap):
    assert legacy_beatmap.stats.ar == 6
    assert legacy_beatmap.stats.od == 6

    beatmap = Beatmap.parse("[Difficulty]\nOverallDifficulty: 7\n")
    assert beatmap.stats.ar == 7


def test_unknown_key():
    with pytest.raises(UnknownKeyError) as excinfo:
        Beatmap.parse("[General]\nAudioFilename: a.mp3\nNotAKey: 1\n")

    assert excinfo.value.key == "NotAKey"
    assert excinfo.value.section == "General"
    assert "NotAKey" in str(excinfo.value)
    assert isinstance(excinfo.value, ParseError)


def test_keys_are_case_sensitive():
    with pytest.raises(UnknownKeyError):
        Beatmap.parse("[Difficulty]\ncirclesize: 4\n")


def test_bad_value():
    with pytest.raises(ParseError):
        Beatmap.parse("[General]\nAudioLeadIn: soon\n")


def test_unknown_section_is_skipped():
    beatmap = Beatmap.parse(
        "osu file format v14\n"
        "[Mystery]\n"
        "Anything: goes\n"
        "[Difficulty]\n"
        "CircleSize: 3\n"
    )
    assert beatmap.stats.cs == 3


def test_lines_before_first_section_are_dropped():
    beatmap = Beatmap.parse("osu file format v14\nstray line\n[Difficulty]\nCircleSize: 3\n")
    assert beatmap.stats.cs == 3


def test_comments_and_indented_lines_are_dropped():
    beatmap = Beatmap.parse(
        "osu file format v14\n"
        "[Difficulty]\n"
        "// CircleSize: 9\n"
        " CircleSize: 8\n"
        "_CircleSize: 7\n"
        "CircleSize: 3\n"
    )
    assert beatmap.stats.cs == 3


def test_unknown_game_mode():
    with pytest.raises(ParseError):
        Beatmap.parse("[General]\nMode: 9\n")


@pytest.mark.parametrize(
    "mode, expected",
    [
        (0, GameMode.standard),
        (1, GameMode.taiko),
        (2, GameMode.ctb),
        (3, GameMode.mania),
    ],
)
def test_game_mode(mode, expected):
    assert Beatmap.parse(f"[General]\nMode: {mode}\n").mode is expected


def test_schemas_match_records():
    for record, schema in _mapping_sections.values():
        _check_schema(record, schema)

    broken = dict(_mapping_sections["Editor"][1])
    del broken["GridSize"]
    with pytest.raises(TypeError):
        _check_schema(Editor, broken)


def test_timing_points(beatmap):
    assert beatmap.timing_points == (
        TimingPoint(0, 500.0, 4, 2, 0, 100, False, 0),
        TimingPoint(2000, -50.0, 4, 2, 0, 100, True, 1),
    )

    uninherited, inherited = beatmap.timing_points
    assert uninherited.bpm == 120
    assert uninherited.velocity_multiplier == 1
    assert not uninherited.kiai_mode
    assert inherited.bpm is None
    assert inherited.velocity_multiplier == 2
    assert inherited.kiai_mode


def test_timing_point_defaults(legacy_beatmap):
    timing_point, = legacy_beatmap.timing_points
    assert timing_point == TimingPoint(100, 400.0, 4, 1, 0, 80, False, 0)


def test_timing_point_bad_value():
    with pytest.raises(ParseError):
        TimingPoint.parse("0,fast,4,2,0,100,1,0")


def test_timing_point_at(beatmap):
    first, second = beatmap.timing_points
    assert beatmap.timing_point_at(-1) is None
    assert beatmap.timing_point_at(0) == first
    assert beatmap.timing_point_at(1999) == first
    assert beatmap.timing_point_at(2000) == second
    assert beatmap.timing_point_at(10000) == second


def test_bpm(beatmap):
    assert beatmap.bpm_min() == 120
    assert beatmap.bpm_max() == 120
    assert beatmap.bpm_max(Mod.double_time) == 180
    assert beatmap.bpm_min(Mod.half_time) == 90


@pytest.mark.parametrize(
    "timing_points",
    ["", "[TimingPoints]\n1000,-50,4,2,0,100,0,0\n"],
)
def test_bpm_without_uninherited_timing_points(timing_points):
    beatmap = Beatmap.parse(
        "osu file format v14\n"
        "[Difficulty]\n"
        "OverallDifficulty: 7\n"
        f"{timing_points}"
        "[HitObjects]\n"
        "100,100,500,1,0\n",
    )

    assert beatmap.bpm_min() is None
    assert beatmap.bpm_max(Mod.double_time) is None


def test_bpm_does_not_keep_beatmap_alive(beatmap_text):
    beatmap = Beatmap.parse(beatmap_text)
    assert beatmap.bpm_min() == 120

    ref = weakref.ref(beatmap)
    del beatmap
    gc.collect()

    assert ref() is None


def test_combo_colors(beatmap):
    assert beatmap.combo_colors == ((255, 0, 0), (0, 255, 0))


def test_hit_objects(beatmap):
    circle, linear, bezier, perfect, spinner = beatmap.hit_objects

    assert circle == Circle(500, Position(100, 100), "0:0:0:0:")

    assert isinstance(linear, Slider)
    assert linear.time == 1000
    assert linear.position == Position(200, 200)
    assert linear.curve.curve_type is CurveType.linear
    assert linear.curve.points == (Position(300, 200),)
    assert linear.curve.repetitions == 1
    assert linear.curve.length == 200
    assert linear.curve.edge_sounds == (0, 0)
    assert linear.curve.edge_sets == ("0:0", "0:0")

    # new combo bit is ignored when picking the kind
    assert isinstance(bezier, Slider)
    assert bezier.curve.curve_type is CurveType.bezier
    assert bezier.curve.points == (Position(300, 100), Position(350, 150))
    assert bezier.curve.repetitions == 2
    assert bezier.curve.edge_sounds == ()
    assert bezier.curve.edge_sets == ()
    assert bezier.hit_sample == DEFAULT_HIT_SAMPLE

    assert perfect.curve.curve_type is CurveType.perfect

    assert isinstance(spinner, Spinner)
    assert spinner.time == 3000
    assert spinner.end_time == 4000
    assert spinner.position is None

    assert beatmap.object_counts == ObjectCounts(
        circles=1,
        sliders=3,
        spinners=1,
        holds=0,
    )


def test_circle_default_hit_sample():
    circle = HitObject.parse("100,100,500,1,0")

    assert isinstance(circle, Circle)
    assert circle.position == Position(100, 100)
    assert circle.time == 500
    assert circle.hit_sample == DEFAULT_HIT_SAMPLE


def test_slider_defaults():
    slider = HitObject.parse("10,20,30,2,0,B|40:50")

    assert isinstance(slider, Slider)
    assert slider.curve.repetitions == 1
    assert slider.curve.length == 0.0


@pytest.mark.parametrize(
    "line",
    [
        "10,20,30,2,0,B|40:50,many,100",
        "10,20,30,2,0,B|40:50,1,long",
        "10,20,30,2,0,B|40:50,0,100",
        "10,20,30,2,0,B|40:50,1,nan",
    ],
)
def test_invalid_slider(line):
    assert isinstance(HitObject.parse(line), InvalidHitObject)


def test_invalid_slider_does_not_abort_parse():
    beatmap = Beatmap.parse(
        "osu file format v14\n"
        "[HitObjects]\n"
        "100,100,500,1,0\n"
        "10,20,30,2,0,B|40:50,1,long\n"
        "100,100,900,1,0\n"
    )

    assert isinstance(beatmap.hit_objects[1], InvalidHitObject)
    assert beatmap.object_counts == ObjectCounts(circles=2)


def test_hold_note():
    hold = HitObject.parse("64,192,1000,128,0,1500:0:0:0:0:")

    assert isinstance(hold, HoldNote)
    assert hold.time == 1000
    assert hold.position == Position(64, 192)


@pytest.mark.parametrize(
    "line",
    [
        # no kind bit
        "100,100,500,4,0",
        # two kind bits
        "100,100,500,3,0",
        "not,a,hit,object",
    ],
)
def test_bad_hit_object(line):
    with pytest.raises(ParseError):
        HitObject.parse(line)


def test_unknown_curve_type():
    with pytest.raises(ParseError):
        HitObject.parse("10,20,30,2,0,Z|40:50,1,100")


def test_bad_type_byte_aborts_parse():
    with pytest.raises(ParseError):
        Beatmap.parse("[HitObjects]\n100,100,500,1,0\n100,100,600,16,0\n")


def test_parse_is_pure(beatmap_text):
    first = ezpp.parse(beatmap_text)
    second = ezpp.parse(beatmap_text)

    assert first is not second
    assert first == second
    assert first.object_counts == second.object_counts


def test_beatmap_equality(beatmap_text):
    beatmap = ezpp.parse(beatmap_text)
    # cached values do not take part in equality
    beatmap.bookmarks

    assert beatmap == ezpp.parse(beatmap_text)
    recolored = beatmap_text.replace("Combo2 : 0,255,0", "Combo2 : 0,0,255")
    assert beatmap != ezpp.parse(recolored)
    assert beatmap != ezpp.parse(beatmap_text.replace("v14", "v13"))
    assert beatmap != "not a beatmap"


def test_crlf(legacy_beatmap):
    assert legacy_beatmap.general.audio_filename == "old.mp3"
    assert legacy_beatmap.metadata.title == "Old Song"
    assert legacy_beatmap.object_counts == ObjectCounts(
        circles=1,
        sliders=1,
        spinners=1,
    )
