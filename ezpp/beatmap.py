from __future__ import annotations

import re
import math
import logging
from collections import Counter
from enum import Enum
from typing import (
    Any,
    Callable,
    ClassVar,
    Dict,
    Iterable,
    List,
    Mapping,
    NamedTuple,
    Sequence,
    Tuple,
    Union,
    cast,
)

from .errors import ParseError, UnknownKeyError
from .game_mode import GameMode
from .mod import Mod, speed_multiplier
from .position import Position
from .utils import lazyval, no_default


NoDefaultType = type[no_default]
GroupsMapping = Dict[str, List[str]]
ColorTuple = Tuple[int, int, int]

DEFAULT_HIT_SAMPLE = "0:0:0:0:"


def _get(cs: Sequence[str], ix: int, default: str | NoDefaultType = no_default) -> str:
    try:
        return cs[ix]
    except IndexError:
        if default is no_default:
            raise
        return cast(str, default)


def _as_int(name: str, raw: str) -> int:
    try:
        return int(raw)
    except ValueError:
        raise ParseError(f"{name} should be an int, got {raw!r}")


def _as_float(name: str, raw: str) -> float:
    try:
        return float(raw)
    except ValueError:
        raise ParseError(f"{name} should be a float, got {raw!r}")


class TimingPoint(NamedTuple):
    """A timing point assigns properties to an offset into a beatmap.

    Parameters
    ----------
    time : int
        When this ``TimingPoint`` takes effect in milliseconds.
    beat_length : float
        The milliseconds per beat, this is another representation of BPM. For
        inherited timing points this is negative and encodes a slider
        velocity multiplier of ``-100 / beat_length``.
    meter : int
        The number of beats per measure.
    sample_set : int
        The default sample set for hit objects.
    sample_index : int
        The custom sample index for hit objects.
    volume : int
        The volume of hit sounds in the range [0, 100].
    inherited : bool
        Whether this timing point keeps the beat length of the timing point
        before it and only changes slider velocity.
    effects : int
        Bit flags for extra effects, bit 0 is kiai time.
    """

    time: int
    beat_length: float
    meter: int
    sample_set: int
    sample_index: int
    volume: int
    inherited: bool
    effects: int

    @property
    def bpm(self) -> int | None:
        """The bpm of this timing point.

        If this is an inherited timing point this value will be None.
        """
        if self.inherited or self.beat_length <= 0:
            return None
        return round(60000 / self.beat_length)

    @property
    def kiai_mode(self) -> bool:
        """Whether or not kiai time effects are active."""
        return bool(self.effects & 1)

    @property
    def velocity_multiplier(self) -> float:
        """The slider velocity multiplier this timing point applies."""
        if self.inherited and self.beat_length < 0:
            return -100.0 / self.beat_length
        return 1.0

    @classmethod
    def parse(cls, data: str) -> "TimingPoint":
        """Parse a TimingPoint object from a line in a ``.osu`` file.

        Parameters
        ----------
        data : str
            The line to parse.

        Returns
        -------
        timing_point : TimingPoint
            The parsed timing point.

        Raises
        ------
        ParseError
            Raised when ``data`` does not describe a ``TimingPoint`` object.
        """
        try:
            time_raw, beat_length_raw, *rest = data.split(",")
        except ValueError:
            raise ParseError(f"failed to parse {cls.__qualname__} from {data!r}")

        return cls(
            # some maps written by old editors store fractional offsets
            time=int(_as_float("time", time_raw)),
            beat_length=_as_float("beat_length", beat_length_raw),
            meter=_as_int("meter", _get(rest, 0, "4")),
            sample_set=_as_int("sample_set", _get(rest, 1, "0")),
            sample_index=_as_int("sample_index", _get(rest, 2, "0")),
            volume=_as_int("volume", _get(rest, 3, "100")),
            inherited=_get(rest, 4, "1") != "1",
            effects=_as_int("effects", _get(rest, 5, "0")),
        )


class CurveType(str, Enum):
    """The kinds of slider curve."""

    bezier = "B"
    catmull = "C"
    linear = "L"
    perfect = "P"


class SliderCurve(NamedTuple):
    """The path and repeat data of a slider.

    Parameters
    ----------
    curve_type : CurveType
        How the control points are interpolated.
    points : tuple[Position]
        The control points, not including the slider head.
    repetitions : int
        How many times the slider is traversed, at least 1.
    length : float
        The length of the slider in osu! pixels.
    edge_sounds : tuple[int]
        The hitsound played on each edge.
    edge_sets : tuple[str]
        The sample sets used on each edge, in ``normal:addition`` form.
    """

    curve_type: CurveType
    points: Tuple[Position, ...]
    repetitions: int
    length: float
    edge_sounds: Tuple[int, ...]
    edge_sets: Tuple[str, ...]


class HitObject:
    """An abstract hit element.

    Parameters
    ----------
    time : int
        When this element appears in the map, in milliseconds.
    position : Position or None
        Where this element appears on the screen.
    hit_sample : str
        The sample information, kept as written in the file.
    """

    # must be set by subclasses
    type_code: ClassVar[int] = 0

    def __init__(
        self,
        time: int,
        position: Position | None,
        hit_sample: str = DEFAULT_HIT_SAMPLE,
    ) -> None:
        self.time = time
        self.position = position
        self.hit_sample = hit_sample

    def __repr__(self) -> str:
        return f"<{type(self).__qualname__}: {self.position}, {self.time}ms>"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HitObject):
            return NotImplemented
        return type(self) is type(other) and vars(self) == vars(other)

    @classmethod
    def parse(cls, data: str) -> "HitObject":
        """Parse a HitObject object from a line in a ``.osu`` file.

        Parameters
        ----------
        data : str
            The line to parse.

        Returns
        -------
        hit_objects : HitObject
            The parsed hit object. This will be the concrete subclass given
            the type.

        Raises
        ------
        ParseError
            Raised when ``data`` does not describe a ``HitObject`` object.
        """
        try:
            x_raw, y_raw, time_raw, type_raw, _, *rest = data.split(",")
        except ValueError:
            raise ParseError(f"not enough elements in line, got {data!r}")

        # old maps can have fractional coordinates, the game truncates them
        x = int(_as_float("x", x_raw))
        y = int(_as_float("y", y_raw))
        time = _as_int("time", time_raw)
        type_code = _as_int("type", type_raw)

        parser = _hit_object_parsers.get(type_code & _type_code_mask)
        if parser is None:
            raise ParseError(f"unknown type code {type_code!r} in {data!r}")

        return parser(Position(x, y), time, rest)


def _hit_sample(rest: Sequence[str]) -> str:
    if len(rest) > 1:
        raise ParseError(f"extra data: {list(rest)!r}")
    return rest[0] if rest else DEFAULT_HIT_SAMPLE


class Circle(HitObject):
    """A circle hit element.

    Parameters
    ----------
    time : int
        When this circle appears in the map.
    position : Position
        Where this circle appears on the screen.
    hit_sample : str
        The sample information.
    """

    type_code = 1

    @classmethod
    def _parse(cls, position: Position, time: int, rest: Sequence[str]) -> "Circle":
        return cls(time, position, _hit_sample(rest))


class Spinner(HitObject):
    """A spinner hit element. Spinners always sit in the middle of the
    playfield so no position is kept.

    Parameters
    ----------
    time : int
        When this spinner appears in the map.
    end_time : int
        When this spinner ends in the map.
    hit_sample : str
        The sample information.
    """

    type_code = 8

    def __init__(
        self,
        time: int,
        end_time: int,
        hit_sample: str = DEFAULT_HIT_SAMPLE,
    ) -> None:
        super().__init__(time, None, hit_sample)
        self.end_time = end_time

    @classmethod
    def _parse(cls, position: Position, time: int, rest: Sequence[str]) -> "Spinner":
        try:
            end_time_raw, *rest = rest
        except ValueError:
            raise ParseError("missing end_time")

        return cls(time, _as_int("end_time", end_time_raw), _hit_sample(rest))


class Slider(HitObject):
    """A slider hit element.

    Parameters
    ----------
    time : int
        When this slider appears in the map.
    position : Position
        Where this slider appears on the screen.
    curve : SliderCurve
        The path, repeat and edge data of the slider.
    hit_sample : str
        The sample information.
    """

    type_code = 2

    def __init__(
        self,
        time: int,
        position: Position,
        curve: SliderCurve,
        hit_sample: str = DEFAULT_HIT_SAMPLE,
    ) -> None:
        super().__init__(time, position, hit_sample)
        self.curve = curve

    @classmethod
    def _parse(
        cls,
        position: Position,
        time: int,
        rest: Sequence[str],
    ) -> Union["Slider", "InvalidHitObject"]:
        try:
            curve_raw = rest[0]
        except IndexError:
            raise ParseError(f"missing required slider data in {list(rest)!r}")

        curve_type_raw, *raw_points = curve_raw.split("|")
        try:
            curve_type = CurveType(curve_type_raw)
        except ValueError:
            raise ParseError(f"unknown curve type {curve_type_raw!r}")

        points = []
        for point in raw_points:
            try:
                x_str, y_str = point.split(":")
            except ValueError:
                raise ParseError(f"expected points in the form x:y, got {point!r}")

            points.append(Position(int(_as_float("x", x_str)), int(_as_float("y", y_str))))

        repetitions_raw = _get(rest, 1, "1")
        length_raw = _get(rest, 2, "0")
        try:
            repetitions = int(repetitions_raw)
            length = float(length_raw)
        except ValueError:
            repetitions = 0
            length = math.nan

        if repetitions < 1 or not math.isfinite(length):
            logging.warning(
                f"invalid slider at {time}ms: repetitions={repetitions_raw!r},"
                f" length={length_raw!r}",
            )
            return InvalidHitObject()

        edge_sounds_raw = _get(rest, 3, "")
        edge_sounds: Tuple[int, ...] = ()
        if edge_sounds_raw:
            edge_sounds = tuple(
                _as_int("edge_sound", edge_sound)
                for edge_sound in edge_sounds_raw.split("|")
            )

        edge_sets_raw = _get(rest, 4, "")
        edge_sets: Tuple[str, ...] = ()
        if edge_sets_raw:
            edge_sets = tuple(edge_sets_raw.split("|"))

        curve = SliderCurve(
            curve_type,
            tuple(points),
            repetitions,
            length,
            edge_sounds,
            edge_sets,
        )
        return cls(time, position, curve, _hit_sample(rest[5:]))


class HoldNote(HitObject):
    """A HoldNote hit element.

    Parameters
    ----------
    time : int
        When this HoldNote appears in the map.
    position : Position
        Where this HoldNote appears on the screen.

    Notes
    -----
    A ``HoldNote`` can only appear in an osu!mania map. Only the start of the
    note is read, the end time and samples are ignored.
    """

    type_code = 128

    @classmethod
    def _parse(cls, position: Position, time: int, rest: Sequence[str]) -> "HoldNote":
        return cls(time, position)


class InvalidHitObject(HitObject):
    """Stands in for a slider whose repeat count or length could not be read.

    It is never counted as a scoring object.
    """

    def __init__(self) -> None:
        pass

    def __repr__(self) -> str:
        return f"<{type(self).__qualname__}>"


_hit_object_parsers: Dict[int, Callable[[Position, int, Sequence[str]], HitObject]] = {
    Circle.type_code: Circle._parse,
    Slider.type_code: Slider._parse,
    Spinner.type_code: Spinner._parse,
    HoldNote.type_code: HoldNote._parse,
}
_type_code_mask = (
    Circle.type_code | Slider.type_code | Spinner.type_code | HoldNote.type_code
)


class ObjectCounts(NamedTuple):
    """How many of each scoring hit object a beatmap has."""

    circles: int = 0
    sliders: int = 0
    spinners: int = 0
    holds: int = 0

    @property
    def total(self) -> int:
        return self.circles + self.sliders + self.spinners + self.holds

    @classmethod
    def from_hit_objects(cls, hit_objects: Iterable[HitObject]) -> "ObjectCounts":
        counts = Counter(type(hit_object) for hit_object in hit_objects)
        return cls(
            circles=counts[Circle],
            sliders=counts[Slider],
            spinners=counts[Spinner],
            holds=counts[HoldNote],
        )


class General(NamedTuple):
    """The ``[General]`` section. Fields the file does not set and that have
    no default are ``None``.
    """

    audio_filename: str | None = None
    audio_lead_in: int | None = None
    preview_time: int | None = None
    countdown: int | None = None
    sample_set: str | None = None
    stack_leniency: float | None = None
    mode: int | None = None
    letterbox_in_breaks: bool | None = None
    use_skin_sprites: bool | None = None
    overlay_position: str | None = None
    skin_preference: str | None = None
    epilepsy_warning: bool | None = None
    countdown_offset: int | None = None
    special_style: bool | None = None
    widescreen_storyboard: bool | None = None
    samples_match_playback_rate: bool | None = None


class Editor(NamedTuple):
    """The ``[Editor]`` section."""

    bookmarks: str | None = None
    distance_spacing: float | None = None
    beat_divisor: int | None = None
    grid_size: int | None = None
    timeline_zoom: float | None = None


class Metadata(NamedTuple):
    """The ``[Metadata]`` section. Old beatmaps did not store the ids, these
    are -1 when missing.
    """

    title: str | None = None
    title_unicode: str | None = None
    artist: str | None = None
    artist_unicode: str | None = None
    creator: str | None = None
    version: str | None = None
    source: str | None = None
    tags: str | None = None
    beatmap_id: int | None = None
    beatmap_set_id: int | None = None


class DifficultyStats(NamedTuple):
    """The ``[Difficulty]`` section.

    Parameters
    ----------
    hp : float
        The HP drain rate.
    cs : float
        The circle size.
    od : float
        The overall difficulty.
    ar : float
        The approach rate.
    slider_multiplier : float
        The base slider velocity in hundreds of osu! pixels per beat.
    slider_tick_rate : float
        How many slider ticks are placed per beat.
    """

    hp: float = -1.0
    cs: float = -1.0
    od: float = -1.0
    ar: float = -1.0
    slider_multiplier: float = 1.4
    slider_tick_rate: float = 1.0


class _Field(NamedTuple):
    name: str
    kind: str
    default: Any = no_default


def _decode_bool(value: str) -> bool:
    return value == "1"


_decoders: Dict[str, Callable[[str], Any]] = {
    "string": str,
    "integer": int,
    "decimal": float,
    "boolean": _decode_bool,
}

_general_schema: Dict[str, _Field] = {
    "AudioFilename": _Field("audio_filename", "string"),
    "AudioLeadIn": _Field("audio_lead_in", "integer", 0),
    "PreviewTime": _Field("preview_time", "integer", -1),
    "Countdown": _Field("countdown", "integer", 1),
    "SampleSet": _Field("sample_set", "string", "Normal"),
    "StackLeniency": _Field("stack_leniency", "decimal", 0.7),
    "Mode": _Field("mode", "integer", 0),
    "LetterboxInBreaks": _Field("letterbox_in_breaks", "boolean", False),
    "UseSkinSprites": _Field("use_skin_sprites", "boolean", False),
    "OverlayPosition": _Field("overlay_position", "string", "NoChange"),
    "SkinPreference": _Field("skin_preference", "string", ""),
    "EpilepsyWarning": _Field("epilepsy_warning", "boolean", False),
    "CountdownOffset": _Field("countdown_offset", "integer", 0),
    "SpecialStyle": _Field("special_style", "boolean", False),
    "WidescreenStoryboard": _Field("widescreen_storyboard", "boolean", False),
    "SamplesMatchPlaybackRate": _Field(
        "samples_match_playback_rate",
        "boolean",
        False,
    ),
}

_editor_schema: Dict[str, _Field] = {
    "Bookmarks": _Field("bookmarks", "string", ""),
    "DistanceSpacing": _Field("distance_spacing", "decimal", 1.0),
    "BeatDivisor": _Field("beat_divisor", "integer", 4),
    "GridSize": _Field("grid_size", "integer", 4),
    "TimelineZoom": _Field("timeline_zoom", "decimal", 1.0),
}

_metadata_schema: Dict[str, _Field] = {
    "Title": _Field("title", "string"),
    "TitleUnicode": _Field("title_unicode", "string"),
    "Artist": _Field("artist", "string"),
    "ArtistUnicode": _Field("artist_unicode", "string"),
    "Creator": _Field("creator", "string"),
    "Version": _Field("version", "string"),
    "Source": _Field("source", "string"),
    "Tags": _Field("tags", "string"),
    "BeatmapID": _Field("beatmap_id", "integer", -1),
    "BeatmapSetID": _Field("beatmap_set_id", "integer", -1),
}

_difficulty_schema: Dict[str, _Field] = {
    "HPDrainRate": _Field("hp", "decimal", -1.0),
    "CircleSize": _Field("cs", "decimal", -1.0),
    "OverallDifficulty": _Field("od", "decimal", -1.0),
    "ApproachRate": _Field("ar", "decimal", -1.0),
    "SliderMultiplier": _Field("slider_multiplier", "decimal", 1.4),
    "SliderTickRate": _Field("slider_tick_rate", "decimal", 1.0),
}

# section name -> (record type, schema)
_mapping_sections: Dict[str, Tuple[Any, Mapping[str, _Field]]] = {
    "General": (General, _general_schema),
    "Editor": (Editor, _editor_schema),
    "Metadata": (Metadata, _metadata_schema),
    "Difficulty": (DifficultyStats, _difficulty_schema),
}


def _check_schema(record: Any, schema: Mapping[str, _Field]) -> None:
    names = [field.name for field in schema.values()]
    if sorted(names) != sorted(record._fields):
        raise TypeError(
            f"schema for {record.__name__} names {sorted(names)!r},"
            f" expected {sorted(record._fields)!r}",
        )

    for field in schema.values():
        if field.kind not in _decoders:
            raise TypeError(f"unknown field type {field.kind!r} for {field.name!r}")


for _record, _schema in _mapping_sections.values():
    _check_schema(_record, _schema)
del _record, _schema


def _parse_section(section: str, lines: Sequence[str]) -> Any:
    """Decode the ``Key: value`` lines of a mapping section into its record.

    Parameters
    ----------
    section : str
        The name of the section.
    lines : list[str]
        The lines in the section.

    Returns
    -------
    record : NamedTuple
        The section record. Keys the file omits take the schema default, or
        ``None`` when there is no default.

    Raises
    ------
    UnknownKeyError
        Raised when a key is not in the section's schema.
    ParseError
        Raised when a value cannot be decoded as the schema's type.
    """
    record, schema = _mapping_sections[section]

    values = {
        field.name: field.default
        for field in schema.values()
        if field.default is not no_default
    }

    for line in lines:
        key, _, value = line.partition(":")
        key = key.strip()
        value = value.strip()

        try:
            field = schema[key]
        except KeyError:
            raise UnknownKeyError(section, key)

        try:
            values[field.name] = _decoders[field.kind](value)
        except ValueError:
            raise ParseError(
                f"field {key!r} in section {section!r} should be"
                f" {field.kind}, got {value!r}",
            )

    return record(**values)


class Beatmap:
    """A parsed ``.osu`` beatmap.

    Parameters
    ----------
    mode : GameMode
        The game mode.
    format_version : int
        The version of the beatmap file.
    general : General
        The ``[General]`` settings.
    editor : Editor
        The ``[Editor]`` settings.
    metadata : Metadata
        The ``[Metadata]`` information.
    stats : DifficultyStats
        The difficulty stats as written in the file, with the approach rate
        filled in for old maps.
    timing_points : list[TimingPoint]
        The timing points in the map, in file order.
    hit_objects : list[HitObject]
        The hit objects in the map, in file order.
    combo_colors : list[tuple[int, int, int]]
        The combo colors from the ``[Colours]`` section.
    """

    _version_regex = re.compile(r"format v", re.IGNORECASE)

    _sections = frozenset(
        {
            "General",
            "Editor",
            "Metadata",
            "Difficulty",
            "Events",
            "TimingPoints",
            "Colours",
            "HitObjects",
        }
    )

    def __init__(
        self,
        *,
        mode: GameMode,
        format_version: int,
        general: General,
        editor: Editor,
        metadata: Metadata,
        stats: DifficultyStats,
        timing_points: Sequence[TimingPoint],
        hit_objects: Sequence[HitObject],
        combo_colors: Sequence[ColorTuple] = (),
    ) -> None:
        self.mode = mode
        self.format_version = format_version
        self.general = general
        self.editor = editor
        self.metadata = metadata
        self.stats = stats
        self.timing_points = tuple(timing_points)
        self.hit_objects = tuple(hit_objects)
        self.combo_colors = tuple(combo_colors)
        self.object_counts = ObjectCounts.from_hit_objects(self.hit_objects)
        self.beatmap_id = metadata.beatmap_id
        self.beatmap_set_id = metadata.beatmap_set_id

    @property
    def display_name(self) -> str:
        """The name of the map as it appears in game."""
        metadata = self.metadata
        return f"{metadata.artist} - {metadata.title} [{metadata.version}]"

    @lazyval
    def bookmarks(self) -> List[int]:
        """The editor bookmark times in milliseconds."""
        raw = self.editor.bookmarks or ""
        return [_as_int("bookmark", part.strip()) for part in raw.split(",") if part.strip()]

    @lazyval
    def _bpms(self) -> Tuple[int, ...]:
        return tuple(p.bpm for p in self.timing_points if p.bpm)

    def bpm_min(self, mods: Mod = Mod.no_mod) -> float | None:
        """The minimum BPM in this beatmap.

        Parameters
        ----------
        mods : Mod
            Speed changing mods scale the BPM.

        Returns
        -------
        bpm : float or None
            The minimum BPM in this beatmap, or None if the map has no
            uninherited timing point.
        """
        if not self._bpms:
            return None
        bpm = float(min(self._bpms))
        return bpm * speed_multiplier(mods)

    def bpm_max(self, mods: Mod = Mod.no_mod) -> float | None:
        """The maximum BPM in this beatmap.

        Parameters
        ----------
        mods : Mod
            Speed changing mods scale the BPM.

        Returns
        -------
        bpm : float or None
            The maximum BPM in this beatmap, or None if the map has no
            uninherited timing point.
        """
        if not self._bpms:
            return None
        bpm = float(max(self._bpms))
        return bpm * speed_multiplier(mods)

    def timing_point_at(self, time: int) -> TimingPoint | None:
        """Get the :class:`ezpp.beatmap.TimingPoint` in effect at ``time``.

        This is the point just before the first timing point that starts
        strictly after ``time``, or the last point when none start after it.
        Timing points are searched in file order.

        Parameters
        ----------
        time : int
            The time in milliseconds.

        Returns
        -------
        timing_point : TimingPoint or None
            The governing timing point, or None if ``time`` comes before every
            timing point.
        """
        governing = None
        for timing_point in self.timing_points:
            if timing_point.time > time:
                break
            governing = timing_point

        return governing

    def __repr__(self) -> str:
        return f"<{type(self).__qualname__}: {self.display_name}>"

    _fields = (
        "mode",
        "format_version",
        "general",
        "editor",
        "metadata",
        "stats",
        "timing_points",
        "hit_objects",
        "combo_colors",
    )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Beatmap):
            return NotImplemented
        return all(
            getattr(self, name) == getattr(other, name)
            for name in self._fields
        )

    @classmethod
    def _find_groups(cls, lines: Iterable[str]) -> GroupsMapping:
        """Split the input data into the named groups.

        Parameters
        ----------
        lines : iterator[str]
            The filtered, stripped lines from the file.

        Returns
        -------
        groups : dict[str, list[str]]
            The lines in each known section. Lines before the first section
            header or inside an unknown section are dropped.
        """
        groups: GroupsMapping = {}
        current_group: List[str] | None = None

        for line in lines:
            if line[0] == "[" and line[-1] == "]":
                name = line[1:-1]
                if name in cls._sections:
                    current_group = groups.setdefault(name, [])
                else:
                    logging.debug(f"skipping unknown section {name!r}")
                    current_group = None
            elif current_group is not None:
                current_group.append(line)

        return groups

    @staticmethod
    def _parse_combo_colors(lines: Sequence[str]) -> List[ColorTuple]:
        """Parse the combo colors from the ``[Colours]`` section.

        Parameters
        ----------
        lines : list[str]
            The lines in the ``[Colours]`` section.

        Returns
        -------
        combo_colors : list[tuple[int, int, int]]
            The combo colors from the ``[Colours]`` section.

        Raises
        ------
        ParseError
            Raised when the combo colors cannot be parsed.
        """
        combo_color_map: Dict[int, ColorTuple] = {}
        for line in lines:
            key, _, value = line.partition(":")
            key = key.strip()

            if not key.startswith("Combo"):
                continue

            try:
                combo_index = int(key[5:])
            except ValueError:
                continue

            rgb = [part.strip() for part in value.split(",")]
            if len(rgb) != 3:
                raise ParseError(
                    f"invalid color value for {key!r}: expected 3 channels,"
                    f" got {value!r}",
                )

            try:
                color = cast(ColorTuple, tuple(map(int, rgb)))
            except ValueError:
                raise ParseError(f"invalid color value for {key!r}: {value!r}")

            combo_color_map[combo_index] = color

        return [combo_color_map[index] for index in sorted(combo_color_map)]

    @classmethod
    def parse(cls, data: str) -> "Beatmap":
        """Parse a ``Beatmap`` from text in the ``.osu`` format.

        Parameters
        ----------
        data : str
            The data to parse.

        Returns
        -------
        beatmap : Beatmap
            The parsed beatmap object.

        Raises
        ------
        ParseError
            Raised when the data cannot be parsed in the ``.osu`` format.
        """
        data = data.removeprefix("\ufeff")

        # indented and underscore prefixed lines are storyboard commands
        lines = [
            line.strip()
            for line in data.split("\n")
            if line.strip() and not line.startswith((" ", "_", "//"))
        ]

        format_version = 1
        if lines and cls._version_regex.search(lines[0]):
            header = lines.pop(0)
            digits = re.sub(r"\D", "", header)
            if not digits:
                raise ParseError(f"malformed osu file format specifier: {header!r}")
            format_version = int(digits)

        groups = cls._find_groups(lines)

        general = _parse_section("General", groups.get("General", []))
        editor = _parse_section("Editor", groups.get("Editor", []))
        metadata = _parse_section("Metadata", groups.get("Metadata", []))
        stats = _parse_section("Difficulty", groups.get("Difficulty", []))

        if stats.ar < 0:
            # old maps didn't have an AR so the OD is used instead
            stats = stats._replace(ar=stats.od)

        try:
            mode = GameMode(general.mode)
        except ValueError:
            raise ParseError(f"unknown game mode {general.mode!r}")

        return cls(
            mode=mode,
            format_version=format_version,
            general=general,
            editor=editor,
            metadata=metadata,
            stats=stats,
            timing_points=[
                TimingPoint.parse(line) for line in groups.get("TimingPoints", [])
            ],
            hit_objects=[
                HitObject.parse(line) for line in groups.get("HitObjects", [])
            ],
            combo_colors=cls._parse_combo_colors(groups.get("Colours", [])),
        )


def parse(data: str) -> Beatmap:
    """Parse a ``Beatmap`` from text in the ``.osu`` format."""
    return Beatmap.parse(data)
