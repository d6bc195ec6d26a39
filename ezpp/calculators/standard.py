from __future__ import annotations

import math

import numpy as np

from ..beatmap import Beatmap, Circle, Slider, Spinner
from ..difficulty import effective_stats
from ..errors import InvalidInputError, UnsupportedModeError
from ..game_mode import GameMode
from ..utils import accuracy as hit_accuracy, round_half_away
from .common import CalculationOptions, CalculationResult, HitCounts


# keeps floating point noise like 2.000000001 beats from adding a tick
SLIDER_TICK_EPSILON = 0.01


def _check_standard(beatmap: Beatmap) -> None:
    if beatmap.mode is not GameMode.standard:
        raise UnsupportedModeError(
            f"calculations are not implemented for {beatmap.mode.name} beatmaps",
        )


def reconstruct_hit_counts(
    accuracy: float,
    misses: int,
    object_count: int,
) -> HitCounts:
    """Reconstruct the judgements of a play from its accuracy.

    Parameters
    ----------
    accuracy : float
        The accuracy in the range [0, 100]. Values above the highest accuracy
        reachable with ``misses`` misses are clamped down.
    misses : int
        The number of misses.
    object_count : int
        The number of scoring hit objects in the map.

    Returns
    -------
    hit_counts : HitCounts
        The judgements. Plays are assumed to be made of 300s and either 100s
        or, when 100s alone cannot go as low as ``accuracy``, 50s.

    Raises
    ------
    InvalidInputError
        Raised when ``accuracy`` is outside [0, 100] or ``misses`` is negative
        or more than ``object_count``.
    """
    if not 0 <= accuracy <= 100:
        raise InvalidInputError(
            f"accuracy should be in the range [0, 100], got {accuracy!r}",
        )
    if misses < 0:
        raise InvalidInputError(f"misses should not be negative, got {misses!r}")
    if misses > object_count:
        raise InvalidInputError(
            f"misses ({misses!r}) should not exceed the object count"
            f" ({object_count!r})",
        )

    if misses == object_count:
        return HitCounts(0, 0, 0, misses)

    max_300 = object_count - misses
    max_accuracy = hit_accuracy(max_300, 0, 0, misses) * 100.0
    clamped_accuracy = max(0.0, min(max_accuracy, accuracy))

    count_100 = round_half_away(
        -3.0 * ((clamped_accuracy * 0.01 - 1.0) * object_count + misses) * 0.5,
    )

    if count_100 > max_300:
        count_50 = round_half_away(
            -6.0 * ((accuracy * 0.01 - 1.0) * object_count + misses) * 0.2,
        )
        count_50 = min(max_300, count_50)
        return HitCounts(max_300 - count_50, 0, count_50, misses)

    return HitCounts(max_300 - count_100, count_100, 0, misses)


def slider_combo(slider: Slider, beatmap: Beatmap) -> int:
    """The combo a slider is worth: its head, ticks, repeats and tail.

    Parameters
    ----------
    slider : Slider
        The slider.
    beatmap : Beatmap
        The beatmap the slider belongs to.

    Returns
    -------
    combo : int
        The combo the slider gives. This is 0 when the slider has no
        velocity, which is always the case for beatmaps older than v8.
    """
    velocity_multiplier = 0.0
    if beatmap.format_version >= 8:
        timing_point = beatmap.timing_point_at(slider.time)
        if timing_point is not None:
            velocity_multiplier = timing_point.velocity_multiplier

    stats = beatmap.stats
    pixels_per_beat = stats.slider_multiplier * 100.0 * velocity_multiplier
    if pixels_per_beat == 0:
        return 0

    repetitions = slider.curve.repetitions
    num_beats = (slider.curve.length * repetitions) / pixels_per_beat
    if not math.isfinite(num_beats):
        return 0

    ticks = np.ceil(
        (num_beats - SLIDER_TICK_EPSILON) / repetitions * stats.slider_tick_rate - 1,
    )
    return int(ticks) * repetitions + repetitions + 1


def max_combo(beatmap: Beatmap) -> int:
    """The highest combo that can be achieved on a beatmap.

    Parameters
    ----------
    beatmap : Beatmap
        An osu!standard beatmap.

    Returns
    -------
    max_combo : int
        The max combo. Hold notes and invalid hit objects are worth nothing.

    Raises
    ------
    UnsupportedModeError
        Raised when ``beatmap`` is not an osu!standard beatmap.
    """
    _check_standard(beatmap)

    combo = 0
    for hit_object in beatmap.hit_objects:
        if isinstance(hit_object, Slider):
            combo += max(slider_combo(hit_object, beatmap), 0)
        elif isinstance(hit_object, (Circle, Spinner)):
            combo += 1

    return combo


def calculate(beatmap: Beatmap, options: CalculationOptions) -> CalculationResult:
    """Derive everything a performance formula needs from a play summary.

    Parameters
    ----------
    beatmap : Beatmap
        An osu!standard beatmap.
    options : CalculationOptions
        The mods, accuracy, misses and combo of the play.

    Returns
    -------
    result : CalculationResult
        The mod adjusted stats, reconstructed hit counts and combos.

    Raises
    ------
    UnsupportedModeError
        Raised when ``beatmap`` is not an osu!standard beatmap.
    InvalidInputError
        Raised when the play summary is out of range.
    """
    _check_standard(beatmap)

    beatmap_max_combo = max_combo(beatmap)
    combo = beatmap_max_combo if options.combo is None else options.combo
    if combo < 0:
        raise InvalidInputError(f"combo should not be negative, got {combo!r}")

    return CalculationResult(
        stats=effective_stats(beatmap.stats, options.mods),
        hit_counts=reconstruct_hit_counts(
            options.accuracy,
            options.misses,
            beatmap.object_counts.total,
        ),
        max_combo=beatmap_max_combo,
        combo=combo,
    )
