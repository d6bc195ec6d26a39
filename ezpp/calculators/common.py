from __future__ import annotations

from typing import NamedTuple

from ..beatmap import DifficultyStats
from ..mod import Mod


class CalculationOptions(NamedTuple):
    """A summary of a play to calculate for.

    Parameters
    ----------
    mods : int
        The mods the play was made with.
    accuracy : float
        The accuracy in the range [0, 100].
    misses : int
        The number of misses.
    combo : int, optional
        The highest combo reached. Defaults to the max combo of the map.
    """

    mods: int = Mod.no_mod
    accuracy: float = 100.0
    misses: int = 0
    combo: int | None = None


class HitCounts(NamedTuple):
    """The judgements of a play."""

    n300: int
    n100: int
    n50: int
    misses: int


class CalculationResult(NamedTuple):
    """The values a performance formula needs for a play.

    Parameters
    ----------
    stats : DifficultyStats
        The difficulty stats with the mods applied.
    hit_counts : HitCounts
        The judgements reconstructed from the accuracy.
    max_combo : int
        The max combo of the map.
    combo : int
        The combo of the play.
    """

    stats: DifficultyStats
    hit_counts: HitCounts
    max_combo: int
    combo: int
