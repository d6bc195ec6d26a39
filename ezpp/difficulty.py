from __future__ import annotations

import numpy as np

from .beatmap import DifficultyStats
from .mod import (
    AR0_MS,
    AR10_MS,
    OD0_MS,
    OD10_MS,
    Mod,
    ar_to_ms,
    difficulty_multiplier,
    ms_to_ar,
    ms_to_od,
    od_to_ms,
    speed_multiplier,
)


def circle_size(cs: float, mods: int) -> float:
    """Compute the Circle Size (CS) value for different mods."""
    if mods & Mod.hard_rock:
        return min(cs * 1.3, 10.0)
    if mods & Mod.easy:
        return cs * 0.5
    return cs


def hp_drain_rate(hp: float, mods: int) -> float:
    """Compute the Health Drain (HP) value for different mods."""
    return min(hp * difficulty_multiplier(mods), 10.0)


def approach_rate(ar: float, mods: int) -> float:
    """Compute the effective Approach Rate (AR) value for different mods.

    Parameters
    ----------
    ar : float
        The approach rate from the beatmap.
    mods : int
        The active mods.

    Returns
    -------
    ar : float
        The effective AR value.

    Notes
    -----
    ``double_time`` and ``half_time`` do not actually affect the in game
    AR; however, because the map is sped up or slowed down, the effective
    approach rate is changed. The result can leave the [0, 10] range, for
    example double time takes AR 10 to 11.
    """
    ms = float(np.clip(ar_to_ms(ar * difficulty_multiplier(mods)), AR10_MS, AR0_MS))
    return ms_to_ar(ms / speed_multiplier(mods))


def overall_difficulty(od: float, mods: int) -> float:
    """Compute the effective Overall Difficulty (OD) value for different mods.

    Parameters
    ----------
    od : float
        The overall difficulty from the beatmap.
    mods : int
        The active mods.

    Returns
    -------
    od : float
        The effective OD value.
    """
    ms = float(np.clip(od_to_ms(od * difficulty_multiplier(mods)), OD10_MS, OD0_MS))
    return ms_to_od(ms / speed_multiplier(mods))


def effective_stats(stats: DifficultyStats, mods: int) -> DifficultyStats:
    """The difficulty stats of a beatmap as they play with ``mods`` enabled.

    Parameters
    ----------
    stats : DifficultyStats
        The stats from the beatmap.
    mods : int
        The active mods.

    Returns
    -------
    stats : DifficultyStats
        The adjusted stats. When no mod in ``Mod.changes_difficulty`` is set
        ``stats`` itself is returned.
    """
    if not mods & Mod.changes_difficulty:
        return stats

    return stats._replace(
        hp=hp_drain_rate(stats.hp, mods),
        cs=circle_size(stats.cs, mods),
        od=overall_difficulty(stats.od, mods),
        ar=approach_rate(stats.ar, mods),
    )
