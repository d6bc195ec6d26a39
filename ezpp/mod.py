from __future__ import annotations

from enum import IntFlag

import numpy as np


class Mod(IntFlag):
    """The mods in osu!, stored as the bits of the ``mods`` field of a score."""

    no_mod = 0
    no_fail = 1 << 0
    easy = 1 << 1
    touch_device = 1 << 2
    hidden = 1 << 3
    hard_rock = 1 << 4
    sudden_death = 1 << 5
    double_time = 1 << 6
    relax = 1 << 7
    half_time = 1 << 8
    nightcore = 1 << 9
    flashlight = 1 << 10
    autoplay = 1 << 11
    spun_out = 1 << 12
    autopilot = 1 << 13
    perfect = 1 << 14

    # composite masks
    changes_speed = double_time | half_time | nightcore
    changes_difficulty = hard_rock | easy | changes_speed

    @classmethod
    def parse(cls, value: str) -> "Mod":
        """Parse a mod mask out of a string of mod abbreviations.

        Parameters
        ----------
        value : str
            The mod abbreviations, for example ``"HDHR"``. ``"NM"`` and the
            empty string mean no mod. Case insensitive.

        Returns
        -------
        mods : Mod
            The combined mod flags.

        Raises
        ------
        ValueError
            Raised when ``value`` contains an unknown abbreviation.
        """
        if len(value) % 2:
            raise ValueError(f"mod string must be pairs of letters, got {value!r}")

        mods = cls.no_mod
        for i in range(0, len(value), 2):
            abbreviation = value[i:i + 2].upper()
            try:
                mods |= _abbreviations[abbreviation]
            except KeyError:
                raise ValueError(f"unknown mod {abbreviation!r} in {value!r}")
        return mods


_abbreviations = {
    "NM": Mod.no_mod,
    "NF": Mod.no_fail,
    "EZ": Mod.easy,
    "TD": Mod.touch_device,
    "HD": Mod.hidden,
    "HR": Mod.hard_rock,
    "SD": Mod.sudden_death,
    "DT": Mod.double_time,
    "RX": Mod.relax,
    "HT": Mod.half_time,
    "NC": Mod.nightcore,
    "FL": Mod.flashlight,
    "AT": Mod.autoplay,
    "SO": Mod.spun_out,
    "AP": Mod.autopilot,
    "PF": Mod.perfect,
}


def difficulty_multiplier(mods: int) -> float:
    """The factor hard rock or easy apply to the raw difficulty stats."""
    if mods & Mod.hard_rock:
        return 1.4
    if mods & Mod.easy:
        return 0.5
    return 1.0


def speed_multiplier(mods: int) -> float:
    """The playback rate of the song under ``mods``."""
    if mods & (Mod.double_time | Mod.nightcore):
        return 1.5
    if mods & Mod.half_time:
        return 0.75
    return 1.0


OD0_MS = 80.0
OD10_MS = 20.0
AR0_MS = 1800.0
AR5_MS = 1200.0
AR10_MS = 450.0

OD_MS_STEP = (OD0_MS - OD10_MS) / 10.0
AR_MS_STEP1 = (AR0_MS - AR5_MS) / 5.0
AR_MS_STEP2 = (AR5_MS - AR10_MS) / 5.0


def ar_to_ms(ar: float) -> float:
    """Convert an approach rate into the preempt time in milliseconds.

    Parameters
    ----------
    ar : float
        The approach rate.

    Returns
    -------
    milliseconds : float
        How long before its hit time a hit object appears.
    """
    if ar < 5:
        return AR0_MS - AR_MS_STEP1 * ar
    return AR5_MS - AR_MS_STEP2 * (ar - 5)


def ms_to_ar(ms: float) -> float:
    """Convert a preempt time in milliseconds back into an approach rate.

    Parameters
    ----------
    ms : float
        How long before its hit time a hit object appears.

    Returns
    -------
    ar : float
        The approach rate.
    """
    if ms > AR5_MS:
        return (AR0_MS - ms) / AR_MS_STEP1
    return 5 + (AR5_MS - ms) / AR_MS_STEP2


def od_to_ms(od: float) -> float:
    """Convert an overall difficulty into the 300 hit window in milliseconds.

    Parameters
    ----------
    od : float
        The overall difficulty.

    Returns
    -------
    milliseconds : float
        The 300 hit window.

    Notes
    -----
    The step is rounded up before it is subtracted, :func:`ms_to_od` does not
    undo this rounding.
    """
    return OD0_MS - float(np.ceil(OD_MS_STEP * od))


def ms_to_od(ms: float) -> float:
    """Convert a 300 hit window in milliseconds into an overall difficulty.

    Parameters
    ----------
    ms : float
        The 300 hit window.

    Returns
    -------
    od : float
        The overall difficulty.
    """
    return (OD0_MS - ms) / OD_MS_STEP
