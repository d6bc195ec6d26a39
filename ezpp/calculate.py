from __future__ import annotations

from typing import Callable, Dict

from .beatmap import Beatmap
from .calculators import standard
from .calculators.common import CalculationOptions, CalculationResult
from .errors import UnsupportedModeError
from .game_mode import GameMode


_calculators: Dict[GameMode, Callable[[Beatmap, CalculationOptions], CalculationResult]] = {
    GameMode.standard: standard.calculate,
}


def calculate(
    beatmap: Beatmap,
    options: CalculationOptions | None = None,
) -> CalculationResult:
    """Run the calculator for the beatmap's game mode.

    Parameters
    ----------
    beatmap : Beatmap
        The beatmap the play was made on.
    options : CalculationOptions, optional
        The play summary. Defaults to a no mod SS.

    Returns
    -------
    result : CalculationResult
        The result of the calculation.

    Raises
    ------
    UnsupportedModeError
        Raised when there is no calculator for the beatmap's game mode.
    """
    try:
        calculator = _calculators[beatmap.mode]
    except KeyError:
        raise UnsupportedModeError(
            f"calculations are not implemented for {beatmap.mode.name} beatmaps",
        )

    if options is None:
        options = CalculationOptions()
    return calculator(beatmap, options)
