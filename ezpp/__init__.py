from .beatmap import (
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
    SliderCurve,
    Spinner,
    TimingPoint,
    parse,
)
from .calculate import calculate
from .calculators import CalculationOptions, CalculationResult, HitCounts
from .calculators.standard import max_combo, reconstruct_hit_counts
from .difficulty import effective_stats
from .errors import InvalidInputError, ParseError, UnknownKeyError, UnsupportedModeError
from .game_mode import GameMode
from .mod import Mod
from .position import Position

__version__ = "0.1.0"

__all__ = [
    "Beatmap",
    "CalculationOptions",
    "CalculationResult",
    "Circle",
    "CurveType",
    "DifficultyStats",
    "Editor",
    "GameMode",
    "General",
    "HitCounts",
    "HitObject",
    "HoldNote",
    "InvalidHitObject",
    "InvalidInputError",
    "Metadata",
    "Mod",
    "ObjectCounts",
    "ParseError",
    "Position",
    "Slider",
    "SliderCurve",
    "Spinner",
    "TimingPoint",
    "UnknownKeyError",
    "UnsupportedModeError",
    "calculate",
    "effective_stats",
    "max_combo",
    "parse",
    "reconstruct_hit_counts",
]
