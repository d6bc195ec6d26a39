from .common import CalculationOptions, CalculationResult, HitCounts

__all__ = [
    "CalculationOptions",
    "CalculationResult",
    "HitCounts",
]
