from __future__ import annotations

from typing import NamedTuple

import numpy as np


class Position(NamedTuple):
    """A position on the osu! screen.

    Parameters
    ----------
    x : int or float
        The x coordinate in the range.
    y : int or float
        The y coordinate in the range.

    Notes
    -----
    The visible region of the osu! standard playfield is [0, 512] by [0, 384].
    Positions may fall outside of this range for slider curve control points.
    """

    x: float
    y: float

    def add(self, other: "Position") -> "Position":
        return Position(self.x + other.x, self.y + other.y)

    def sub(self, other: "Position") -> "Position":
        return Position(self.x - other.x, self.y - other.y)

    def dot(self, other: "Position") -> float:
        return self.x * other.x + self.y * other.y

    def scale(self, scalar: float) -> "Position":
        return Position(self.x * scalar, self.y * scalar)

    def entrywise_product(self, other: "Position") -> "Position":
        """Multiply the coordinates pairwise, e.g. to stretch a position
        into a differently sized playfield.
        """
        return Position(self.x * other.x, self.y * other.y)


def distance(start: Position, end: Position) -> float:
    return float(np.sqrt((start.x - end.x) ** 2 + (start.y - end.y) ** 2))
