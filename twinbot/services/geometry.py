"""Arena geometry helpers.

Coordinates follow the arena convention: heading 0 points along +y and
angles grow clockwise, so a unit vector for heading h is (sin h, cos h).
"""

import math
from dataclasses import dataclass
from typing import Tuple

import numpy as np


@dataclass(frozen=True)
class Point:
    """Immutable 2D position."""
    x: float
    y: float

    def distance(self, other: 'Point') -> float:
        return math.hypot(self.x - other.x, self.y - other.y)

    def as_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def as_array(self) -> np.ndarray:
        return np.array([self.x, self.y], dtype=float)

    @classmethod
    def from_array(cls, arr: np.ndarray) -> 'Point':
        return cls(float(arr[0]), float(arr[1]))


def normal_relative_angle(angle: float) -> float:
    """Normalize an angle to [-pi, pi)."""
    return (angle + math.pi) % (2 * math.pi) - math.pi


def project(origin: Point, absolute_bearing: float, distance: float) -> Point:
    """Point reached from origin travelling distance along absolute_bearing."""
    return Point(
        origin.x + math.sin(absolute_bearing) * distance,
        origin.y + math.cos(absolute_bearing) * distance,
    )


def interpolate(start: Point, end: Point, fraction: float) -> Point:
    """Linear interpolation, fraction 0 -> start, 1 -> end."""
    return Point(
        (1 - fraction) * start.x + fraction * end.x,
        (1 - fraction) * start.y + fraction * end.y,
    )


def clamp_to_arena(
    target: Point,
    arena_width: float,
    arena_height: float,
    margin: float
) -> Point:
    """Clamp a point into the arena interior, margin away from every wall.

    If the arena is narrower than two margins the axis collapses onto
    its upper bound, matching a min(max(...)) clamp.
    """
    low = np.array([margin, margin])
    high = np.array([arena_width - margin, arena_height - margin])
    clamped = np.minimum(np.maximum(low, target.as_array()), high)
    return Point.from_array(clamped)
