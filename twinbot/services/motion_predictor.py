"""
Motion Predictor - linear and circular extrapolation of the opponent.

=== MODEL ===

From the two most recent samples:
- angular rate = heading change between them (normalized)
- speed        = squared distance / tick gap

The speed term is not the Euclidean speed. It is the estimate the team has
always fired with, and both teammates must agree on it, so it stays.

If |angular rate| exceeds angular_rate_threshold the robot is assumed to
drive a circle of radius speed / rate; the latest position is rotated
around the implied centre by rate * ticks. Otherwise it keeps its heading
and moves speed * ticks along it.

=== FALLBACKS ===

- Empty history: None
- One sample, or a sample without heading: latest position unchanged
"""

import math
from typing import Optional

from ..config import Settings, get_settings
from .geometry import Point, normal_relative_angle
from .observation_history import ObservationHistory, Sample


class MotionPredictor:
    """Deterministic two-sample extrapolation."""

    def __init__(self, settings: Optional[Settings] = None):
        settings = settings or get_settings()
        self.angular_rate_threshold = settings.angular_rate_threshold

    @staticmethod
    def angular_rate(latest: Sample, previous: Sample) -> float:
        return normal_relative_angle(latest.heading - previous.heading)

    @staticmethod
    def speed(latest: Sample, previous: Sample) -> float:
        gap = latest.tick - previous.tick
        dx = latest.x - previous.x
        dy = latest.y - previous.y
        return (dx * dx + dy * dy) / gap

    def predict(self, history: ObservationHistory, tick: int) -> Optional[Point]:
        """Predicted position at the given tick."""
        latest = history.latest()
        if latest is None:
            return None

        previous = history.previous()
        if previous is None or latest.heading is None or previous.heading is None:
            return latest.position

        rate = self.angular_rate(latest, previous)
        speed = self.speed(latest, previous)
        delta = tick - latest.tick

        if abs(rate) > self.angular_rate_threshold:
            return self._circular(latest, speed, rate, delta)
        return self._linear(latest, speed, delta)

    @staticmethod
    def _linear(latest: Sample, speed: float, delta: int) -> Point:
        travel = speed * delta
        return Point(
            latest.x + math.sin(latest.heading) * travel,
            latest.y + math.cos(latest.heading) * travel,
        )

    @staticmethod
    def _circular(latest: Sample, speed: float, rate: float, delta: int) -> Point:
        radius = speed / rate
        heading = latest.heading
        turned = heading + rate * delta
        # Centre sits at (x + r cos h, y - r sin h)
        return Point(
            latest.x + radius * (math.cos(heading) - math.cos(turned)),
            latest.y + radius * (math.sin(turned) - math.sin(heading)),
        )
