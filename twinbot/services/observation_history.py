"""
Observation History - bounded per-robot sample log.

Each agent keeps one history for its teammate and one for the opponent.
Samples arrive from local scans and from teammate reports, so the same
sample can show up twice or late. Only strictly newer ticks are kept,
which makes merging replayed or reordered reports harmless.
"""

import logging
from collections import deque
from dataclasses import dataclass
from typing import Deque, Optional, Tuple

from .geometry import Point

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Sample:
    """State of a robot at one tick."""
    x: float
    y: float
    energy: float
    tick: int
    heading: Optional[float] = None  # Radians, absent for self reports

    def __post_init__(self):
        if self.energy < 0:
            raise ValueError(f"energy must be non-negative, got {self.energy}")

    @property
    def position(self) -> Point:
        return Point(self.x, self.y)


class ObservationHistory:
    """Most-recent-first ring of samples with a fixed capacity."""

    DEFAULT_CAPACITY = 8

    def __init__(self, capacity: int = DEFAULT_CAPACITY, label: str = "robot"):
        if capacity < 1:
            raise ValueError(f"capacity must be positive, got {capacity}")
        self.capacity = capacity
        self.label = label
        # appendleft + maxlen drops from the right, i.e. the oldest sample
        self._samples: Deque[Sample] = deque(maxlen=capacity)

    def record(self, sample: Sample) -> bool:
        """
        Insert a sample at the front.

        Returns False without touching the history if the head is already
        at or past sample.tick.
        """
        head = self.latest()
        if head is not None and sample.tick <= head.tick:
            logger.debug(
                f"Rejected stale {self.label} sample: tick {sample.tick} <= head {head.tick}"
            )
            return False
        self._samples.appendleft(sample)
        return True

    def latest(self) -> Optional[Sample]:
        return self._samples[0] if self._samples else None

    def previous(self) -> Optional[Sample]:
        return self._samples[1] if len(self._samples) > 1 else None

    def samples(self) -> Tuple[Sample, ...]:
        """All samples, newest first."""
        return tuple(self._samples)

    def age(self, current_tick: int) -> Optional[int]:
        """Ticks since the newest sample, None when empty."""
        head = self.latest()
        if head is None:
            return None
        return current_tick - head.tick

    @property
    def is_empty(self) -> bool:
        return not self._samples

    def __len__(self) -> int:
        return len(self._samples)
