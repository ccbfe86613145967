"""
Role Arbiter - leader or assistant, decided fresh every tick.

The weaker twin supports the stronger one. An agent only steps back to
assistant when it has recent evidence that its teammate is alive, healthier
and already advertising a goal; without that evidence it leads.
"""

from enum import Enum
from typing import Optional

from ..config import Settings, get_settings
from .geometry import Point
from .observation_history import ObservationHistory


class Role(Enum):
    """Per-tick team role."""
    LEADER = "leader"
    ASSISTANT = "assistant"


class RoleArbiter:
    """Stateless role rule over teammate history and goal."""

    def __init__(self, settings: Optional[Settings] = None):
        settings = settings or get_settings()
        self.freshness_window = settings.freshness_window_ticks

    def is_assistant(
        self,
        teammate: ObservationHistory,
        goal: Optional[Point],
        own_energy: float,
        current_tick: int
    ) -> bool:
        mate = teammate.latest()
        if mate is None or goal is None:
            return False
        if not own_energy < mate.energy:
            return False
        return current_tick - mate.tick < self.freshness_window

    def decide(
        self,
        teammate: ObservationHistory,
        goal: Optional[Point],
        own_energy: float,
        current_tick: int
    ) -> Role:
        if self.is_assistant(teammate, goal, own_energy, current_tick):
            return Role.ASSISTANT
        return Role.LEADER
