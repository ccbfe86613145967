"""Per-agent world view: teammate and opponent histories plus the team goal."""

from dataclasses import dataclass, field
from typing import Optional

from ..config import Settings, get_settings
from .geometry import Point
from .observation_history import ObservationHistory


@dataclass(frozen=True)
class Goal:
    """Rally/flank point advertised by the teammate."""
    point: Point
    tick: int
    defaulted: bool = False  # Guessed locally, any received goal replaces it


@dataclass
class AgentState:
    """Everything one agent knows; owned by a single orchestrator call at a time."""
    teammate: ObservationHistory
    opponent: ObservationHistory
    goal: Optional[Goal] = None  # Teammate's advertised goal, newest tick wins
    own_goal: Optional[Goal] = None  # What we broadcast last
    skipped_ticks: int = 0
    last_tick: Optional[int] = None

    @classmethod
    def create(cls, settings: Optional[Settings] = None) -> 'AgentState':
        settings = settings or get_settings()
        return cls(
            teammate=ObservationHistory(settings.history_capacity, label="teammate"),
            opponent=ObservationHistory(settings.history_capacity, label="opponent"),
        )

    @property
    def goal_point(self) -> Optional[Point]:
        return self.goal.point if self.goal else None

    def update_goal(self, goal: Goal) -> bool:
        """Last-writer-wins by tick; older or equal ticks are dropped unless the goal was defaulted."""
        if self.goal is not None and not self.goal.defaulted and goal.tick <= self.goal.tick:
            return False
        self.goal = goal
        return True
