from .geometry import Point, normal_relative_angle, clamp_to_arena
from .observation_history import ObservationHistory, Sample
from .motion_predictor import MotionPredictor
from .role_arbiter import RoleArbiter, Role
from .waypoint_planner import WaypointPlanner, ArenaView, MovePlan
from .targeting import TargetingController, AimSolution, bullet_speed
from .agent_state import AgentState, Goal
from .report_protocol import (
    SelfPositionReport, OpponentPositionReport, GoalReport, encode, decode, merge
)
from .transport import TeamChannel, TransportError
from .orchestrator import (
    TickOrchestrator, TickResult, TickPhase, Commands, SelfState, Observation,
    Observed, MessageReceived, TickSkipped, Collided
)

__all__ = [
    "Point",
    "normal_relative_angle",
    "clamp_to_arena",
    "ObservationHistory",
    "Sample",
    "MotionPredictor",
    "RoleArbiter",
    "Role",
    "WaypointPlanner",
    "ArenaView",
    "MovePlan",
    "TargetingController",
    "AimSolution",
    "bullet_speed",
    "AgentState",
    "Goal",
    "SelfPositionReport",
    "OpponentPositionReport",
    "GoalReport",
    "encode",
    "decode",
    "merge",
    "TeamChannel",
    "TransportError",
    "TickOrchestrator",
    "TickResult",
    "TickPhase",
    "Commands",
    "SelfState",
    "Observation",
    "Observed",
    "MessageReceived",
    "TickSkipped",
    "Collided",
]
