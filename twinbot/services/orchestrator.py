"""
Tick Orchestrator - one event in, commands out.

The arena host hands every event for an agent to process_event together
with the agent's own state for the tick. The agent state is passed in and
handed back on the result; nothing is kept between calls.

=== OPPONENT SIGHTING ===

    Idle -> HistoryUpdated -> RoleDecided -> WaypointPlanned
         -> Aimed -> Broadcast -> MovementIssued -> Idle

Broadcast sends self position, opponent latest and goal. A failed send is
logged and the tick continues; movement and aim are still issued.

=== OTHER EVENTS ===

- Teammate sighting: history update only, no commands
- Message received:  decode and merge, stale reports dropped silently
- Tick skipped:      logged, state untouched
- Collision:         back off (or push through) bump_distance
"""

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Union

from pydantic import ValidationError

from ..config import Settings, get_settings
from .agent_state import AgentState, Goal
from .geometry import Point, project
from .motion_predictor import MotionPredictor
from .observation_history import Sample
from .report_protocol import (
    GoalReport, OpponentPositionReport, Report, SelfPositionReport,
    decode, encode, merge
)
from .role_arbiter import Role, RoleArbiter
from .targeting import AimSolution, TargetingController
from .waypoint_planner import ArenaView, MovePlan, WaypointPlanner

logger = logging.getLogger(__name__)


class TickPhase(Enum):
    """Furthest step reached while handling one event."""
    IDLE = "idle"
    HISTORY_UPDATED = "history_updated"
    ROLE_DECIDED = "role_decided"
    WAYPOINT_PLANNED = "waypoint_planned"
    AIMED = "aimed"
    BROADCAST = "broadcast"
    MOVEMENT_ISSUED = "movement_issued"


@dataclass(frozen=True)
class SelfState:
    """Own robot state supplied by the arena each tick."""
    x: float
    y: float
    heading: float
    gun_heading: float
    radar_heading: float
    energy: float
    tick: int
    footprint: float = 36.0
    arena_width: float = 800.0
    arena_height: float = 600.0
    gun_heat: float = 0.0

    @property
    def position(self) -> Point:
        return Point(self.x, self.y)

    def arena_view(self) -> ArenaView:
        return ArenaView(
            position=self.position,
            footprint=self.footprint,
            arena_width=self.arena_width,
            arena_height=self.arena_height,
        )


@dataclass(frozen=True)
class Observation:
    """A scanned robot, bearing relative to our chassis heading."""
    bearing: float
    distance: float
    velocity: float
    heading: float
    energy: float
    is_teammate: bool = False


# Events

@dataclass(frozen=True)
class Observed:
    observation: Observation


@dataclass(frozen=True)
class MessageReceived:
    payload: Union[str, bytes, SelfPositionReport, OpponentPositionReport, GoalReport]


@dataclass(frozen=True)
class TickSkipped:
    tick: int


@dataclass(frozen=True)
class Collided:
    bearing: float  # Relative to chassis heading
    is_teammate: bool


Event = Union[Observed, MessageReceived, TickSkipped, Collided]


@dataclass
class Commands:
    """Actuator commands for the tick. None leaves an actuator untouched."""
    body_turn: Optional[float] = None
    radar_turn: Optional[float] = None
    gun_turn: Optional[float] = None
    ahead: Optional[float] = None
    fire_power: Optional[float] = None
    hold: bool = False

    @property
    def is_empty(self) -> bool:
        return (
            self.body_turn is None and self.radar_turn is None
            and self.gun_turn is None and self.ahead is None
            and self.fire_power is None and not self.hold
        )


@dataclass
class TickResult:
    state: AgentState
    commands: Commands
    phase: TickPhase = TickPhase.IDLE
    role: Optional[Role] = None
    plan: Optional[MovePlan] = None
    aim: Optional[AimSolution] = None
    sent: List[Report] = field(default_factory=list)


class TickOrchestrator:
    """Wires history, role, waypoint, targeting and reports for one agent."""

    def __init__(self, transport=None, settings: Optional[Settings] = None):
        settings = settings or get_settings()
        self.settings = settings
        self.transport = transport
        self.arbiter = RoleArbiter(settings)
        self.predictor = MotionPredictor(settings)
        self.planner = WaypointPlanner(settings)
        self.targeting = TargetingController(settings)
        self.bump_distance = settings.bump_distance

    def new_state(self) -> AgentState:
        return AgentState.create(self.settings)

    def idle(self, state: AgentState) -> TickResult:
        """Commands before anything has been seen: keep the radar spinning."""
        return TickResult(state=state, commands=Commands(radar_turn=self.targeting.sweep()))

    def process_event(self, state: AgentState, me: SelfState, event: Event) -> TickResult:
        if isinstance(event, Observed):
            if event.observation.is_teammate:
                return self._on_teammate_seen(state, me, event.observation)
            return self._on_opponent_seen(state, me, event.observation)
        if isinstance(event, MessageReceived):
            return self._on_message(state, event.payload)
        if isinstance(event, TickSkipped):
            return self._on_tick_skipped(state, event.tick)
        if isinstance(event, Collided):
            return self._on_collision(state, me, event)
        raise TypeError(f"Unknown event type: {type(event).__name__}")

    # --- Event handlers ---

    def _sample_from(self, me: SelfState, obs: Observation) -> Sample:
        where = project(me.position, me.heading + obs.bearing, obs.distance)
        return Sample(x=where.x, y=where.y, energy=obs.energy, heading=obs.heading, tick=me.tick)

    def _on_teammate_seen(self, state: AgentState, me: SelfState, obs: Observation) -> TickResult:
        sample = self._sample_from(me, obs)
        state.teammate.record(sample)
        if state.goal is None:
            # Until the teammate tells us otherwise, it is heading where it stands
            state.goal = Goal(point=sample.position, tick=sample.tick, defaulted=True)
        state.last_tick = me.tick
        return TickResult(state=state, commands=Commands(), phase=TickPhase.HISTORY_UPDATED)

    def _on_opponent_seen(self, state: AgentState, me: SelfState, obs: Observation) -> TickResult:
        state.opponent.record(self._sample_from(me, obs))
        state.last_tick = me.tick

        role = self.arbiter.decide(state.teammate, state.goal_point, me.energy, me.tick)

        mate = state.teammate.latest()
        plan = self.planner.plan(
            role,
            me.arena_view(),
            opponent=self.predictor.predict(state.opponent, me.tick),
            teammate=mate.position if mate else None,
            goal=state.goal_point,
        )

        aim = self.targeting.aim(
            heading=me.heading,
            gun_heading=me.gun_heading,
            radar_heading=me.radar_heading,
            gun_heat=me.gun_heat,
            bearing=obs.bearing,
            distance=obs.distance,
            opponent_heading=obs.heading,
            opponent_velocity=obs.velocity,
        )

        own_goal = Goal(point=plan.goal, tick=me.tick)
        state.own_goal = own_goal
        reports = [
            SelfPositionReport(Sample(x=me.x, y=me.y, energy=me.energy, heading=me.heading, tick=me.tick)),
            OpponentPositionReport(state.opponent.latest()),
            GoalReport(point=own_goal.point, tick=own_goal.tick),
        ]
        sent = self._broadcast(reports)

        if plan.hold:
            body_turn, ahead = 0.0, 0.0
        else:
            body_turn, ahead = self.planner.movement_command(me.position, me.heading, plan.target)

        commands = Commands(
            body_turn=body_turn,
            radar_turn=aim.radar_turn,
            gun_turn=aim.gun_turn,
            ahead=ahead,
            fire_power=aim.fire_power,
            hold=plan.hold,
        )
        return TickResult(
            state=state,
            commands=commands,
            phase=TickPhase.MOVEMENT_ISSUED,
            role=role,
            plan=plan,
            aim=aim,
            sent=sent,
        )

    def _on_message(self, state: AgentState, payload) -> TickResult:
        if isinstance(payload, (str, bytes)):
            try:
                report = decode(payload)
            except ValidationError as e:
                logger.warning(f"Dropping malformed team report: {e.error_count()} errors")
                return TickResult(state=state, commands=Commands())
        else:
            report = payload

        if merge(state, report):
            return TickResult(state=state, commands=Commands(), phase=TickPhase.HISTORY_UPDATED)
        return TickResult(state=state, commands=Commands())

    def _on_tick_skipped(self, state: AgentState, tick: int) -> TickResult:
        state.skipped_ticks += 1
        logger.warning(
            f"Skipped turn {tick} (last handled {state.last_tick}, {state.skipped_ticks} total)"
        )
        return TickResult(state=state, commands=Commands())

    def _on_collision(self, state: AgentState, me: SelfState, event: Collided) -> TickResult:
        role = self.arbiter.decide(state.teammate, state.goal_point, me.energy, me.tick)
        # The leader pushes through its teammate; everyone backs off the opponent
        if event.is_teammate and role is Role.LEADER:
            return TickResult(state=state, commands=Commands(), role=role)

        if -math.pi / 2 < event.bearing <= math.pi / 2:
            ahead = -self.bump_distance
        else:
            ahead = self.bump_distance
        return TickResult(
            state=state,
            commands=Commands(ahead=ahead),
            phase=TickPhase.MOVEMENT_ISSUED,
            role=role,
        )

    def _broadcast(self, reports: List[Report]) -> List[Report]:
        if self.transport is None:
            return []
        sent = []
        for report in reports:
            try:
                self.transport.broadcast(encode(report))
            except Exception as e:
                # Any send failure costs the report, never the tick
                logger.warning(f"Error during report transmission: {e}")
                continue
            sent.append(report)
        return sent
