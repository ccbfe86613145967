"""
Waypoint Planner - where to drive next.

=== LEADER ===

Drive straight at the opponent but stop leader_clearance_factor footprints short,
close enough for the fire range, far enough not to ram.

=== ASSISTANT ===

Take the vector from the opponent to the leader's goal, rotate it 90 degrees
and place one candidate on each side of the opponent:

    offset = k * (-(goal.y - opp.y), goal.x - opp.x)
    p1 = opp + offset
    p2 = opp - offset

Both candidates are clamped into the safe interior of the arena and the one
nearer to us wins (first one on a tie). Leader and assistant end up on
perpendicular axes around the opponent, which forces it to split its aim.

k defaults to 1.0 and is configurable. tan(45) in radians (~1.62) pushes
the flank further out.

=== COLLISION OVERRIDE ===

An assistant within collision_hold_factor footprints of its teammate stops for the
tick and advertises its own position as goal. Without this the twins keep
swapping sides and bumping into each other.
"""

import math
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from ..config import Settings, get_settings
from .geometry import Point, clamp_to_arena, interpolate
from .role_arbiter import Role


@dataclass(frozen=True)
class ArenaView:
    """What the planner needs to know about ourselves and the arena."""
    position: Point
    footprint: float
    arena_width: float
    arena_height: float


@dataclass(frozen=True)
class MovePlan:
    """Waypoint for this tick and the goal to advertise."""
    target: Point
    goal: Point
    hold: bool = False
    reason: str = ""


class WaypointPlanner:
    """Leader approach and assistant flank geometry."""

    def __init__(self, settings: Optional[Settings] = None):
        settings = settings or get_settings()
        self.leader_clearance_factor = settings.leader_clearance_factor
        self.arena_margin_factor = settings.arena_margin_factor
        self.collision_hold_factor = settings.collision_hold_factor
        self.flank_offset_multiplier = settings.flank_offset_multiplier

    def plan(
        self,
        role: Role,
        view: ArenaView,
        opponent: Optional[Point],
        teammate: Optional[Point] = None,
        goal: Optional[Point] = None
    ) -> MovePlan:
        here = view.position

        if role is Role.ASSISTANT and teammate is not None:
            if here.distance(teammate) <= self.collision_hold_factor * view.footprint:
                return MovePlan(target=here, goal=here, hold=True, reason="teammate_too_close")

        if opponent is None:
            return MovePlan(target=here, goal=here, hold=True, reason="no_opponent")

        if role is Role.ASSISTANT and goal is not None:
            target = self.flank_target(view, opponent, goal)
            return MovePlan(target=target, goal=target, reason="flank")

        return self.leader_plan(view, opponent)

    def leader_plan(self, view: ArenaView, opponent: Point) -> MovePlan:
        here = view.position
        clearance = self.leader_clearance_factor * view.footprint
        distance = here.distance(opponent)
        if distance <= clearance:
            return MovePlan(target=here, goal=here, hold=True, reason="inside_clearance")

        fraction = (distance - clearance) / distance
        target = interpolate(here, opponent, fraction)
        return MovePlan(target=target, goal=target, reason="approach")

    def flank_candidates(
        self,
        view: ArenaView,
        opponent: Point,
        goal: Point
    ) -> Tuple[Point, Point]:
        """Both flank points, clamped into the safe interior."""
        opp = opponent.as_array()
        rel = goal.as_array() - opp
        offset = self.flank_offset_multiplier * np.array([-rel[1], rel[0]])

        margin = self.arena_margin_factor * view.footprint
        p1 = clamp_to_arena(Point.from_array(opp + offset), view.arena_width, view.arena_height, margin)
        p2 = clamp_to_arena(Point.from_array(opp - offset), view.arena_width, view.arena_height, margin)
        return p1, p2

    def flank_target(self, view: ArenaView, opponent: Point, goal: Point) -> Point:
        p1, p2 = self.flank_candidates(view, opponent, goal)
        here = view.position
        return p1 if here.distance(p1) <= here.distance(p2) else p2

    @staticmethod
    def movement_command(position: Point, heading: float, target: Point) -> Tuple[float, float]:
        """
        Chassis (turn, ahead) to reach target.

        turn = tan(angle) keeps the turn small for targets behind us, where
        cos(angle) < 0 makes the robot back up instead of turning around.
        """
        dx = target.x - position.x
        dy = target.y - position.y
        if dx == 0 and dy == 0:
            return 0.0, 0.0
        angle = math.atan2(dx, dy) - heading
        return math.tan(angle), math.hypot(dx, dy) * math.cos(angle)
