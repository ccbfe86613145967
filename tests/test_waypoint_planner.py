"""Tests for waypoint_planner.py"""

import math
import pytest
import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from twinbot.config import Settings
from twinbot.services.geometry import Point
from twinbot.services.role_arbiter import Role
from twinbot.services.waypoint_planner import ArenaView, WaypointPlanner


FOOTPRINT = 18.0
ARENA_W = 800.0
ARENA_H = 600.0


@pytest.fixture
def planner():
    return WaypointPlanner(Settings())


def view_at(x, y):
    return ArenaView(position=Point(x, y), footprint=FOOTPRINT, arena_width=ARENA_W, arena_height=ARENA_H)


def side_of_line(a, b, p):
    """Sign of p relative to the directed line a -> b."""
    return (b.x - a.x) * (p.y - a.y) - (b.y - a.y) * (p.x - a.x)


class TestLeaderPlan:
    """Tests for the leader approach."""

    def test_stops_clearance_short(self, planner):
        """Self at origin, opponent at (100, 100): stop 2 footprints short."""
        opponent = Point(100.0, 100.0)
        plan = planner.plan(Role.LEADER, view_at(0.0, 0.0), opponent)

        assert not plan.hold
        assert plan.target.distance(opponent) == pytest.approx(2 * FOOTPRINT)
        # On the segment towards the opponent
        assert plan.target.x == pytest.approx(plan.target.y)
        assert 0.0 < plan.target.x < 100.0
        assert plan.goal == plan.target

    def test_holds_inside_clearance(self, planner):
        plan = planner.plan(Role.LEADER, view_at(0.0, 0.0), Point(20.0, 20.0))
        assert plan.hold
        assert plan.target == Point(0.0, 0.0)

    def test_holds_on_top_of_opponent(self, planner):
        plan = planner.plan(Role.LEADER, view_at(50.0, 50.0), Point(50.0, 50.0))
        assert plan.hold

    def test_no_opponent_holds(self, planner):
        plan = planner.plan(Role.LEADER, view_at(10.0, 10.0), None)
        assert plan.hold
        assert plan.target == Point(10.0, 10.0)

    def test_leader_ignores_close_teammate(self, planner):
        """Test the collision override only applies to the assistant."""
        plan = planner.plan(Role.LEADER, view_at(0.0, 0.0), Point(300.0, 0.0), teammate=Point(10.0, 0.0))
        assert not plan.hold


class TestFlankCandidates:
    """Tests for the assistant flank geometry."""

    def test_equidistant_and_opposite(self, planner):
        """Test both candidates sit on either side of the goal-opponent line."""
        opponent = Point(400.0, 300.0)
        goal = Point(430.0, 220.0)
        p1, p2 = planner.flank_candidates(view_at(100.0, 100.0), opponent, goal)

        assert p1.distance(opponent) == pytest.approx(p2.distance(opponent))
        assert p1.distance(opponent) == pytest.approx(goal.distance(opponent))
        assert side_of_line(goal, opponent, p1) * side_of_line(goal, opponent, p2) < 0

    def test_perpendicular_to_goal(self, planner):
        opponent = Point(400.0, 300.0)
        goal = Point(400.0, 200.0)
        p1, p2 = planner.flank_candidates(view_at(100.0, 100.0), opponent, goal)
        assert p1 == Point(500.0, 300.0)
        assert p2 == Point(300.0, 300.0)

    def test_candidates_clamped(self, planner):
        """Test candidates stay 2 footprints away from every wall."""
        margin = 2 * FOOTPRINT
        opponent = Point(780.0, 580.0)
        goal = Point(700.0, 300.0)
        for p in planner.flank_candidates(view_at(100.0, 100.0), opponent, goal):
            assert margin <= p.x <= ARENA_W - margin
            assert margin <= p.y <= ARENA_H - margin

    def test_clamped_to_wall_margin(self, planner):
        opponent = Point(780.0, 300.0)
        goal = Point(780.0, 100.0)
        p1, p2 = planner.flank_candidates(view_at(100.0, 100.0), opponent, goal)
        assert p1 == Point(ARENA_W - 2 * FOOTPRINT, 300.0)
        assert p2 == Point(580.0, 300.0)

    def test_nearest_candidate_chosen(self, planner):
        opponent = Point(400.0, 300.0)
        goal = Point(400.0, 200.0)
        plan = planner.plan(Role.ASSISTANT, view_at(320.0, 310.0), opponent, goal=goal)
        assert plan.target == Point(300.0, 300.0)
        assert plan.goal == plan.target

    def test_tie_picks_first(self, planner):
        opponent = Point(400.0, 300.0)
        goal = Point(400.0, 200.0)
        plan = planner.plan(Role.ASSISTANT, view_at(400.0, 100.0), opponent, goal=goal)
        assert plan.target == Point(500.0, 300.0)

    def test_offset_multiplier(self):
        planner = WaypointPlanner(Settings(flank_offset_multiplier=math.tan(45)))
        opponent = Point(400.0, 300.0)
        goal = Point(400.0, 250.0)
        p1, _ = planner.flank_candidates(view_at(100.0, 100.0), opponent, goal)
        assert p1.distance(opponent) == pytest.approx(50.0 * math.tan(45))


class TestCollisionOverride:
    """Tests for the assistant's hold near its teammate."""

    def test_holds_near_teammate(self, planner):
        """Inside 2.5 footprints the assistant holds and advertises itself."""
        plan = planner.plan(
            Role.ASSISTANT, view_at(200.0, 200.0), Point(500.0, 400.0),
            teammate=Point(230.0, 200.0), goal=Point(450.0, 350.0),
        )
        assert plan.hold
        assert plan.target == Point(200.0, 200.0)
        assert plan.goal == Point(200.0, 200.0)

    def test_boundary_distance_holds(self, planner):
        plan = planner.plan(
            Role.ASSISTANT, view_at(200.0, 200.0), Point(500.0, 400.0),
            teammate=Point(200.0 + 2.5 * FOOTPRINT, 200.0), goal=Point(450.0, 350.0),
        )
        assert plan.hold

    def test_moves_when_apart(self, planner):
        plan = planner.plan(
            Role.ASSISTANT, view_at(200.0, 200.0), Point(500.0, 400.0),
            teammate=Point(300.0, 200.0), goal=Point(450.0, 350.0),
        )
        assert not plan.hold


class TestMovementCommand:
    """Tests for waypoint -> chassis command conversion."""

    def test_straight_ahead(self):
        turn, ahead = WaypointPlanner.movement_command(Point(0.0, 0.0), 0.0, Point(0.0, 100.0))
        assert turn == pytest.approx(0.0)
        assert ahead == pytest.approx(100.0)

    def test_behind_backs_up(self):
        turn, ahead = WaypointPlanner.movement_command(Point(0.0, 0.0), 0.0, Point(0.0, -100.0))
        assert turn == pytest.approx(0.0, abs=1e-9)
        assert ahead == pytest.approx(-100.0)

    def test_diagonal(self):
        turn, ahead = WaypointPlanner.movement_command(Point(0.0, 0.0), 0.0, Point(100.0, 100.0))
        assert turn == pytest.approx(1.0)
        assert ahead == pytest.approx(100.0)

    def test_zero_displacement(self):
        assert WaypointPlanner.movement_command(Point(5.0, 5.0), 1.0, Point(5.0, 5.0)) == (0.0, 0.0)
