"""
Report Protocol - what the twins tell each other.

Three report kinds, each stamped with the tick it describes:

- SelfPositionReport:     sender's own sample -> receiver's teammate history
- OpponentPositionReport: sender's opponent sample -> receiver's opponent history
- GoalReport:             sender's current waypoint -> receiver's goal

Delivery is best effort. Merging goes through the same newest-tick-wins
rule as local observations, so duplicates, replays and late arrivals are
dropped without error.

Wire format is JSON with a "kind" discriminator, validated by the pydantic
models in twinbot.schemas.reports.
"""

import logging
from dataclasses import dataclass
from typing import Union

from ..schemas.reports import (
    GoalMessage, OpponentPositionMessage, SelfPositionMessage, report_adapter
)
from .agent_state import AgentState, Goal
from .geometry import Point
from .observation_history import Sample

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SelfPositionReport:
    sample: Sample

    @property
    def tick(self) -> int:
        return self.sample.tick


@dataclass(frozen=True)
class OpponentPositionReport:
    sample: Sample

    @property
    def tick(self) -> int:
        return self.sample.tick


@dataclass(frozen=True)
class GoalReport:
    point: Point
    tick: int


Report = Union[SelfPositionReport, OpponentPositionReport, GoalReport]


def _sample_fields(sample: Sample) -> dict:
    return {
        "x": sample.x,
        "y": sample.y,
        "energy": sample.energy,
        "heading": sample.heading,
        "tick": sample.tick,
    }


def to_message(report: Report) -> Union[SelfPositionMessage, OpponentPositionMessage, GoalMessage]:
    if isinstance(report, SelfPositionReport):
        return SelfPositionMessage(**_sample_fields(report.sample))
    if isinstance(report, OpponentPositionReport):
        return OpponentPositionMessage(**_sample_fields(report.sample))
    if isinstance(report, GoalReport):
        return GoalMessage(x=report.point.x, y=report.point.y, tick=report.tick)
    raise TypeError(f"Unknown report type: {type(report).__name__}")


def from_message(message: Union[SelfPositionMessage, OpponentPositionMessage, GoalMessage]) -> Report:
    if isinstance(message, GoalMessage):
        return GoalReport(point=Point(message.x, message.y), tick=message.tick)

    sample = Sample(
        x=message.x,
        y=message.y,
        energy=message.energy,
        heading=message.heading,
        tick=message.tick,
    )
    if isinstance(message, SelfPositionMessage):
        return SelfPositionReport(sample)
    if isinstance(message, OpponentPositionMessage):
        return OpponentPositionReport(sample)
    raise TypeError(f"Unknown message type: {type(message).__name__}")


def encode(report: Report) -> str:
    """Serialize a report to its JSON wire form."""
    return to_message(report).model_dump_json()


def decode(payload: Union[str, bytes]) -> Report:
    """
    Parse a wire payload.

    Raises pydantic.ValidationError for malformed or unknown payloads.
    """
    return from_message(report_adapter.validate_json(payload))


def merge(state: AgentState, report: Report) -> bool:
    """
    Fold a received report into the agent state.

    Returns True if anything changed, False if the report was stale.
    """
    if isinstance(report, SelfPositionReport):
        accepted = state.teammate.record(report.sample)
    elif isinstance(report, OpponentPositionReport):
        accepted = state.opponent.record(report.sample)
    elif isinstance(report, GoalReport):
        accepted = state.update_goal(Goal(point=report.point, tick=report.tick))
    else:
        raise TypeError(f"Unknown report type: {type(report).__name__}")

    if not accepted:
        logger.debug(f"Dropped stale {type(report).__name__} for tick {report.tick}")
    return accepted
