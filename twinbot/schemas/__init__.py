from .reports import (
    SelfPositionMessage, OpponentPositionMessage, GoalMessage,
    ReportMessage, report_adapter
)

__all__ = [
    "SelfPositionMessage", "OpponentPositionMessage", "GoalMessage",
    "ReportMessage", "report_adapter",
]
