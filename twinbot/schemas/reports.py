from pydantic import BaseModel, Field, TypeAdapter
from typing import Annotated, Literal, Optional, Union


class SampleBase(BaseModel):
    x: float
    y: float
    energy: float = Field(ge=0)
    heading: Optional[float] = None  # Radians
    tick: int


class SelfPositionMessage(SampleBase):
    kind: Literal["self_position"] = "self_position"


class OpponentPositionMessage(SampleBase):
    kind: Literal["opponent_position"] = "opponent_position"


class GoalMessage(BaseModel):
    kind: Literal["goal"] = "goal"
    x: float
    y: float
    tick: int


ReportMessage = Annotated[
    Union[SelfPositionMessage, OpponentPositionMessage, GoalMessage],
    Field(discriminator="kind"),
]

report_adapter = TypeAdapter(ReportMessage)
