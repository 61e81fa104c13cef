from typing import Annotated, Any, List, Mapping, TypedDict

from langchain_core.messages import BaseMessage
from langgraph.graph.message import add_messages
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class PlanningState(TypedDict):
    location: str
    skill_level: str
    weather_info: str  # written by the weather stage
    resort_recommendations: str  # written by the resort stage
    gear_suggestions: str  # written by the gear stage
    final_plan: str  # written by the planner stage
    transcript: Annotated[List[BaseMessage], add_messages]  # audit only, never read by stages


def initial_state(location: str, skill_level: str) -> PlanningState:
    return PlanningState(
        location=location,
        skill_level=skill_level,
        weather_info="",
        resort_recommendations="",
        gear_suggestions="",
        final_plan="",
        transcript=[],
    )


class PlanningResult(BaseModel):
    """Externally visible projection of a completed planning run."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    location: str
    skill_level: str
    weather_info: str
    resort_recommendations: str
    gear_suggestions: str
    final_plan: str

    @classmethod
    def from_state(cls, state: Mapping[str, Any]) -> "PlanningResult":
        return cls(
            location=state["location"],
            skill_level=state["skill_level"],
            weather_info=state["weather_info"],
            resort_recommendations=state["resort_recommendations"],
            gear_suggestions=state["gear_suggestions"],
            final_plan=state["final_plan"],
        )
