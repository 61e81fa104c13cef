from .agent.planner import FALLBACK_PLAN_MESSAGE, get_detailed_plan, plan_trip
from .agent.state import PlanningResult
from .errors import GenerationError, SkiPlannerError, ValidationError

__all__ = [
    "FALLBACK_PLAN_MESSAGE",
    "GenerationError",
    "PlanningResult",
    "SkiPlannerError",
    "ValidationError",
    "get_detailed_plan",
    "plan_trip",
]
