"""High-level entry points for planning a ski trip."""
import logging
from typing import Any, Dict, Optional

from ski_planner.agent.executor import PromptExecutor
from ski_planner.agent.graph import run_pipeline
from ski_planner.agent.state import PlanningResult

logger = logging.getLogger("ski-planner")

FALLBACK_PLAN_MESSAGE = (
    "Unable to generate ski plan. Please check your AWS Bedrock API key and region settings."
)


async def plan_trip(
    location: str,
    skill_level: str,
    executor: Optional[PromptExecutor] = None,
) -> str:
    """Plan a ski trip and return only the final plan text, or the fallback message on failure."""
    try:
        state = await run_pipeline(location, skill_level, executor=executor)
    except Exception as e:
        logger.error(f"Ski planning failed for {location!r}: {e}", exc_info=True)
        return FALLBACK_PLAN_MESSAGE
    return state["final_plan"]


async def get_detailed_plan(
    location: str,
    skill_level: str,
    executor: Optional[PromptExecutor] = None,
    log_context: Optional[Dict[str, Any]] = None,
) -> Optional[PlanningResult]:
    """
    Plan a ski trip and return every intermediate artifact.

    Args:
        location: Where the trip is going
        skill_level: Skier's level
        executor: Prompt executor; defaults to Bedrock with process settings
        log_context: Key/value tags attached to the pipeline's log lines

    Returns:
        The full planning result, or None if any stage failed
    """
    try:
        state = await run_pipeline(location, skill_level, executor=executor, log_context=log_context)
    except Exception as e:
        logger.error(f"Detailed ski planning failed for {location!r}: {e}", exc_info=True)
        return None
    return PlanningResult.from_state(state)
