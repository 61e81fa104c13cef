"""
The four planning stages.

Each stage reads the fields earlier stages have written, makes exactly one
executor call, and returns a partial state update holding its own field
plus the exchange for the transcript.
"""
from typing import Any, Dict

from langchain_core.messages import AIMessage, HumanMessage

from ski_planner.agent.executor import PromptExecutor
from ski_planner.agent.prompts import (
    GEAR_SYSTEM_PROMPT,
    PLANNER_SYSTEM_PROMPT,
    RESORT_SYSTEM_PROMPT,
    WEATHER_SYSTEM_PROMPT,
    get_gear_prompt,
    get_planner_prompt,
    get_resort_prompt,
    get_weather_prompt,
)
from ski_planner.agent.state import PlanningState
from ski_planner.logging_utils import ContextLogger, log_duration

WEATHER_TEMPERATURE = 0.1
RESORT_TEMPERATURE = 0.3
GEAR_TEMPERATURE = 0.2
PLANNER_TEMPERATURE = 0.1


async def _generate(
    field: str,
    system_prompt: str,
    user_prompt: str,
    temperature: float,
    executor: PromptExecutor,
    log: ContextLogger,
) -> Dict[str, Any]:
    log.debug(f"Invoking LLM for {field}")
    text = await executor.execute(system_prompt, user_prompt, temperature=temperature)
    return {
        field: text,
        "transcript": [HumanMessage(content=user_prompt), AIMessage(content=text)],
    }


async def weather_agent(state: PlanningState, executor: PromptExecutor, log: ContextLogger) -> Dict[str, Any]:
    """Analyze snow, temperature, wind and visibility for the location."""
    log = log.bind(step="weather-analysis")
    with log_duration("Weather analysis", log):
        return await _generate(
            "weather_info",
            WEATHER_SYSTEM_PROMPT,
            get_weather_prompt(state["location"], state["skill_level"]),
            WEATHER_TEMPERATURE,
            executor,
            log,
        )


async def resort_agent(state: PlanningState, executor: PromptExecutor, log: ContextLogger) -> Dict[str, Any]:
    """Recommend two or three resorts given the weather analysis."""
    log = log.bind(step="resort-recommendations")
    with log_duration("Resort recommendations", log):
        return await _generate(
            "resort_recommendations",
            RESORT_SYSTEM_PROMPT,
            get_resort_prompt(state["location"], state["skill_level"], state["weather_info"]),
            RESORT_TEMPERATURE,
            executor,
            log,
        )


async def gear_agent(state: PlanningState, executor: PromptExecutor, log: ContextLogger) -> Dict[str, Any]:
    """Suggest a categorized gear list for the conditions and resorts."""
    log = log.bind(step="gear-suggestions")
    with log_duration("Gear recommendations", log):
        return await _generate(
            "gear_suggestions",
            GEAR_SYSTEM_PROMPT,
            get_gear_prompt(state["skill_level"], state["weather_info"], state["resort_recommendations"]),
            GEAR_TEMPERATURE,
            executor,
            log,
        )


async def planner_agent(state: PlanningState, executor: PromptExecutor, log: ContextLogger) -> Dict[str, Any]:
    """Synthesize everything gathered so far into the final itinerary."""
    log = log.bind(step="final-planning")
    with log_duration("Final plan synthesis", log):
        return await _generate(
            "final_plan",
            PLANNER_SYSTEM_PROMPT,
            get_planner_prompt(
                state["location"],
                state["skill_level"],
                state["weather_info"],
                state["resort_recommendations"],
                state["gear_suggestions"],
            ),
            PLANNER_TEMPERATURE,
            executor,
            log,
        )
