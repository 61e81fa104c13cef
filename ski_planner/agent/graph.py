import logging
from typing import Any, Dict, Optional

from langchain_core.runnables import RunnableConfig
from langgraph.graph import END, START, StateGraph

from ski_planner.agent.executor import BedrockPromptExecutor, PromptExecutor
from ski_planner.agent.stages import gear_agent, planner_agent, resort_agent, weather_agent
from ski_planner.agent.state import PlanningState, initial_state
from ski_planner.config import settings
from ski_planner.logging_utils import get_context_logger

logger = logging.getLogger("agent-graph")

# Fixed pipeline order; each stage depends on the fields written before it
STAGES = [
    ("weather_agent", weather_agent),
    ("resort_agent", resort_agent),
    ("gear_agent", gear_agent),
    ("planner_agent", planner_agent),
]


def _log_context(config: Optional[RunnableConfig]) -> Dict[str, Any]:
    configurable = (config or {}).get("configurable") or {}
    return dict(configurable.get("log_context") or {})


def create_ski_planner_graph(executor: PromptExecutor):
    """Build the uncompiled four-stage graph: weather -> resort -> gear -> planner."""

    def make_node(stage):
        async def node(state: PlanningState, config: RunnableConfig):
            log = get_context_logger(
                "agent-graph",
                {"module": "langgraph", "workflow": "ski-planner", **_log_context(config)},
            )
            return await stage(state, executor, log)

        return node

    graph_builder = StateGraph(PlanningState)

    previous = START
    for name, stage in STAGES:
        graph_builder.add_node(name, make_node(stage))
        graph_builder.add_edge(previous, name)
        previous = name
    graph_builder.add_edge(previous, END)

    return graph_builder


async def run_pipeline(
    location: str,
    skill_level: str,
    executor: Optional[PromptExecutor] = None,
    log_context: Optional[Dict[str, Any]] = None,
) -> PlanningState:
    """
    Run all four stages in order and return the final state.

    Args:
        location: Where the trip is going
        skill_level: Skier's level (beginner, intermediate, expert, ...)
        executor: Prompt executor; defaults to Bedrock with process settings
        log_context: Key/value tags attached to every log line of this run

    Raises:
        GenerationError: From the first stage that fails
    """
    if executor is None:
        executor = BedrockPromptExecutor(settings)

    app = create_ski_planner_graph(executor).compile()
    config = {"configurable": {"log_context": dict(log_context or {})}}

    logger.info(f"Running ski planner pipeline for location={location!r} skill_level={skill_level!r}")
    return await app.ainvoke(initial_state(location, skill_level), config=config)
