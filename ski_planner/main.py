import asyncio
import logging
import sys
from typing import Optional

from dotenv import load_dotenv

# Load env before imports
load_dotenv()

from ski_planner.agent.executor import BedrockPromptExecutor
from ski_planner.agent.planner import plan_trip
from ski_planner.agent.prompt_parser import parse_prompt
from ski_planner.config import Settings, settings
from ski_planner.logging_utils import configure_logging

logger = logging.getLogger("main")


async def run_demo(config: Optional[Settings] = None):
    """Interactive ski planning session on stdin/stdout."""
    config = config or settings
    print("Initializing Ski Planner...")

    if not config.has_bedrock_credentials:
        logger.warning(
            "AWS_BEARER_TOKEN_BEDROCK is not set. Set it (and AWS_REGION) to generate ski plans."
        )
        return

    executor = BedrockPromptExecutor(config)
    print(f"Using Bedrock model {config.aws_bedrock_model} in {config.aws_region}")
    print("\n--- Ski Planner Ready (Type 'quit' to exit) ---\n")

    while True:
        try:
            user_input = input("You: ").strip()
        except (EOFError, KeyboardInterrupt):
            break
        if user_input.lower() in ["quit", "exit"]:
            break
        if not user_input:
            continue

        trip = parse_prompt(user_input)
        print(f"[Planning for {trip.location} ({trip.skill_level})]...")

        plan = await plan_trip(trip.location, trip.skill_level, executor=executor)
        print(f"Planner: {plan}\n")

    print("Shutdown complete.")


def main():
    configure_logging(settings.log_level, settings.log_file)

    mode = settings.app_mode.strip().lower()
    if mode == "demo":
        asyncio.run(run_demo(settings))
    elif mode == "server":
        from ski_planner.server import run_server

        run_server()
    else:
        logger.error(f"Unknown APP_MODE {settings.app_mode!r}; expected 'server' or 'demo'")
        sys.exit(2)


if __name__ == "__main__":
    main()
