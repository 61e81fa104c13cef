"""
Pytest configuration and fixtures
"""
import os
from typing import List, Optional, Tuple

import pytest

# Never pick up a real Bedrock key from the developer's environment
os.environ.pop("AWS_BEARER_TOKEN_BEDROCK", None)

from ski_planner.agent.executor import PromptExecutor
from ski_planner.agent.prompts import (
    GEAR_SYSTEM_PROMPT,
    PLANNER_SYSTEM_PROMPT,
    RESORT_SYSTEM_PROMPT,
    WEATHER_SYSTEM_PROMPT,
)
from ski_planner.errors import GenerationError

MOCK_RESPONSES = {
    WEATHER_SYSTEM_PROMPT: "Mock weather analysis: 10 inches of fresh powder, -5C, light wind, clear visibility.",
    RESORT_SYSTEM_PROMPT: "Mock resort recommendations: 1. Aspen Highlands 2. Vail 3. Keystone.",
    GEAR_SYSTEM_PROMPT: "Mock gear suggestions: all-mountain skis, helmet, goggles, thermal layers.",
    PLANNER_SYSTEM_PROMPT: "Mock final plan: Day 1 arrive and acclimate. Day 2-3 ski the recommended runs.",
}

STAGE_NAMES = {
    WEATHER_SYSTEM_PROMPT: "weather",
    RESORT_SYSTEM_PROMPT: "resort",
    GEAR_SYSTEM_PROMPT: "gear",
    PLANNER_SYSTEM_PROMPT: "planner",
}


class RecordingExecutor(PromptExecutor):
    """Deterministic executor that records every call and answers by system prompt."""

    def __init__(self, fail_on: Optional[str] = None):
        self.fail_on = fail_on
        self.calls: List[Tuple[str, str, float]] = []

    @property
    def stages_called(self) -> List[str]:
        return [STAGE_NAMES[system] for system, _, _ in self.calls]

    def user_prompt_for(self, stage: str) -> str:
        for system, user, _ in self.calls:
            if STAGE_NAMES[system] == stage:
                return user
        raise AssertionError(f"stage {stage} was never called")

    async def execute(self, system_instruction, user_instruction, temperature=0.1):
        self.calls.append((system_instruction, user_instruction, temperature))
        if self.fail_on is not None and STAGE_NAMES[system_instruction] == self.fail_on:
            raise GenerationError(f"{self.fail_on} stage unavailable")
        return MOCK_RESPONSES[system_instruction]

    def get_chat_model(self, temperature):
        raise AssertionError("RecordingExecutor answers directly and has no chat model")


@pytest.fixture
def executor():
    return RecordingExecutor()
