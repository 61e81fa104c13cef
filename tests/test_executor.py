"""
Tests for prompt executors
"""
import asyncio
import os
from types import SimpleNamespace

import pytest
from langchain_core.language_models.fake_chat_models import FakeListChatModel

from ski_planner.agent import executor as executor_module
from ski_planner.agent.executor import (
    BedrockPromptExecutor,
    ChatModelPromptExecutor,
    PromptExecutor,
    _response_text,
)
from ski_planner.config import Settings
from ski_planner.errors import GenerationError


class BrokenChatModel:
    """Stand-in chat model whose calls always fail."""

    def __init__(self, error):
        self.error = error

    async def ainvoke(self, messages):
        raise self.error


class EmptyChatModel:
    async def ainvoke(self, messages):
        return SimpleNamespace(content=None)


def test_chat_model_executor_returns_text():
    executor = ChatModelPromptExecutor(FakeListChatModel(responses=["Fresh powder expected."]))

    text = asyncio.run(executor.execute("You are a weather expert.", "Aspen?"))

    assert text == "Fresh powder expected."


@pytest.mark.parametrize(
    "system_instruction, user_instruction",
    [("", "Aspen?"), ("You are a weather expert.", ""), ("   ", "Aspen?")],
)
def test_empty_instructions_are_rejected(system_instruction, user_instruction):
    executor = ChatModelPromptExecutor(FakeListChatModel(responses=["unused"]))

    with pytest.raises(ValueError):
        asyncio.run(executor.execute(system_instruction, user_instruction))


def test_model_failure_is_wrapped_in_generation_error():
    cause = RuntimeError("ThrottlingException: rate exceeded")
    executor = ChatModelPromptExecutor(BrokenChatModel(cause))

    with pytest.raises(GenerationError) as exc_info:
        asyncio.run(executor.execute("system", "user"))

    assert exc_info.value.__cause__ is cause


def test_missing_content_is_a_generation_error():
    executor = ChatModelPromptExecutor(EmptyChatModel())

    with pytest.raises(GenerationError):
        asyncio.run(executor.execute("system", "user"))


def test_response_text_flattens_content_blocks():
    content = [
        {"type": "text", "text": "Vail "},
        {"type": "reasoning_content", "reasoning_content": {"text": "hidden"}},
        {"type": "text", "text": "and Keystone"},
    ]
    assert _response_text(content) == "Vail and Keystone"
    assert _response_text("plain") == "plain"
    assert _response_text(None) is None


def test_bedrock_executor_without_credentials_fails_before_calling_out():
    executor = BedrockPromptExecutor(Settings(aws_bearer_token_bedrock=""))

    with pytest.raises(GenerationError, match="AWS_BEARER_TOKEN_BEDROCK"):
        asyncio.run(executor.execute("system", "user"))


def test_base_executor_cannot_be_instantiated():
    with pytest.raises(TypeError):
        PromptExecutor()


class RecordingBedrockModel:
    """Stand-in for ChatBedrockConverse that records its constructor arguments."""

    instances = []

    def __init__(self, **kwargs):
        self.kwargs = kwargs
        RecordingBedrockModel.instances.append(self)


def test_bedrock_executor_exports_configured_key(monkeypatch):
    monkeypatch.setenv("AWS_BEARER_TOKEN_BEDROCK", "stale-key")
    monkeypatch.setattr(executor_module, "ChatBedrockConverse", RecordingBedrockModel)
    RecordingBedrockModel.instances = []
    executor = BedrockPromptExecutor(
        Settings(
            _env_file=None,
            aws_bearer_token_bedrock="configured-key",
            aws_region="us-east-1",
            aws_bedrock_model="us.amazon.nova-lite-v1:0",
        )
    )

    llm = executor.get_chat_model(0.3)

    assert os.environ["AWS_BEARER_TOKEN_BEDROCK"] == "configured-key"
    assert llm.kwargs == {
        "model": "us.amazon.nova-lite-v1:0",
        "region_name": "us-east-1",
        "temperature": 0.3,
    }
    assert executor.get_chat_model(0.3) is llm
    assert len(RecordingBedrockModel.instances) == 1
