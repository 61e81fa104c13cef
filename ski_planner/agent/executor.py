"""Prompt executor: sends a system + user instruction to a chat model and returns text."""
import logging
import os
from abc import ABC, abstractmethod
from typing import Dict, Optional

from langchain_aws import ChatBedrockConverse
from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import HumanMessage, SystemMessage

from ski_planner.config import Settings
from ski_planner.errors import GenerationError

logger = logging.getLogger("prompt-executor")

DEFAULT_TEMPERATURE = 0.1


def _response_text(content) -> Optional[str]:
    """Flatten chat model content (plain string or list of content blocks) to text."""
    if content is None:
        return None
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for block in content:
            if isinstance(block, str):
                parts.append(block)
            elif isinstance(block, dict) and block.get("type") == "text":
                parts.append(block.get("text", ""))
        return "".join(parts)
    return None


class PromptExecutor(ABC):
    """
    Base prompt executor.

    Subclasses provide the chat model for a given temperature; this class
    handles message construction, response flattening and error wrapping.
    """

    async def execute(
        self,
        system_instruction: str,
        user_instruction: str,
        temperature: float = DEFAULT_TEMPERATURE,
    ) -> str:
        """
        Run one generation.

        Args:
            system_instruction: Role description for the model
            user_instruction: The task for this call
            temperature: Sampling temperature

        Returns:
            Generated text

        Raises:
            ValueError: If either instruction is empty
            GenerationError: On any failure of the underlying model
        """
        if not system_instruction or not system_instruction.strip():
            raise ValueError("system_instruction must not be empty")
        if not user_instruction or not user_instruction.strip():
            raise ValueError("user_instruction must not be empty")

        llm = self.get_chat_model(temperature)
        messages = [
            SystemMessage(content=system_instruction),
            HumanMessage(content=user_instruction),
        ]

        try:
            response = await llm.ainvoke(messages)
        except GenerationError:
            raise
        except Exception as e:
            raise GenerationError(f"Chat model invocation failed: {e}") from e

        text = _response_text(getattr(response, "content", None))
        if text is None:
            raise GenerationError("Chat model returned no text content")

        logger.debug(f"Generated {len(text)} characters")
        return text

    @abstractmethod
    def get_chat_model(self, temperature: float) -> BaseChatModel:
        """Return the chat model to use at the given temperature."""


class ChatModelPromptExecutor(PromptExecutor):
    """Executor over a ready-made LangChain chat model; the temperature argument is ignored."""

    def __init__(self, chat_model: BaseChatModel):
        self.chat_model = chat_model

    def get_chat_model(self, temperature: float) -> BaseChatModel:
        return self.chat_model


class BedrockPromptExecutor(PromptExecutor):
    """Executor backed by AWS Bedrock through the Converse API."""

    def __init__(self, settings: Settings):
        self.settings = settings
        self._models: Dict[float, BaseChatModel] = {}

    def get_chat_model(self, temperature: float) -> BaseChatModel:
        if not self.settings.has_bedrock_credentials:
            raise GenerationError("AWS_BEARER_TOKEN_BEDROCK is not configured")

        llm = self._models.get(temperature)
        if llm is None:
            logger.info(
                f"Creating Bedrock chat model {self.settings.aws_bedrock_model} "
                f"in {self.settings.aws_region} (temperature={temperature})"
            )
            # boto3 reads the Bedrock API key from the environment; the configured key wins
            os.environ["AWS_BEARER_TOKEN_BEDROCK"] = self.settings.aws_bearer_token_bedrock
            try:
                llm = ChatBedrockConverse(
                    model=self.settings.aws_bedrock_model,
                    region_name=self.settings.aws_region,
                    temperature=temperature,
                )
            except Exception as e:
                raise GenerationError(f"Could not create Bedrock client: {e}") from e
            self._models[temperature] = llm
        return llm
