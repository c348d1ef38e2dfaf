"""Anthropic Messages API client."""

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from anthropic import Anthropic, APIError
from anthropic.types import Message
from pydantic import ValidationError

from coding_agent.config import AgentSettings
from coding_agent.models.llm import ContentBlock, LLMMessage, LLMUsage, TextBlock, ToolUseBlock
from coding_agent.utils.logging import get_logger

logger = get_logger(__name__)


class InferenceError(RuntimeError):
    """The model request failed at the transport or API level."""


@dataclass
class AnthropicResponse:
    """Structured response from the Messages API."""

    content: list[ContentBlock]
    stop_reason: str | None
    model: str
    usage: LLMUsage = field(default_factory=LLMUsage)

    def to_message(self) -> LLMMessage:
        """The response as an assistant message for the conversation."""
        return LLMMessage(role="assistant", content=list(self.content))


class AnthropicClient:
    """Synchronous request/response boundary to the Messages API.

    Failures are not retried; they surface as ``InferenceError``.
    """

    def __init__(self, settings: AgentSettings, client: Anthropic | None = None):
        """Initialize Anthropic client.

        Args:
            settings: API key, model and request limits
            client: Preconfigured SDK client (mainly for tests)
        """
        self.settings = settings
        self.client = client or Anthropic(api_key=settings.api_key, max_retries=0)

    def create_message(
        self,
        messages: Sequence[LLMMessage],
        tools: list[dict[str, Any]] | None = None,
    ) -> AnthropicResponse:
        """Send the conversation and tool catalog, return the model's next message.

        Raises:
            InferenceError: On any transport or API failure
        """
        request_params: dict[str, Any] = {
            "model": self.settings.model,
            "max_tokens": self.settings.max_tokens,
            "messages": [message.model_dump() for message in messages],
        }
        if tools:
            request_params["tools"] = tools
        if self.settings.system_prompt:
            request_params["system"] = self.settings.system_prompt

        logger.debug(f"Creating message with {len(messages)} messages, {len(tools) if tools else 0} tools")

        try:
            response: Message = self.client.messages.create(**request_params)
        except APIError as e:
            raise InferenceError(f"error running inference: {e}") from e

        logger.debug(
            f"Response received - Stop reason: {response.stop_reason}, Content blocks: {len(response.content)}"
        )

        usage = LLMUsage()
        if response.usage:
            usage = LLMUsage(
                input_tokens=response.usage.input_tokens,
                output_tokens=response.usage.output_tokens,
            )

        return AnthropicResponse(
            content=self._convert_content_blocks(response.content),
            stop_reason=response.stop_reason,
            model=response.model,
            usage=usage,
        )

    def _convert_content_blocks(self, anthropic_content: Sequence[Any]) -> list[ContentBlock]:
        """Convert Anthropic content blocks to our ContentBlock types."""
        converted_blocks: list[ContentBlock] = []
        for block in anthropic_content:
            block_dict = block.model_dump() if hasattr(block, "model_dump") else dict(block)
            block_type = block_dict.get("type")

            try:
                if block_type == "text":
                    converted_blocks.append(TextBlock.model_validate(block_dict))
                elif block_type == "tool_use":
                    converted_blocks.append(ToolUseBlock.model_validate(block_dict))
                else:
                    logger.warning(f"Unknown content block type: {block_type}")
            except ValidationError as e:
                logger.error(f"Failed to convert content block: {e}, block: {block_dict}")

        return converted_blocks
