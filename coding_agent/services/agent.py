"""Turn loop that alternates between the user, the model and the tools."""

from collections.abc import Callable, Sequence
from typing import Any, Protocol

from coding_agent.clients.anthropic import AnthropicResponse
from coding_agent.models.conversation import Conversation
from coding_agent.models.events import AgentEvent, AssistantText, ToolCompleted, ToolRequested
from coding_agent.models.llm import LLMMessage, LLMUsage, TextBlock, ToolResultBlock, ToolUseBlock
from coding_agent.tools.registry import ToolsRegistry
from coding_agent.utils.logging import get_logger

logger = get_logger(__name__)

MessageHandler = Callable[[], str | None]
EventHandler = Callable[[AgentEvent], None]


class InferenceClient(Protocol):
    def create_message(
        self,
        messages: Sequence[LLMMessage],
        tools: list[dict[str, Any]] | None = None,
    ) -> AnthropicResponse: ...


class Agent:
    """Conversation owner and tool dispatcher.

    The loop has two phases. While awaiting user input it reads one line
    (``None`` ends the run). While awaiting the model it sends the whole
    conversation, shows text, and runs every requested tool in order. When
    the model asked for tools, their results go back as one user message and
    the model is called again straight away; otherwise the user is prompted.
    """

    def __init__(
        self,
        client: InferenceClient,
        get_user_message: MessageHandler,
        registry: ToolsRegistry,
        on_event: EventHandler | None = None,
    ):
        self.client = client
        self.get_user_message = get_user_message
        self.registry = registry
        self.on_event = on_event
        self.conversation = Conversation()
        self.usage = LLMUsage()

    def run(self) -> None:
        """Run until the input source is exhausted.

        Raises:
            InferenceError: If a model request fails
        """
        logger.info(f"Starting agent with tools: {', '.join(self.registry.tool_names())}")

        read_user_input = True
        while True:
            if read_user_input:
                user_input = self._next_user_input()
                if user_input is None:
                    break
                self.conversation.append(LLMMessage.user_text(user_input))

            message = self.run_inference()
            if not message.content:
                # The API rejects empty assistant turns in later requests
                logger.warning("Model returned no usable content blocks; waiting for user input")
                read_user_input = True
                continue
            self.conversation.append(message)

            tool_results = self.handle_response(message)
            if not tool_results:
                read_user_input = True
                continue

            read_user_input = False
            self.conversation.append(LLMMessage(role="user", content=list(tool_results)))

        logger.info(f"Agent finished after {len(self.conversation)} messages, {self.usage.total_tokens} tokens")

    def run_inference(self) -> LLMMessage:
        """Ask the model for its next message."""
        response = self.client.create_message(
            messages=self.conversation.messages,
            tools=self.registry.get_tool_schemas(),
        )
        self.usage.add(response.usage)
        return response.to_message()

    def handle_response(self, message: LLMMessage) -> list[ToolResultBlock]:
        """Show text blocks and run tool use blocks in the order given."""
        tool_results: list[ToolResultBlock] = []
        for block in message.content:
            if isinstance(block, TextBlock):
                self._emit(AssistantText(block.text))
            elif isinstance(block, ToolUseBlock):
                tool_results.append(self.execute_tool(block))
        return tool_results

    def execute_tool(self, block: ToolUseBlock) -> ToolResultBlock:
        logger.info(f"Tool requested: {block.name}({block.input})")
        self._emit(ToolRequested(tool_use_id=block.id, name=block.name, input=block.input))

        result = self.registry.dispatch(block)

        self._emit(
            ToolCompleted(
                tool_use_id=block.id,
                name=block.name,
                content=result.content,
                is_error=result.is_error,
            )
        )
        return result

    def _next_user_input(self) -> str | None:
        while True:
            user_input = self.get_user_message()
            if user_input is None or user_input.strip():
                return user_input

    def _emit(self, event: AgentEvent) -> None:
        if self.on_event is not None:
            self.on_event(event)
