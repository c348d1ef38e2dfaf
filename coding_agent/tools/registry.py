"""Tools registry and dispatch."""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError

from coding_agent.models.llm import ToolResultBlock, ToolUseBlock
from coding_agent.tools.base import ToolDefinition, ToolError
from coding_agent.tools.edit_file import create_edit_file_tool
from coding_agent.tools.list_files import create_list_files_tool
from coding_agent.tools.read_file import create_read_file_tool
from coding_agent.tools.search import create_search_tool
from coding_agent.utils.logging import get_logger

logger = get_logger(__name__)

TOOL_NOT_FOUND = "tool not found"


@dataclass(frozen=True)
class ToolOutcome:
    """Textual result of running a tool."""

    content: str
    is_error: bool = False


class ToolsRegistry:
    """Fixed set of tools available to the model.

    Built once at startup from an explicit list; tool names must be unique.
    """

    def __init__(self, tools: Iterable[ToolDefinition]):
        self._tools: tuple[ToolDefinition, ...] = tuple(tools)

        seen: set[str] = set()
        for tool in self._tools:
            if tool.name in seen:
                raise ValueError(f"Duplicate tool name: {tool.name}")
            seen.add(tool.name)

    def lookup(self, name: str) -> ToolDefinition | None:
        """Find a tool by name."""
        return next((tool for tool in self._tools if tool.name == name), None)

    def execute(self, tool: ToolDefinition, raw_input: dict[str, Any]) -> ToolOutcome:
        """Validate the input and run the tool. Failures become error outcomes."""
        try:
            params = tool.parse_input(raw_input)
        except ValidationError as e:
            logger.warning(f"Invalid input for tool '{tool.name}': {e}")
            return ToolOutcome(f"invalid input format for {tool.name}: {e}", is_error=True)

        try:
            result = tool.handler(params)
        except ToolError as e:
            logger.warning(f"Error executing tool '{tool.name}': {e}")
            return ToolOutcome(str(e), is_error=True)
        except Exception as e:
            logger.error(f"Tool '{tool.name}' failed unexpectedly: {e}", exc_info=True)
            return ToolOutcome(f"tool {tool.name}: {e}", is_error=True)

        return ToolOutcome(result)

    def dispatch(self, block: ToolUseBlock) -> ToolResultBlock:
        """Run the tool a tool use block asks for and wrap the outcome."""
        tool = self.lookup(block.name)
        if tool is None:
            logger.warning(f"Error: tool '{block.name}' not found")
            return ToolResultBlock(tool_use_id=block.id, content=TOOL_NOT_FOUND, is_error=True)

        outcome = self.execute(tool, block.input)
        logger.debug(f"Tool {block.name} -> {outcome.content[:100]}")
        return ToolResultBlock(tool_use_id=block.id, content=outcome.content, is_error=outcome.is_error)

    def get_tool_schemas(self) -> list[dict[str, Any]]:
        """Tool catalog sent with every inference request."""
        return [tool.as_api_tool() for tool in self._tools]

    def tool_names(self) -> list[str]:
        return [tool.name for tool in self._tools]

    def __contains__(self, name: object) -> bool:
        return any(tool.name == name for tool in self._tools)

    def __iter__(self) -> Iterator[ToolDefinition]:
        return iter(self._tools)

    def __len__(self) -> int:
        return len(self._tools)


def get_default_tools() -> list[ToolDefinition]:
    """The built-in tools, in the order they are offered to the model."""
    return [
        create_read_file_tool(),
        create_list_files_tool(),
        create_edit_file_tool(),
        create_search_tool(),
    ]
