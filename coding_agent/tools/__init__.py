"""Tools the agent can run on the model's behalf."""

from coding_agent.tools.base import ToolDefinition, ToolError
from coding_agent.tools.registry import ToolOutcome, ToolsRegistry, get_default_tools

__all__ = ["ToolDefinition", "ToolError", "ToolOutcome", "ToolsRegistry", "get_default_tools"]
