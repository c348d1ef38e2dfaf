"""Events emitted by the agent loop for the presentation layer."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class AssistantText:
    """Text produced by the model."""

    text: str


@dataclass(frozen=True)
class ToolRequested:
    """The model asked for a tool to be run."""

    tool_use_id: str
    name: str
    input: dict[str, Any]


@dataclass(frozen=True)
class ToolCompleted:
    """A requested tool finished, successfully or not."""

    tool_use_id: str
    name: str
    content: str
    is_error: bool


AgentEvent = AssistantText | ToolRequested | ToolCompleted
