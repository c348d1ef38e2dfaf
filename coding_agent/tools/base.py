"""Base types and definitions for tools."""

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel

from coding_agent.tools.schema import generate_schema

ToolHandler = Callable[[Any], str]


class ToolError(Exception):
    """A tool could not complete; the message is reported back to the model."""


@dataclass(frozen=True)
class ToolDefinition:
    """Definition of a tool available to the model."""

    name: str
    description: str
    input_model: type[BaseModel]
    handler: ToolHandler
    input_schema: dict[str, Any] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "input_schema", generate_schema(self.input_model))

    def parse_input(self, raw_input: dict[str, Any]) -> BaseModel:
        """Parse and validate tool input."""
        return self.input_model.model_validate(raw_input)

    def as_api_tool(self) -> dict[str, Any]:
        """Tool entry in the shape the Messages API expects."""
        return {
            "name": self.name,
            "description": self.description,
            "input_schema": self.input_schema,
        }
