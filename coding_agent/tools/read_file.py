"""Read file tool."""

from pydantic import BaseModel, ConfigDict, Field

from coding_agent.tools.base import ToolDefinition, ToolError


class ReadFileInput(BaseModel):
    """Input schema for the read_file tool."""

    model_config = ConfigDict(extra="forbid")

    path: str = Field(..., min_length=1, description="The relative path of a file in the working directory.")


def read_file(params: ReadFileInput) -> str:
    """Return the full contents of a file."""
    try:
        with open(params.path, encoding="utf-8", newline="") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise ToolError(f"failed to read file '{params.path}': {e}") from e


def create_read_file_tool() -> ToolDefinition:
    return ToolDefinition(
        name="read_file",
        description=(
            "Read the contents of a given relative file path. Use this when you want to see what's inside a file. "
            "Do not use this with directory names."
        ),
        input_model=ReadFileInput,
        handler=read_file,
    )
